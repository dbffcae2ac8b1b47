from __future__ import annotations

from .api_models import ResponseParameters

UNDEFINED_ERROR = "undefined error"


class TelegramError(Exception):
    pass


class TransportError(TelegramError):
    """The call never produced a readable envelope."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(f"{method}: {message}")
        self.method = method


class TransportTimeout(TransportError):
    def __init__(self, method: str, timeout_s: float) -> None:
        super().__init__(method, f"timed out after {timeout_s:g}s")
        self.timeout_s = timeout_s


class RemoteError(TelegramError):
    """The API answered with ``ok: false``."""

    def __init__(
        self,
        http_status: int,
        description: str | None,
        *,
        error_code: int | None = None,
        parameters: ResponseParameters | None = None,
    ) -> None:
        description = description or UNDEFINED_ERROR
        super().__init__(description)
        self.http_status = http_status
        self.description = description
        self.error_code = error_code
        self.parameters = parameters

    @property
    def retry_after(self) -> int | None:
        if self.parameters is None:
            return None
        return self.parameters.retry_after


class DecodeError(TelegramError):
    """The envelope succeeded but ``result`` did not fit the expected shape."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(f"{method}: {message}")
        self.method = method
