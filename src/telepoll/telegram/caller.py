from __future__ import annotations

from typing import Any, Literal, TypeVar

import anyio
import httpx
import msgspec

from ..constants import CALL_TIMEOUT_S, ENDPOINT_URL, POLL_CALL_TIMEOUT_S
from ..logging import get_logger
from .api_models import ResponseParameters
from .errors import DecodeError, RemoteError, TransportError, TransportTimeout

logger = get_logger(__name__)

T = TypeVar("T")

CallTimeout = Literal["standard", "long_poll"]


class Envelope(msgspec.Struct, forbid_unknown_fields=False):
    """Outer shape of every Bot API response.

    ``result`` stays raw until the call succeeds and the caller asks for a
    shape.
    """

    ok: bool
    result: msgspec.Raw = msgspec.field(default_factory=msgspec.Raw)
    description: str | None = None
    error_code: int | None = None
    parameters: ResponseParameters | None = None


_envelope_decoder = msgspec.json.Decoder(Envelope)


class Caller:
    """Runs one Bot API method per call over one of two HTTP clients.

    The standard client serves ordinary calls, the long-poll client serves
    ``getUpdates``. Neither retries; retry policy belongs to callers.
    """

    def __init__(
        self,
        token: str,
        *,
        endpoint: str = ENDPOINT_URL,
        call_timeout_s: float = CALL_TIMEOUT_S,
        poll_timeout_s: float = POLL_CALL_TIMEOUT_S,
        http_client: httpx.AsyncClient | None = None,
        poll_http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ValueError("Telegram token is empty")
        self._prefix = f"{endpoint}{token}/"
        self._budgets: dict[CallTimeout, float] = {
            "standard": call_timeout_s,
            "long_poll": poll_timeout_s,
        }
        self._http_client = http_client or httpx.AsyncClient(timeout=call_timeout_s)
        self._poll_http_client = poll_http_client or httpx.AsyncClient(
            timeout=poll_timeout_s
        )
        self._owns_http_client = http_client is None
        self._owns_poll_http_client = poll_http_client is None

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()
        if self._owns_poll_http_client:
            await self._poll_http_client.aclose()

    async def call(
        self,
        method: str,
        request: Any | None = None,
        response_type: type[T] | Any | None = None,
        *,
        timeout: CallTimeout = "standard",
    ) -> T | None:
        """Invoke ``method`` and decode its result into ``response_type``.

        A ``None`` request is sent as a bodiless GET, anything else as a JSON
        POST. Returns ``None`` when no response type is requested.
        """
        if not method:
            raise ValueError("method name is empty")
        client = self._http_client if timeout == "standard" else self._poll_http_client
        budget = self._budgets[timeout]
        url = f"{self._prefix}{method}"

        content: bytes | None = None
        headers: dict[str, str] | None = None
        if request is not None:
            try:
                content = msgspec.json.encode(request)
            except (msgspec.EncodeError, TypeError) as exc:
                raise TransportError(method, f"cannot encode request: {exc}") from exc
            headers = {"Content-Type": "application/json"}
        http_method = "GET" if content is None else "POST"

        logger.debug(
            "telegram.request",
            method=method,
            http_method=http_method,
            timeout=timeout,
            payload=request,
        )
        resp: httpx.Response | None = None
        with anyio.move_on_after(budget):
            try:
                resp = await client.request(
                    http_method, url, content=content, headers=headers
                )
            except httpx.TimeoutException as exc:
                logger.warning(
                    "telegram.timeout", method=method, timeout_s=budget, error=str(exc)
                )
                raise TransportTimeout(method, budget) from exc
            except httpx.HTTPError as exc:
                logger.error(
                    "telegram.network_error",
                    method=method,
                    url=url,
                    error=str(exc),
                    error_type=exc.__class__.__name__,
                )
                raise TransportError(method, str(exc)) from exc
        if resp is None:
            logger.warning("telegram.timeout", method=method, timeout_s=budget)
            raise TransportTimeout(method, budget)

        return self._handle_response(
            method=method, resp=resp, response_type=response_type
        )

    async def poll(
        self,
        method: str,
        request: Any | None = None,
        response_type: type[T] | Any | None = None,
    ) -> T | None:
        return await self.call(method, request, response_type, timeout="long_poll")

    def _handle_response(
        self,
        *,
        method: str,
        resp: httpx.Response,
        response_type: Any | None,
    ) -> Any | None:
        try:
            envelope = _envelope_decoder.decode(resp.content)
        except msgspec.DecodeError as exc:
            logger.error(
                "telegram.bad_response",
                method=method,
                status=resp.status_code,
                error=str(exc),
                body=resp.text,
            )
            raise TransportError(
                method, f"unreadable response (HTTP {resp.status_code}): {exc}"
            ) from exc

        if not envelope.ok:
            logger.error(
                "telegram.api_error",
                method=method,
                status=resp.status_code,
                error_code=envelope.error_code,
                description=envelope.description,
            )
            raise RemoteError(
                resp.status_code,
                envelope.description,
                error_code=envelope.error_code,
                parameters=envelope.parameters,
            )

        logger.debug("telegram.response", method=method, status=resp.status_code)
        if response_type is None:
            return None
        try:
            return msgspec.json.decode(envelope.result, type=response_type)
        except msgspec.DecodeError as exc:
            logger.error(
                "telegram.decode_error",
                method=method,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )
            raise DecodeError(method, str(exc)) from exc
