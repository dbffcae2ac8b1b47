from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx

from telepoll.telegram.caller import Caller

TOKEN = "123456:ABCdefGhIJKlmNoPQRsTUVwxyZ"


def envelope(result: Any = None, *, ok: bool = True, **extra: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"ok": ok, **extra}
    if result is not None:
        payload["result"] = result
    return payload


class Recorder:
    """httpx handler that answers from a queue and keeps every request."""

    def __init__(self, *responses: httpx.Response | Callable[..., Any]) -> None:
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._responses.pop(0)
        if callable(response) and not isinstance(response, httpx.Response):
            return response(request)
        return response

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


def make_caller(recorder: Recorder, **kwargs: Any) -> Caller:
    transport = httpx.MockTransport(recorder)
    return Caller(
        TOKEN,
        http_client=httpx.AsyncClient(transport=transport),
        poll_http_client=httpx.AsyncClient(transport=transport),
        **kwargs,
    )
