from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from ..constants import DEFAULT_BACKOFF_S, DEFAULT_POLL_TIMEOUT_S
from ..logging import get_logger
from .api_models import Message, Update, User, WebhookInfo
from .caller import Caller
from .poller import PollSession, UpdatePoller
from .requests import (
    AnswerCallbackQuery,
    AnswerInlineQuery,
    DeleteMessage,
    GetUpdates,
    SendRequest,
    SetWebhook,
)

if TYPE_CHECKING:
    from ..settings import TelepollSettings

logger = get_logger(__name__)


class Bot:
    """High level Bot API client.

    Build one with :meth:`connect` so the token is checked with ``getMe``
    before anything else runs.
    """

    def __init__(
        self,
        caller: Caller,
        *,
        backoff_s: float = DEFAULT_BACKOFF_S,
        default_poll_timeout_s: int = DEFAULT_POLL_TIMEOUT_S,
    ) -> None:
        if default_poll_timeout_s <= 0:
            raise ValueError("default_poll_timeout_s must be positive")
        self._caller = caller
        self.backoff_s = backoff_s
        self.default_poll_timeout_s = default_poll_timeout_s
        self.self_user: User | None = None

    @classmethod
    async def connect(
        cls,
        token: str | None = None,
        *,
        caller: Caller | None = None,
        backoff_s: float = DEFAULT_BACKOFF_S,
        default_poll_timeout_s: int = DEFAULT_POLL_TIMEOUT_S,
    ) -> Bot:
        if caller is None:
            if not token:
                raise ValueError("Telegram token is empty")
            caller = Caller(token)
        elif token is not None:
            raise ValueError("Provide either token or caller, not both.")
        try:
            bot = cls(
                caller,
                backoff_s=backoff_s,
                default_poll_timeout_s=default_poll_timeout_s,
            )
            bot.self_user = await bot.get_me()
        except Exception:
            await caller.aclose()
            raise
        logger.info(
            "bot.connected",
            bot_id=bot.self_user.id,
            username=bot.self_user.username,
        )
        return bot

    @classmethod
    async def from_settings(cls, settings: TelepollSettings) -> Bot:
        caller = Caller(
            settings.bot_token,
            endpoint=settings.endpoint,
            call_timeout_s=settings.call_timeout_s,
            poll_timeout_s=settings.poll_timeout_s,
        )
        # polling.timeout belongs on the request; an unset one still gets the
        # poller default
        return await cls.connect(caller=caller, backoff_s=settings.backoff_s)

    async def aclose(self) -> None:
        await self._caller.aclose()

    async def __aenter__(self) -> Bot:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def get_me(self) -> User:
        return await self._caller.call("getMe", None, User)

    async def get_updates(self, request: GetUpdates) -> list[Update]:
        """Fetch one batch. Use :meth:`poll_updates` to keep polling."""
        return await self._caller.poll("getUpdates", request, list[Update])

    @asynccontextmanager
    async def poll_updates(
        self,
        request: GetUpdates,
        *,
        update_buffer: int = 0,
        error_buffer: int = 0,
    ) -> AsyncIterator[PollSession]:
        poller = UpdatePoller(
            self,
            backoff_s=self.backoff_s,
            default_timeout_s=self.default_poll_timeout_s,
            update_buffer=update_buffer,
            error_buffer=error_buffer,
        )
        async with poller.session(request) as session:
            yield session

    async def set_webhook(self, request: SetWebhook) -> bool:
        return await self._caller.call("setWebhook", request, bool)

    async def delete_webhook(self) -> bool:
        return await self._caller.call("deleteWebhook", None, bool)

    async def get_webhook_info(self) -> WebhookInfo:
        return await self._caller.call("getWebhookInfo", None, WebhookInfo)

    async def send(self, request: SendRequest) -> Message:
        return await self._caller.call(request.method, request, Message)

    async def answer_callback_query(self, request: AnswerCallbackQuery) -> bool:
        return await self._caller.call("answerCallbackQuery", request, bool)

    async def delete_message(self, request: DeleteMessage) -> bool:
        return await self._caller.call("deleteMessage", request, bool)

    async def answer_inline_query(self, request: AnswerInlineQuery) -> bool:
        return await self._caller.call("answerInlineQuery", request, bool)
