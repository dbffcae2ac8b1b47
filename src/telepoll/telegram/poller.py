from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Literal, Protocol

import anyio
from anyio.lowlevel import checkpoint
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from ..constants import DEFAULT_BACKOFF_S, DEFAULT_POLL_TIMEOUT_S
from ..logging import get_logger
from .api_models import Update
from .errors import TelegramError
from .requests import GetUpdates

logger = get_logger(__name__)

PollState = Literal["running", "stopped"]


class UpdateSource(Protocol):
    async def get_updates(self, request: GetUpdates) -> list[Update]: ...


@dataclass(slots=True)
class PollSession:
    """Handle on one running poll loop.

    ``updates`` and ``errors`` end when the loop stops. Both streams must be
    drained: with the default rendezvous buffers an unread error holds the
    loop just like an unread update.
    """

    request: GetUpdates
    updates: MemoryObjectReceiveStream[Update]
    errors: MemoryObjectReceiveStream[TelegramError]
    stop: anyio.Event = field(default_factory=anyio.Event)
    stopped: anyio.Event = field(default_factory=anyio.Event)

    @property
    def state(self) -> PollState:
        return "stopped" if self.stopped.is_set() else "running"

    def cancel(self) -> None:
        """Ask the loop to stop before its next call.

        A call already in flight runs to completion first.
        """
        self.stop.set()

    async def wait_stopped(self) -> None:
        await self.stopped.wait()


class UpdatePoller:
    """Turns repeated ``getUpdates`` calls into a stream of updates.

    Failed calls are reported on the error stream and retried after a fixed
    backoff, forever. Only cancellation ends a session.
    """

    def __init__(
        self,
        source: UpdateSource,
        *,
        backoff_s: float = DEFAULT_BACKOFF_S,
        default_timeout_s: int = DEFAULT_POLL_TIMEOUT_S,
        update_buffer: int = 0,
        error_buffer: int = 0,
        sleep: Callable[[float], Awaitable[None]] = anyio.sleep,
    ) -> None:
        if default_timeout_s <= 0:
            raise ValueError("default_timeout_s must be positive")
        self._source = source
        self.backoff_s = backoff_s
        self.default_timeout_s = default_timeout_s
        self.update_buffer = update_buffer
        self.error_buffer = error_buffer
        self._sleep = sleep

    def normalize(self, request: GetUpdates) -> None:
        # a zero timeout would turn long polling into a tight request loop
        if request.timeout <= 0:
            request.timeout = self.default_timeout_s

    async def run(
        self,
        request: GetUpdates,
        updates: MemoryObjectSendStream[Update],
        errors: MemoryObjectSendStream[TelegramError],
        stop: anyio.Event,
    ) -> None:
        """Poll until ``stop`` is set, then close both send streams."""
        logger.info("poller.started", offset=request.offset)
        async with updates, errors:
            try:
                while not stop.is_set():
                    self.normalize(request)
                    try:
                        batch = await self._source.get_updates(request)
                    except TelegramError as exc:
                        logger.warning(
                            "poller.get_updates.failed",
                            offset=request.offset,
                            error=str(exc),
                            error_type=exc.__class__.__name__,
                            backoff_s=self.backoff_s,
                        )
                        await errors.send(exc)
                        await self._sleep(self.backoff_s)
                        continue
                    logger.debug(
                        "poller.batch", offset=request.offset, count=len(batch)
                    )
                    if not batch:
                        await checkpoint()
                    for update in batch:
                        await updates.send(update)
                        if update.update_id >= request.offset:
                            request.offset = update.update_id + 1
            except (anyio.BrokenResourceError, anyio.ClosedResourceError):
                logger.info("poller.consumer_closed", offset=request.offset)
        logger.info("poller.stopped", offset=request.offset)

    @asynccontextmanager
    async def session(self, request: GetUpdates) -> AsyncIterator[PollSession]:
        """Run a poll loop in the background for the duration of the block.

        Leaving the block cancels the loop, closes the receiving ends, and
        waits for the loop to finish.
        """
        updates_send, updates_recv = anyio.create_memory_object_stream[Update](
            self.update_buffer
        )
        errors_send, errors_recv = anyio.create_memory_object_stream[TelegramError](
            self.error_buffer
        )
        session = PollSession(
            request=request, updates=updates_recv, errors=errors_recv
        )

        async def worker() -> None:
            try:
                await self.run(request, updates_send, errors_send, session.stop)
            finally:
                session.stopped.set()

        async with anyio.create_task_group() as tg:
            tg.start_soon(worker)
            try:
                yield session
            finally:
                session.cancel()
                updates_recv.close()
                errors_recv.close()
