from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol, TypeVar

from api.errors import ClientDisconnectedError

T = TypeVar("T")
logger = logging.getLogger(__name__)

DISCONNECT_POLL_SECONDS = 0.1


class DisconnectAware(Protocol):
    async def is_disconnected(self) -> bool: ...


async def _wait_for_disconnect(request: DisconnectAware, poll_seconds: float) -> None:
    while not await request.is_disconnected():
        await asyncio.sleep(poll_seconds)


async def run_until_disconnect(
    request: DisconnectAware,
    operation: Callable[[], Awaitable[T]],
    *,
    enabled: bool = True,
    poll_seconds: float = DISCONNECT_POLL_SECONDS,
) -> T:
    """Await ``operation`` and cancel it if the inbound client goes away first.

    The outbound call keeps its own timeout; this only stops work nobody is
    waiting for any more.
    """
    if not enabled:
        return await operation()

    work = asyncio.ensure_future(operation())
    watcher = asyncio.ensure_future(_wait_for_disconnect(request, poll_seconds))
    try:
        done, _ = await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
        if work in done:
            return work.result()
        if watcher.exception() is not None:
            logger.warning("disconnect_watch_failed", extra={"component": "api"}, exc_info=watcher.exception())
            return await work
    finally:
        watcher.cancel()
        if not work.done():
            work.cancel()

    logger.info("outbound_call_cancelled", extra={"component": "api"})
    raise ClientDisconnectedError()
