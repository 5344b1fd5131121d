"""
Notification Poller - Keeps the unread badge in sync with the authority.

start() fetches immediately and then once per interval. Each tick spawns its
own fetch without waiting for the previous one; whichever fetch completes
last sets the badge. stop() cancels the timer and every in-flight fetch.
"""

import asyncio
from typing import Awaitable, Callable, Optional, Set

from learnhub.config import get_settings
from learnhub.kernel.client import ApiError, LearnApiClient
from learnhub.logging_config import get_logger
from learnhub.schemas.notification import NotificationBadge

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class NotificationPoller:
    """Explicit start/stop handle around the unread-count polling loop."""

    def __init__(
        self,
        client: LearnApiClient,
        interval: Optional[float] = None,
        sleep: SleepFn = asyncio.sleep,
    ):
        self.client = client
        self.interval = interval if interval is not None else get_settings().notification_poll_interval_seconds
        self.badge = NotificationBadge()
        self._sleep = sleep
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def active(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def unread_count(self) -> int:
        return self.badge.unread_count

    def start(self) -> None:
        """Begin polling. Calling start on an active poller is a no-op."""
        if self.active:
            return
        self._spawn_fetch()
        self._timer = asyncio.create_task(self._tick_forever(), name="notification-poller")
        logger.debug("Notification polling started", extra={"interval": self.interval})

    async def stop(self) -> None:
        """Cancel the timer and in-flight fetches; nothing is fetched afterwards."""
        tasks = list(self._in_flight)
        if self._timer is not None:
            tasks.append(self._timer)
            self._timer = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()
        logger.debug("Notification polling stopped")

    async def refresh_now(self) -> NotificationBadge:
        """
        Fetch the count right away (e.g. after marking notifications read).

        A stopped poller fetches nothing and returns the badge it holds. The
        fetch is tracked like a tick, so stop() cancels it too.
        """
        if not self.active:
            return self.badge
        task = self._spawn_fetch()
        await asyncio.wait({task})
        return self.badge

    async def _tick_forever(self) -> None:
        while True:
            await self._sleep(self.interval)
            self._spawn_fetch()

    def _spawn_fetch(self) -> asyncio.Task:
        task = asyncio.create_task(self._fetch_once())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _fetch_once(self) -> None:
        try:
            count = await self.client.get_unread_count()
        except ApiError as exc:
            # Badge keeps its last value
            logger.debug("Failed to fetch unread count", extra={"error": exc.message})
            return
        self.badge = NotificationBadge(unread_count=count)
