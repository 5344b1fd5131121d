"""
Notification Center - List and manage the viewer's notifications.

While polling is active, every successful mutation is followed by an
immediate badge refresh through the poller instead of waiting for the next
tick. Once the poller is stopped no refresh is fetched.
"""

from typing import Awaitable, Callable

from learnhub.engines.catalog.views import ListView
from learnhub.engines.notifications.notification_poller import NotificationPoller
from learnhub.kernel.client import ApiError, LearnApiClient
from learnhub.logging_config import get_logger
from learnhub.schemas.notification import NotificationFilter, NotificationItem

logger = get_logger(__name__)


class NotificationCenter:
    """Notification list plus read/delete actions."""

    def __init__(self, client: LearnApiClient, poller: NotificationPoller):
        self.client = client
        self.poller = poller

    async def load(
        self,
        read_filter: NotificationFilter = NotificationFilter.ALL,
    ) -> ListView[NotificationItem]:
        try:
            items = await self.client.list_notifications(read_filter)
        except ApiError as exc:
            logger.warning("Failed to load notifications", extra={"error": exc.message})
            return ListView.failed("notifications")
        return ListView.loaded(items)

    async def mark_read(self, notification_id: str) -> bool:
        return await self._mutate(
            "mark notification as read",
            lambda: self.client.mark_notification_read(notification_id),
        )

    async def mark_all_read(self) -> bool:
        return await self._mutate("mark all as read", self.client.mark_all_notifications_read)

    async def delete(self, notification_id: str) -> bool:
        return await self._mutate(
            "delete notification",
            lambda: self.client.delete_notification(notification_id),
        )

    async def clear_read(self) -> bool:
        return await self._mutate("clear notifications", self.client.clear_read_notifications)

    async def _mutate(self, action: str, call: Callable[[], Awaitable[None]]) -> bool:
        try:
            await call()
        except ApiError as exc:
            logger.warning("Failed to %s", action, extra={"error": exc.message})
            return False
        await self.poller.refresh_now()
        return True
