"""
Notification Engine - Unread badge polling and notification actions.
"""

from learnhub.engines.notifications.notification_poller import NotificationPoller
from learnhub.engines.notifications.notification_center import NotificationCenter

__all__ = [
    "NotificationPoller",
    "NotificationCenter",
]
