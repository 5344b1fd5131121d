"""
Notification schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from learnhub.schemas.common import RemoteModel


class NotificationFilter(str, Enum):
    """Read-state filter for the notification list."""
    ALL = "all"
    READ = "read"
    UNREAD = "unread"


class NotificationItem(RemoteModel):
    """A notification addressed to the viewer."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    type: str = "system"
    priority: str = "medium"
    title: str = ""
    message: str = ""
    is_read: bool = Field(default=False, validation_alias=AliasChoices("isRead", "is_read"))
    link: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("createdAt", "created_at"))


class NotificationBadge(BaseModel):
    """Unread notification count shown in the navigation chrome."""

    unread_count: int = Field(default=0, ge=0)
