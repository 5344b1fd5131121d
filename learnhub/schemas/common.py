"""
Common schema types shared by every remote payload.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class RemoteModel(BaseModel):
    """Base for payloads sent by the remote authority (camelCase, extra fields ignored)."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ApiEnvelope(BaseModel):
    """Standard response envelope returned by the remote authority."""

    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: Optional[str] = None
    data: Optional[Any] = None
