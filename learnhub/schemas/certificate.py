"""
Certificate schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from learnhub.schemas.common import RemoteModel


class CertificateItem(RemoteModel):
    """A certificate issued to the viewer."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    certificate_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("certificateId", "certificate_id")
    )
    course_title: str = Field(default="", validation_alias=AliasChoices("courseTitle", "course", "course_title"))
    status: str = "active"  # active | expired | revoked
    final_score: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("finalScore", "final_score")
    )
    grade: Optional[str] = None
    issued_at: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("issuedAt", "issued_at"))

    @field_validator("course_title", mode="before")
    @classmethod
    def _course_title(cls, value):
        # populated course reference
        if isinstance(value, dict):
            return value.get("title", "")
        return value or ""
