"""
Enrollment schemas.

The authority returns the course reference either populated
(``{"course": {"_id": "...", "title": "..."}}``) or as a bare id
(``{"course": "..."}``) depending on the endpoint. Both are collapsed into
``EnrollmentRecord.course_id`` as soon as the payload is parsed.
"""

from enum import Enum
from typing import Any, FrozenSet, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from learnhub.schemas.common import RemoteModel


class EnrollmentStatus(str, Enum):
    """Client-side enrollment state for one (viewer, course) pair."""
    UNKNOWN = "unknown"
    ENROLLED = "enrolled"
    NOT_ENROLLED = "not_enrolled"


def normalize_course_ref(value: Any) -> Optional[str]:
    """Collapse a nested or flat course reference into a plain id string."""
    if value is None:
        return None
    if isinstance(value, dict):
        for key in ("_id", "id", "courseId"):
            nested = value.get(key)
            if nested is not None:
                return str(nested)
        return None
    return str(value)


class EnrollmentRecord(RemoteModel):
    """One enrollment aggregate as held by the remote authority."""

    course_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("course", "courseId", "course_id")
    )
    status: Optional[str] = None  # active | completed | paused | dropped
    percent_complete: float = Field(
        default=0.0, validation_alias=AliasChoices("progress", "percentComplete", "percent_complete")
    )
    completed_topics: FrozenSet[str] = Field(
        default=frozenset(),
        validation_alias=AliasChoices("completedTopics", "completed_topics"),
    )

    @field_validator("course_id", mode="before")
    @classmethod
    def _course_ref(cls, value: Any) -> Optional[str]:
        return normalize_course_ref(value)

    @field_validator("percent_complete", mode="before")
    @classmethod
    def _percent(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("completed_topics", mode="before")
    @classmethod
    def _topics(cls, value: Any) -> Any:
        return frozenset() if value is None else frozenset(str(t) for t in value)


class CourseProgress(BaseModel):
    """Displayed progress for the course being played."""

    model_config = ConfigDict(frozen=True)

    completed_topics: FrozenSet[str] = frozenset()
    percent_complete: float = 0.0

    @classmethod
    def from_record(cls, record: EnrollmentRecord) -> "CourseProgress":
        return cls(
            completed_topics=record.completed_topics,
            percent_complete=record.percent_complete,
        )


class Enrollment(BaseModel):
    """Session-scoped enrollment state; discarded when its view is torn down."""

    course_id: str
    status: EnrollmentStatus = EnrollmentStatus.UNKNOWN
    progress: Optional[CourseProgress] = None
