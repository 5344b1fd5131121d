"""
Work item snapshots (assignments and quizzes) as listed per course.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, Field

from learnhub.schemas.common import RemoteModel


class Submission(RemoteModel):
    """The viewer's latest submission for an assignment."""

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    status: str = "pending"  # pending | graded | late | resubmit | submitted
    score: Optional[float] = None
    submitted_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("submittedAt", "submitted_at")
    )


class AssignmentItem(RemoteModel):
    """Assignment snapshot with the viewer's submission, if any."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    due_date: datetime = Field(validation_alias=AliasChoices("dueDate", "due_date"))
    total_points: float = Field(default=100, validation_alias=AliasChoices("totalPoints", "total_points"))
    allow_late_submissions: bool = Field(
        default=False, validation_alias=AliasChoices("allowLateSubmissions", "allow_late_submissions")
    )
    late_submission_penalty: float = Field(
        default=0, validation_alias=AliasChoices("lateSubmissionPenalty", "late_submission_penalty")
    )
    allow_resubmission: bool = Field(
        default=False, validation_alias=AliasChoices("allowResubmission", "allow_resubmission")
    )
    max_attempts: int = Field(default=0, validation_alias=AliasChoices("maxAttempts", "max_attempts"))
    # Reported by the authority; never recomputed from attempt counts here
    can_submit: Optional[bool] = Field(default=None, validation_alias=AliasChoices("canSubmit", "can_submit"))
    submission: Optional[Submission] = Field(
        default=None, validation_alias=AliasChoices("submission", "latestSubmission")
    )


class QuizItem(RemoteModel):
    """Quiz snapshot with the viewer's attempt summary."""

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    duration: int = 0  # minutes
    passing_score: float = Field(default=70, validation_alias=AliasChoices("passingScore", "passing_score"))
    attempts: int = 0
    max_attempts: int = Field(default=0, validation_alias=AliasChoices("maxAttempts", "max_attempts"))
    can_attempt: bool = Field(default=True, validation_alias=AliasChoices("canAttempt", "can_attempt"))
    best_score: Optional[float] = Field(default=None, validation_alias=AliasChoices("bestScore", "best_score"))
