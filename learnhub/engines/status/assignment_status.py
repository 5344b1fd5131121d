"""
Assignment status derivation.

Precedence (first match wins):
1. graded submission  -> Graded(score, total)
2. pending submission -> PendingReview
3. now past due date  -> Overdue
4. otherwise          -> NotSubmitted
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from learnhub.schemas.work_item import AssignmentItem

ONE_DAY = timedelta(days=1)


class AssignmentStatusKind(str, Enum):
    GRADED = "graded"
    PENDING_REVIEW = "pending_review"
    OVERDUE = "overdue"
    NOT_SUBMITTED = "not_submitted"


@dataclass(frozen=True)
class AssignmentStatus:
    """Display status of one assignment for the current viewer."""
    kind: AssignmentStatusKind
    score: Optional[float] = None
    total_points: Optional[float] = None

    @property
    def label(self) -> str:
        if self.kind == AssignmentStatusKind.GRADED:
            return f"Graded: {_fmt_number(self.score)}/{_fmt_number(self.total_points)}"
        if self.kind == AssignmentStatusKind.PENDING_REVIEW:
            return "Pending Review"
        if self.kind == AssignmentStatusKind.OVERDUE:
            return "Overdue"
        return "Not Submitted"


class SubmissionBadge(str, Enum):
    """Badge for a submission record on the assignment detail view."""
    PENDING = "pending"
    GRADED = "graded"
    LATE = "late"
    RESUBMIT = "resubmit"

    @property
    def label(self) -> str:
        return _BADGE_LABELS[self]


_BADGE_LABELS = {
    SubmissionBadge.PENDING: "Pending Review",
    SubmissionBadge.GRADED: "Graded",
    SubmissionBadge.LATE: "Late Submission",
    SubmissionBadge.RESUBMIT: "Resubmit Required",
}


def _fmt_number(value: Optional[float]) -> str:
    if value is None:
        return "-"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so remote and local clocks compare."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_past_due(item: AssignmentItem, now: datetime) -> bool:
    return as_utc(now) > as_utc(item.due_date)


def derive_assignment_status(item: AssignmentItem, now: datetime) -> AssignmentStatus:
    """Derive the list-view status of an assignment at time ``now``."""
    submission = item.submission
    if submission is not None:
        if submission.status == "graded":
            return AssignmentStatus(
                kind=AssignmentStatusKind.GRADED,
                score=submission.score,
                total_points=item.total_points,
            )
        if submission.status == "pending":
            return AssignmentStatus(kind=AssignmentStatusKind.PENDING_REVIEW)

    if is_past_due(item, now):
        return AssignmentStatus(kind=AssignmentStatusKind.OVERDUE)
    return AssignmentStatus(kind=AssignmentStatusKind.NOT_SUBMITTED)


def days_remaining(due: datetime, now: datetime) -> int:
    """Whole days until ``due``, rounded up; negative once overdue."""
    return math.ceil((as_utc(due) - as_utc(now)) / ONE_DAY)


def format_days_remaining(days: int) -> str:
    if days < 0:
        return f"{abs(days)} days overdue"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    return f"{days} days remaining"


def can_submit_assignment(item: AssignmentItem, now: datetime) -> bool:
    """
    Whether the submit action should be offered.

    Attempt limits are the authority's call: when it reports ``canSubmit``
    that value is honoured, but exhaustion is never computed here.
    """
    if item.can_submit is False:
        return False
    if not item.allow_late_submissions and is_past_due(item, now):
        return False
    if not item.allow_resubmission and item.submission is not None:
        return False
    return True


def submission_badge(status: Optional[str]) -> SubmissionBadge:
    """Map a raw submission status to its badge; unknown values read as pending."""
    try:
        return SubmissionBadge(status)
    except ValueError:
        return SubmissionBadge.PENDING
