"""
Quiz status derivation and the timed-attempt clock.
"""

import math
from datetime import datetime
from enum import Enum

from learnhub.engines.status.assignment_status import as_utc
from learnhub.schemas.work_item import QuizItem


class QuizStatus(str, Enum):
    NOT_ATTEMPTED = "not_attempted"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


def derive_quiz_status(item: QuizItem) -> QuizStatus:
    """
    Passed/failed from the best recorded score.

    ``can_attempt`` is not consulted: attempt availability is whatever the
    authority reports.
    """
    if item.attempts == 0:
        return QuizStatus.NOT_ATTEMPTED
    if item.best_score is not None and item.best_score >= item.passing_score:
        return QuizStatus.PASSED
    return QuizStatus.FAILED


def format_attempts(attempts: int, max_attempts: int) -> str:
    """'2 / 3', or '2 / ∞' when attempts are unlimited (max 0)."""
    limit = "∞" if max_attempts == 0 else str(max_attempts)
    return f"{attempts} / {limit}"


def quiz_seconds_remaining(started_at: datetime, duration_minutes: int, now: datetime) -> int:
    """Seconds left on a timed attempt (may be negative)."""
    elapsed = math.floor((as_utc(now) - as_utc(started_at)).total_seconds())
    return duration_minutes * 60 - elapsed


def quiz_time_expired(started_at: datetime, duration_minutes: int, now: datetime) -> bool:
    """True once the attempt should be auto-submitted."""
    return quiz_seconds_remaining(started_at, duration_minutes, now) <= 0
