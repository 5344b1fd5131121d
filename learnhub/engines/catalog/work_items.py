"""
Work-item list views: assignments, quizzes and certificates.

Course-scoped lists fetch the items and the viewer's enrollment together.
Lists stay browsable when the viewer is not enrolled; only the mutating
actions (submit, start) are switched off.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, TypeVar

from learnhub.engines.catalog.views import ListView, ViewState
from learnhub.engines.enrollment import EnrollmentResolution, EnrollmentResolver
from learnhub.engines.status import (
    AssignmentStatus,
    CertificateStanding,
    GradeTier,
    QuizStatus,
    can_submit_assignment,
    certificate_grade_tier,
    certificate_standing,
    days_remaining,
    derive_assignment_status,
    derive_quiz_status,
    format_attempts,
    format_days_remaining,
    format_percentage,
)
from learnhub.kernel.client import ApiError, LearnApiClient
from learnhub.kernel.identity import Identity
from learnhub.logging_config import get_logger
from learnhub.schemas.certificate import CertificateItem
from learnhub.schemas.work_item import AssignmentItem, QuizItem

logger = get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AssignmentRow:
    item: AssignmentItem
    status: AssignmentStatus
    due_label: str
    can_submit: bool


@dataclass(frozen=True)
class QuizRow:
    item: QuizItem
    status: QuizStatus
    attempts_label: str
    # Authority-reported availability, gated on enrollment
    can_start: bool


@dataclass(frozen=True)
class CertificateRow:
    item: CertificateItem
    tier: GradeTier
    standing: CertificateStanding
    score_label: Optional[str]


@dataclass
class CourseListView(ListView[T]):
    """A course-scoped list together with the enrollment it was gated on."""
    enrollment: Optional[EnrollmentResolution] = None

    @property
    def actions_enabled(self) -> bool:
        return self.enrollment is not None and self.enrollment.can_mutate

    @property
    def enrollment_notice(self) -> Optional[str]:
        if self.enrollment is not None and not self.enrollment.enrolled:
            return "You need to enroll in this course to take part."
        return None


class WorkItemCatalog:
    """Builds list views for the course work-item pages."""

    def __init__(
        self,
        client: LearnApiClient,
        resolver: EnrollmentResolver,
        clock: Clock = utc_now,
    ):
        self.client = client
        self.resolver = resolver
        self.clock = clock

    async def _fetch(self, what: str, call: Callable[[], Awaitable[List[T]]]) -> Optional[List[T]]:
        try:
            return await call()
        except ApiError as exc:
            logger.warning("Failed to load %s", what, extra={"error": exc.message, "status_code": exc.status_code})
            return None

    async def load_assignments(self, viewer: Identity, course_id: str) -> CourseListView[AssignmentRow]:
        items, enrollment = await asyncio.gather(
            self._fetch("assignments", lambda: self.client.list_assignments(course_id)),
            self.resolver.resolve_enrollment(viewer, course_id),
        )
        if items is None:
            return CourseListView(state=ViewState.FAILED, error="Failed to load assignments", enrollment=enrollment)

        now = self.clock()
        rows = [
            AssignmentRow(
                item=item,
                status=derive_assignment_status(item, now),
                due_label=format_days_remaining(days_remaining(item.due_date, now)),
                can_submit=enrollment.can_mutate and can_submit_assignment(item, now),
            )
            for item in items
        ]
        return CourseListView(state=ViewState.LOADED, rows=rows, enrollment=enrollment)

    async def load_quizzes(self, viewer: Identity, course_id: str) -> CourseListView[QuizRow]:
        items, enrollment = await asyncio.gather(
            self._fetch("quizzes", lambda: self.client.list_quizzes(course_id)),
            self.resolver.resolve_enrollment(viewer, course_id),
        )
        if items is None:
            return CourseListView(state=ViewState.FAILED, error="Failed to load quizzes", enrollment=enrollment)

        rows = [
            QuizRow(
                item=item,
                status=derive_quiz_status(item),
                attempts_label=format_attempts(item.attempts, item.max_attempts),
                can_start=enrollment.can_mutate and item.can_attempt,
            )
            for item in items
        ]
        return CourseListView(state=ViewState.LOADED, rows=rows, enrollment=enrollment)

    async def load_certificates(self) -> ListView[CertificateRow]:
        items = await self._fetch("certificates", self.client.list_my_certificates)
        if items is None:
            return ListView.failed("certificates")
        rows = [
            CertificateRow(
                item=item,
                tier=certificate_grade_tier(item.final_score),
                standing=certificate_standing(item.status),
                score_label=format_percentage(item.final_score) if item.final_score is not None else None,
            )
            for item in items
        ]
        return ListView.loaded(rows)
