"""
Enrollment Resolver - May this viewer act on course-scoped content?

When the enrollment set cannot be fetched, the outcome is decided by an
``EnrollmentFailurePolicy``. The default is FAIL_OPEN: a learner is never
blocked by a transient authority error. Content-mutating calls made under a
fail-open result are still re-validated by the authority on write.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from learnhub.config import get_settings
from learnhub.kernel.client import ApiError, LearnApiClient
from learnhub.kernel.identity import Identity
from learnhub.logging_config import get_logger
from learnhub.schemas.enrollment import EnrollmentRecord, EnrollmentStatus

logger = get_logger(__name__)


class EnrollmentFailurePolicy(str, Enum):
    """Outcome to report when the enrollment fetch itself fails."""
    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"

    @property
    def status(self) -> EnrollmentStatus:
        if self == EnrollmentFailurePolicy.FAIL_OPEN:
            return EnrollmentStatus.ENROLLED
        return EnrollmentStatus.NOT_ENROLLED


DEFAULT_ENROLLMENT_FAILURE_POLICY = EnrollmentFailurePolicy.FAIL_OPEN


class EnrollmentResolution(BaseModel):
    """Result of resolving a (viewer, course) pair."""

    model_config = ConfigDict(frozen=True)

    course_id: str
    status: EnrollmentStatus
    record: Optional[EnrollmentRecord] = None
    # True when status came from the failure policy rather than the authority
    degraded: bool = False

    @property
    def enrolled(self) -> bool:
        return self.status == EnrollmentStatus.ENROLLED

    @property
    def can_mutate(self) -> bool:
        """Start quiz / submit assignment / practice actions."""
        return self.enrolled

    @property
    def can_browse(self) -> bool:
        """Read-only work-item lists stay visible either way."""
        return True


def find_enrollment(records: List[EnrollmentRecord], course_id: str) -> Optional[EnrollmentRecord]:
    """First record whose normalised course id equals ``course_id``."""
    for record in records:
        if record.course_id == course_id:
            return record
    return None


class EnrollmentResolver:
    """Resolves enrollment through the authority, applying the failure policy."""

    def __init__(
        self,
        client: LearnApiClient,
        failure_policy: Optional[EnrollmentFailurePolicy] = None,
    ):
        self.client = client
        if failure_policy is None:
            failure_policy = EnrollmentFailurePolicy(get_settings().enrollment_failure_policy)
        self.failure_policy = failure_policy

    async def resolve_enrollment(self, viewer: Identity, course_id: str) -> EnrollmentResolution:
        """
        Resolve whether ``viewer`` is enrolled in ``course_id``.

        Args:
            viewer: The resolved identity of the current viewer
            course_id: Course to check

        Returns:
            EnrollmentResolution with status ENROLLED or NOT_ENROLLED
        """
        if not viewer.authenticated:
            return EnrollmentResolution(course_id=course_id, status=EnrollmentStatus.NOT_ENROLLED)

        try:
            records = await self.client.list_my_enrollments()
        except ApiError as exc:
            logger.warning(
                "Enrollment check failed; applying %s",
                self.failure_policy.value,
                extra={"course_id": course_id, "error": exc.message, "status_code": exc.status_code},
            )
            return EnrollmentResolution(
                course_id=course_id,
                status=self.failure_policy.status,
                degraded=True,
            )

        record = find_enrollment(records, course_id)
        if record is None:
            return EnrollmentResolution(course_id=course_id, status=EnrollmentStatus.NOT_ENROLLED)
        return EnrollmentResolution(course_id=course_id, status=EnrollmentStatus.ENROLLED, record=record)
