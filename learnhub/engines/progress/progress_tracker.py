"""
Progress Tracker - Course playback session state and topic completion.

One tracker lives for as long as a course-playback view is mounted. Displayed
progress is always the last successful server read; completion events never
mutate it optimistically.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from learnhub.kernel.client import ApiError, LearnApiClient
from learnhub.logging_config import get_logger
from learnhub.schemas.course import CourseTree
from learnhub.schemas.enrollment import CourseProgress, Enrollment, EnrollmentStatus

logger = get_logger(__name__)

COURSE_OVERVIEW_PATH = "/courses/{course_id}"
TOPIC_PATH = "/course/{course_id}/modules/{module_id}/{topic_id}"


class PlaybackState(str, Enum):
    """Outcome of entering a course-playback view."""
    READY = "ready"
    REDIRECT = "redirect"
    EMPTY = "empty"      # course has no modules yet
    FAILED = "failed"    # course could not be loaded; recoverable, no auto-retry
    CLOSED = "closed"    # view torn down while loading


class PlaybackEntry(BaseModel):
    """What the playback view should do after entry."""

    model_config = ConfigDict(frozen=True)

    state: PlaybackState
    course: Optional[CourseTree] = None
    redirect_to: Optional[str] = None
    module_id: Optional[str] = None
    topic_id: Optional[str] = None
    message: Optional[str] = None


def topic_path(course_id: str, module_id: str, topic_id: str) -> str:
    return TOPIC_PATH.format(course_id=course_id, module_id=module_id, topic_id=topic_id)


class ProgressTracker:
    """
    Tracks topic completion for one course while its playback view is active.

    Flow:
    - enter(): load course tree, gate on enrollment, pick the first topic for
      the bare course root, load the enrollment aggregate
    - on_topic_complete(): write completion, then re-read the aggregate
    - close(): ignore any response that arrives afterwards
    """

    def __init__(self, client: LearnApiClient, course_id: str):
        self.client = client
        self.course_id = course_id
        self.course: Optional[CourseTree] = None
        self.enrollment = Enrollment(course_id=course_id)
        self._closed = False

    @property
    def progress(self) -> Optional[CourseProgress]:
        """Last successfully read progress, or None if never read."""
        return self.enrollment.progress

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear down: responses still in flight will be discarded."""
        self._closed = True

    async def enter(
        self,
        module_id: Optional[str] = None,
        topic_id: Optional[str] = None,
    ) -> PlaybackEntry:
        """
        Enter the playback view for this course.

        Args:
            module_id: Module in the navigation target, if any
            topic_id: Topic in the navigation target, if any

        Returns:
            PlaybackEntry telling the view to render, redirect or show an
            empty/failed state.
        """
        try:
            course = await self.client.get_course(self.course_id)
        except ApiError as exc:
            if self._closed:
                return PlaybackEntry(state=PlaybackState.CLOSED)
            logger.error(
                "Failed to load course content",
                extra={"course_id": self.course_id, "error": exc.message},
            )
            return PlaybackEntry(state=PlaybackState.FAILED, message="Failed to load course content")

        if self._closed:
            return PlaybackEntry(state=PlaybackState.CLOSED)

        self.course = course

        if not course.is_enrolled:
            self.enrollment = Enrollment(course_id=self.course_id, status=EnrollmentStatus.NOT_ENROLLED)
            return PlaybackEntry(
                state=PlaybackState.REDIRECT,
                course=course,
                redirect_to=COURSE_OVERVIEW_PATH.format(course_id=self.course_id),
            )

        self.enrollment = Enrollment(course_id=self.course_id, status=EnrollmentStatus.ENROLLED)
        await self._refresh_enrollment()

        if self._closed:
            return PlaybackEntry(state=PlaybackState.CLOSED)

        if not course.modules:
            return PlaybackEntry(
                state=PlaybackState.EMPTY,
                course=course,
                message="This course doesn't have any modules yet.",
            )

        # Only the bare course root auto-navigates
        if module_id is None and topic_id is None:
            first = course.first_playable()
            if first is not None:
                first_module, first_topic = first
                return PlaybackEntry(
                    state=PlaybackState.REDIRECT,
                    course=course,
                    redirect_to=topic_path(self.course_id, first_module.id, first_topic.id),
                    module_id=first_module.id,
                    topic_id=first_topic.id,
                )

        return PlaybackEntry(
            state=PlaybackState.READY,
            course=course,
            module_id=module_id,
            topic_id=topic_id,
        )

    async def on_topic_complete(self, module_id: str, topic_id: str) -> Optional[CourseProgress]:
        """
        Record a topic as completed.

        Sends one completion write, then one re-read of the enrollment
        aggregate. Either failing is logged and leaves the displayed progress
        as it was.

        Returns:
            The progress to display after the event.
        """
        try:
            await self.client.update_progress(self.course_id, module_id, topic_id, completed=True)
        except ApiError as exc:
            logger.warning(
                "Failed to update progress",
                extra={
                    "course_id": self.course_id,
                    "module_id": module_id,
                    "topic_id": topic_id,
                    "error": exc.message,
                },
            )
            return self.progress

        await self._refresh_enrollment()
        return self.progress

    async def _refresh_enrollment(self) -> bool:
        """Re-read the enrollment aggregate; whichever read resolves last wins."""
        try:
            record = await self.client.get_my_enrollment(self.course_id)
        except ApiError as exc:
            logger.warning(
                "Failed to fetch enrollment",
                extra={"course_id": self.course_id, "error": exc.message},
            )
            return False

        if self._closed:
            return False

        self.enrollment = self.enrollment.model_copy(
            update={"progress": CourseProgress.from_record(record)}
        )
        return True
