"""
LearnHub client core

Entry point for the presentation layer. ``lifespan()`` configures logging,
builds a ``LearnClient`` for the persisted session and tears it down again.

    async with lifespan() as learn:
        decision = await learn.navigate("/course/abc/assignments")
        ...
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Dict, Optional

import httpx

from learnhub.config import get_settings
from learnhub.engines.catalog import WorkItemCatalog
from learnhub.engines.enrollment import EnrollmentResolution, EnrollmentResolver
from learnhub.engines.notifications import NotificationCenter, NotificationPoller
from learnhub.engines.progress import ProgressTracker
from learnhub.engines.status import (
    AssignmentStatus,
    QuizStatus,
    derive_assignment_status,
    derive_quiz_status,
)
from learnhub.kernel.access import RouteClass, RouteOutcome, RouteTable, decide_route_outcome
from learnhub.kernel.client import LearnApiClient
from learnhub.kernel.identity import Identity, PersistedSession, SessionStore, resolve_identity
from learnhub.logging_config import configure_logging, get_logger
from learnhub.orchestration import NavigationController, NavigationDecision
from learnhub.schemas.work_item import AssignmentItem, QuizItem

logger = get_logger(__name__)


class LearnClient:
    """
    Facade over the access & progression core for one viewer session.

    The session is passed in explicitly; nothing here reads ambient state.
    """

    def __init__(
        self,
        session: PersistedSession,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        routes: Optional[RouteTable] = None,
    ):
        self.session = session
        self.identity = resolve_identity(session)
        token = session.token if self.identity.authenticated else None
        self.api = LearnApiClient(token=token, transport=transport)
        self.enrollment_resolver = EnrollmentResolver(self.api)
        self.navigation = NavigationController(self.enrollment_resolver, routes)
        self.catalog = WorkItemCatalog(self.api, self.enrollment_resolver)
        self.poller = NotificationPoller(self.api)
        self.notifications = NotificationCenter(self.api, self.poller)
        self._trackers: Dict[str, ProgressTracker] = {}

    # Identity & access

    def resolve_identity(self) -> Identity:
        return self.identity

    def decide_route_outcome(self, route_class: RouteClass) -> RouteOutcome:
        return decide_route_outcome(route_class, self.identity)

    async def navigate(self, path: str) -> NavigationDecision:
        return await self.navigation.navigate(path, self.identity)

    async def resolve_enrollment(self, course_id: str) -> EnrollmentResolution:
        return await self.enrollment_resolver.resolve_enrollment(self.identity, course_id)

    # Status derivation

    @staticmethod
    def derive_assignment_status(item: AssignmentItem, now: Optional[datetime] = None) -> AssignmentStatus:
        return derive_assignment_status(item, now or datetime.now(timezone.utc))

    @staticmethod
    def derive_quiz_status(item: QuizItem) -> QuizStatus:
        return derive_quiz_status(item)

    # Course playback

    def open_course(self, course_id: str) -> ProgressTracker:
        """Start a playback session; any previous one for the course is closed."""
        previous = self._trackers.pop(course_id, None)
        if previous is not None:
            previous.close()
        tracker = ProgressTracker(self.api, course_id)
        self._trackers[course_id] = tracker
        return tracker

    def close_course(self, course_id: str) -> None:
        tracker = self._trackers.pop(course_id, None)
        if tracker is not None:
            tracker.close()

    # Notifications

    def start_polling(self) -> None:
        if self.identity.authenticated:
            self.poller.start()

    async def stop_polling(self) -> None:
        await self.poller.stop()

    async def aclose(self) -> None:
        await self.stop_polling()
        for course_id in list(self._trackers):
            self.close_course(course_id)
        await self.api.aclose()


@asynccontextmanager
async def lifespan(
    session: Optional[PersistedSession] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[LearnClient]:
    """
    Client lifespan handler.

    Configures logging, loads the persisted session when none is given, and
    closes every timer and connection on exit.
    """
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    client = LearnClient(session if session is not None else SessionStore().load(), transport=transport)
    try:
        yield client
    finally:
        logger.info("Shutting down...")
        await client.aclose()
