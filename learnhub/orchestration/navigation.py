"""
Navigation controller - the per-navigation control flow.

1. Match the path against the route table (unmatched -> fallback redirect)
2. Admit or redirect by route class (terminal on redirect)
3. Follow alias routes (course root -> its modules view)
4. For course-scoped, non-playback routes, resolve enrollment so the view
   knows whether mutating actions are enabled

Course playback routes gate themselves through the progress tracker, which
reads enrollment from the course payload.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from learnhub.engines.enrollment import EnrollmentResolution, EnrollmentResolver
from learnhub.kernel.access import (
    RouteMatch,
    RouteOutcome,
    RouteTable,
    decide_route_outcome,
    decide_unmatched,
)
from learnhub.kernel.identity import Identity
from learnhub.logging_config import get_logger, navigation_id_var

logger = get_logger(__name__)


@dataclass(frozen=True)
class NavigationDecision:
    """Everything the presentation layer needs to act on one navigation."""
    path: str
    outcome: RouteOutcome
    match: Optional[RouteMatch] = None
    enrollment: Optional[EnrollmentResolution] = None

    @property
    def starts_playback(self) -> bool:
        return self.outcome.allowed and self.match is not None and self.match.route.playback


class NavigationController:
    """Runs the access gate, then enrollment resolution, for each navigation."""

    def __init__(
        self,
        resolver: Optional[EnrollmentResolver] = None,
        routes: Optional[RouteTable] = None,
    ):
        self.resolver = resolver
        self.routes = routes or RouteTable()

    async def navigate(self, path: str, identity: Identity) -> NavigationDecision:
        """Decide what happens when ``identity`` navigates to ``path``."""
        token = navigation_id_var.set(uuid.uuid4().hex[:12])
        try:
            return await self._decide(path, identity)
        finally:
            navigation_id_var.reset(token)

    async def _decide(self, path: str, identity: Identity) -> NavigationDecision:
        match = self.routes.match(path)
        if match is None:
            outcome = decide_unmatched(identity)
            logger.info("Unmatched path", extra={"path": path, "redirect_to": outcome.target})
            return NavigationDecision(path=path, outcome=outcome)

        outcome = decide_route_outcome(match.route.route_class, identity)
        if not outcome.allowed:
            logger.info(
                "Navigation redirected",
                extra={"path": path, "route": match.route.name, "redirect_to": outcome.target},
            )
            return NavigationDecision(path=path, outcome=outcome, match=match)

        alias = match.redirect_target()
        if alias is not None:
            return NavigationDecision(path=path, outcome=RouteOutcome.redirect(alias), match=match)

        enrollment = None
        if (
            self.resolver is not None
            and match.route.content_scoped
            and not match.route.playback
            and match.course_id is not None
        ):
            enrollment = await self.resolver.resolve_enrollment(identity, match.course_id)

        return NavigationDecision(path=path, outcome=outcome, match=match, enrollment=enrollment)
