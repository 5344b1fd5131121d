"""
Declared client routes and their access tiers.

Patterns use ``:name`` for a path parameter and a trailing ``/*`` for
"this path and anything below it". The table is data; the presentation
layer may supply its own.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Sequence

from learnhub.kernel.access.route_gate import RouteClass

_PARAM_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def _compile(pattern: str) -> Pattern[str]:
    wildcard = pattern.endswith("/*")
    body = pattern[:-2] if wildcard else pattern
    regex = ""
    last = 0
    for m in _PARAM_RE.finditer(body):
        regex += re.escape(body[last:m.start()]) + f"(?P<{m.group(1)}>[^/]+)"
        last = m.end()
    regex += re.escape(body[last:])
    if wildcard:
        regex += r"(?:/.*)?"
    return re.compile(f"^{regex}/?$")


@dataclass(frozen=True)
class RouteDefinition:
    """One navigable target."""
    name: str
    pattern: str
    route_class: RouteClass
    # Course-scoped content whose mutating actions depend on enrollment
    content_scoped: bool = False
    # Course playback root or topic; handled by the progress tracker
    playback: bool = False
    # Alias route: redirect template using the same path parameters
    redirect_to: Optional[str] = None
    regex: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", _compile(self.pattern))


@dataclass(frozen=True)
class RouteMatch:
    """A matched route and its extracted path parameters."""
    route: RouteDefinition
    params: Dict[str, str]

    @property
    def course_id(self) -> Optional[str]:
        return self.params.get("courseId")

    def redirect_target(self) -> Optional[str]:
        if self.route.redirect_to is None:
            return None
        return self.route.redirect_to.format(**self.params)


DEFAULT_ROUTES: List[RouteDefinition] = [
    RouteDefinition("auth", "/auth", RouteClass.PUBLIC_ONLY),
    RouteDefinition("admin", "/admin/*", RouteClass.ADMIN_ONLY),
    RouteDefinition("home", "/", RouteClass.OPEN),
    RouteDefinition("homepage", "/homepage", RouteClass.OPEN),
    RouteDefinition("courses", "/courses", RouteClass.OPEN),
    RouteDefinition("course_detail", "/courses/:courseId", RouteClass.OPEN),
    RouteDefinition("about", "/about", RouteClass.OPEN),
    RouteDefinition("contact", "/contact", RouteClass.OPEN),
    RouteDefinition("learning_dashboard", "/learning-dashboard", RouteClass.PROTECTED),
    RouteDefinition(
        "course_topic", "/course/:courseId/modules/:moduleId/:topicId", RouteClass.PROTECTED,
        content_scoped=True, playback=True,
    ),
    RouteDefinition(
        "course_modules", "/course/:courseId/modules", RouteClass.PROTECTED,
        content_scoped=True, playback=True,
    ),
    RouteDefinition("discussions", "/course/:courseId/discussions", RouteClass.PROTECTED, content_scoped=True),
    RouteDefinition(
        "discussion", "/course/:courseId/discussion/:discussionId", RouteClass.PROTECTED, content_scoped=True,
    ),
    RouteDefinition("quizzes", "/course/:courseId/quizzes", RouteClass.PROTECTED, content_scoped=True),
    RouteDefinition("quiz", "/course/:courseId/quiz/:quizId", RouteClass.PROTECTED, content_scoped=True),
    RouteDefinition("assignments", "/course/:courseId/assignments", RouteClass.PROTECTED, content_scoped=True),
    RouteDefinition(
        "assignment", "/course/:courseId/assignment/:assignmentId", RouteClass.PROTECTED, content_scoped=True,
    ),
    RouteDefinition("practice", "/course/:courseId/practice", RouteClass.PROTECTED, content_scoped=True),
    RouteDefinition("reviews", "/course/:courseId/reviews", RouteClass.PROTECTED, content_scoped=True),
    RouteDefinition(
        "course_root", "/course/:courseId", RouteClass.OPEN, redirect_to="/course/{courseId}/modules",
    ),
    RouteDefinition("learn", "/learn/:courseId", RouteClass.PROTECTED, content_scoped=True, playback=True),
    RouteDefinition("my_certificates", "/my-certificates", RouteClass.PROTECTED),
    RouteDefinition("certificate", "/certificate/:certificateId", RouteClass.PROTECTED),
]


class RouteTable:
    """Ordered route lookup; the first matching definition wins."""

    def __init__(self, routes: Optional[Sequence[RouteDefinition]] = None):
        self.routes: List[RouteDefinition] = list(routes if routes is not None else DEFAULT_ROUTES)

    def match(self, path: str) -> Optional[RouteMatch]:
        """Match a path (query string and fragment ignored)."""
        clean = path.split("?", 1)[0].split("#", 1)[0] or "/"
        for route in self.routes:
            m = route.regex.match(clean)
            if m:
                return RouteMatch(route=route, params=m.groupdict())
        return None
