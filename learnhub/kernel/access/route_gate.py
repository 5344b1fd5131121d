"""
Route admission decisions.

Evaluated once per navigation. A redirect is terminal for that navigation:
the caller must not render any part of the guarded view before acting on it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from learnhub.config import get_settings
from learnhub.kernel.identity import Identity


class RouteClass(str, Enum):
    """Declared access tier of a navigable target."""
    PUBLIC_ONLY = "public_only"  # sign-in / sign-up screens
    PROTECTED = "protected"
    ADMIN_ONLY = "admin_only"
    OPEN = "open"


class RouteAction(str, Enum):
    RENDER = "render"
    REDIRECT = "redirect"


class RouteOutcome(BaseModel):
    """Allow-or-redirect result of a navigation check."""

    model_config = ConfigDict(frozen=True)

    action: RouteAction
    target: Optional[str] = None

    @classmethod
    def render(cls) -> "RouteOutcome":
        return cls(action=RouteAction.RENDER)

    @classmethod
    def redirect(cls, target: str) -> "RouteOutcome":
        return cls(action=RouteAction.REDIRECT, target=target)

    @property
    def allowed(self) -> bool:
        return self.action == RouteAction.RENDER


def decide_route_outcome(route_class: RouteClass, identity: Identity) -> RouteOutcome:
    """
    Decide whether a viewer may render a route of the given class.

    | Route class | Authenticated | Admin | Outcome                   |
    |-------------|---------------|-------|---------------------------|
    | PublicOnly  | no            | -     | render                    |
    | PublicOnly  | yes           | yes   | redirect -> admin home    |
    | PublicOnly  | yes           | no    | redirect -> learner home  |
    | Protected   | no            | -     | redirect -> sign-in       |
    | Protected   | yes           | -     | render                    |
    | AdminOnly   | no / not admin| -     | redirect -> sign-in       |
    | AdminOnly   | yes           | yes   | render                    |
    | Open        | -             | -     | render                    |
    """
    settings = get_settings()

    if route_class == RouteClass.OPEN:
        return RouteOutcome.render()

    if route_class == RouteClass.PUBLIC_ONLY:
        if not identity.authenticated:
            return RouteOutcome.render()
        if identity.is_admin:
            return RouteOutcome.redirect(settings.admin_home_path)
        return RouteOutcome.redirect(settings.learner_home_path)

    if route_class == RouteClass.PROTECTED:
        if identity.authenticated:
            return RouteOutcome.render()
        return RouteOutcome.redirect(settings.sign_in_path)

    if route_class == RouteClass.ADMIN_ONLY:
        if identity.is_admin:
            return RouteOutcome.render()
        return RouteOutcome.redirect(settings.sign_in_path)

    raise ValueError(f"Unknown route class: {route_class!r}")


def decide_unmatched(identity: Identity) -> RouteOutcome:
    """Fallback for a path no route matches. There is no not-found view."""
    settings = get_settings()
    if identity.is_admin:
        return RouteOutcome.redirect(settings.admin_home_path)
    return RouteOutcome.redirect(settings.root_path)
