"""
Identity resolution from a persisted session.

Resolution never raises: a corrupt session resolves to the anonymous viewer
so navigation keeps working.
"""

import json
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

from learnhub.kernel.identity.session import PersistedSession
from learnhub.logging_config import get_logger

logger = get_logger(__name__)

ADMIN_ROLE_TAG = "admin"


class Role(str, Enum):
    """Canonical viewer roles."""
    LEARNER = "learner"
    ADMIN = "admin"


class Identity(BaseModel):
    """Who the current viewer is, as far as the client can tell."""

    model_config = ConfigDict(frozen=True)

    authenticated: bool = False
    role: Optional[Role] = None
    user_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.authenticated and self.role == Role.ADMIN


ANONYMOUS = Identity()


class MalformedSessionError(ValueError):
    """The persisted user payload could not be interpreted."""


def normalize_role(user: Mapping[str, Any]) -> Role:
    """
    Map a stored user object to one canonical role.

    Stored users carry either ``role: "admin"`` or the older ``isAdmin: true``
    flag; both mean administrator.
    """
    if user.get("role") == ADMIN_ROLE_TAG or user.get("isAdmin") is True:
        return Role.ADMIN
    return Role.LEARNER


def _decode_user(raw_user: Union[str, Mapping[str, Any], None]) -> Optional[Mapping[str, Any]]:
    if raw_user is None:
        return None
    if isinstance(raw_user, str):
        try:
            decoded = json.loads(raw_user)
        except ValueError as exc:
            raise MalformedSessionError("user is not valid JSON") from exc
    else:
        decoded = raw_user
    if decoded is None:
        return None
    if not isinstance(decoded, Mapping):
        raise MalformedSessionError("user is not an object")
    return decoded


def resolve_identity(session: Union[PersistedSession, Mapping[str, Any], None]) -> Identity:
    """
    Resolve the viewer's identity from the persisted session.

    Args:
        session: The persisted session (model or raw mapping with
            ``token`` / ``user`` keys)

    Returns:
        Identity. Anonymous when the token is absent, regardless of any
        cached user, and whenever the session cannot be parsed.
    """
    if session is None:
        return ANONYMOUS

    try:
        if isinstance(session, PersistedSession):
            token, raw_user = session.token, session.user
        elif isinstance(session, Mapping):
            token, raw_user = session.get("token"), session.get("user")
        else:
            raise MalformedSessionError(f"unsupported session type {type(session).__name__}")

        if not token or not isinstance(token, str):
            return ANONYMOUS

        user = _decode_user(raw_user)
    except MalformedSessionError as exc:
        logger.warning("Treating malformed session as anonymous", extra={"reason": str(exc)})
        return ANONYMOUS

    if user is None:
        return Identity(authenticated=True, role=Role.LEARNER)

    user_id = user.get("id") or user.get("_id")
    return Identity(
        authenticated=True,
        role=normalize_role(user),
        user_id=str(user_id) if user_id is not None else None,
    )
