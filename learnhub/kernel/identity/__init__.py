"""
Identity Core - Viewer identity and role from the persisted session.
"""

from learnhub.kernel.identity.session import PersistedSession, SessionStore
from learnhub.kernel.identity.identity_service import (
    ADMIN_ROLE_TAG,
    ANONYMOUS,
    Identity,
    Role,
    normalize_role,
    resolve_identity,
)

__all__ = [
    "PersistedSession",
    "SessionStore",
    "ADMIN_ROLE_TAG",
    "ANONYMOUS",
    "Identity",
    "Role",
    "normalize_role",
    "resolve_identity",
]
