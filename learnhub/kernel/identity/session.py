"""
Persisted session access.

The sign-in flow owns the session file and is the only writer. It stores the
same two keys the browser client kept in local storage: ``token`` (opaque
string) and ``user`` (a JSON-encoded user object, or the decoded object).
"""

import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from learnhub.config import get_settings
from learnhub.logging_config import get_logger

logger = get_logger(__name__)


class PersistedSession(BaseModel):
    """Raw persisted session, exactly as stored. Nothing here is trusted yet."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    token: Optional[str] = None
    user: Union[str, dict, None] = None


class SessionStore:
    """Read-only view over the persisted session file."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or get_settings().session_file)

    def load(self) -> PersistedSession:
        """
        Load the persisted session.

        A missing, unreadable or malformed file yields an empty session; the
        caller then resolves an anonymous identity.
        """
        try:
            raw: Any = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return PersistedSession()
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session file", extra={"path": str(self.path), "error": str(exc)})
            return PersistedSession()

        if not isinstance(raw, dict):
            return PersistedSession()

        token = raw.get("token")
        user = raw.get("user")
        return PersistedSession(
            token=token if isinstance(token, str) else None,
            # Keep the user value as-is; a bad shape is rejected at identity resolution
            user=user if isinstance(user, (str, dict)) or user is None else json.dumps(user),
        )
