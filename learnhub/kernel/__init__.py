"""
Kernel Layer

Foundational pieces every view depends on:
- Identity Core (viewer identity and role from the persisted session)
- Access Gate (route classes, allow-or-redirect decisions)
- Authority Client (the only code that talks to the remote authority)

Invariants:
- The persisted session is read, never written
- A corrupt session resolves to the anonymous viewer; it never raises
- Every remote failure surfaces as ApiError
"""

from learnhub.kernel.identity import Identity, Role, SessionStore, resolve_identity
from learnhub.kernel.access import RouteClass, RouteOutcome, RouteTable, decide_route_outcome
from learnhub.kernel.client import ApiError, LearnApiClient

__all__ = [
    # Identity
    "Identity",
    "Role",
    "SessionStore",
    "resolve_identity",
    # Access
    "RouteClass",
    "RouteOutcome",
    "RouteTable",
    "decide_route_outcome",
    # Client
    "ApiError",
    "LearnApiClient",
]
