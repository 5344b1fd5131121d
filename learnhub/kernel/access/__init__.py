"""
Access Gate - Route classes and allow-or-redirect decisions.
"""

from learnhub.kernel.access.route_gate import (
    RouteAction,
    RouteClass,
    RouteOutcome,
    decide_route_outcome,
    decide_unmatched,
)
from learnhub.kernel.access.route_table import (
    DEFAULT_ROUTES,
    RouteDefinition,
    RouteMatch,
    RouteTable,
)

__all__ = [
    "RouteAction",
    "RouteClass",
    "RouteOutcome",
    "decide_route_outcome",
    "decide_unmatched",
    "DEFAULT_ROUTES",
    "RouteDefinition",
    "RouteMatch",
    "RouteTable",
]
