"""
Orchestration - Per-navigation control flow.
"""

from learnhub.orchestration.navigation import NavigationController, NavigationDecision

__all__ = [
    "NavigationController",
    "NavigationDecision",
]
