"""
Certificate grade tiers and standing.
"""

from enum import Enum
from typing import Optional

# Inclusive lower bounds, highest first
TIER_THRESHOLDS = (
    (90, "excellent"),
    (80, "good"),
    (70, "satisfactory"),
)


class GradeTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    SATISFACTORY = "satisfactory"
    NEEDS_IMPROVEMENT = "needs_improvement"


class CertificateStanding(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
    UNKNOWN = "unknown"


def certificate_grade_tier(score: Optional[float]) -> GradeTier:
    """Tier for a final score; no rounding before comparison."""
    if score is None:
        return GradeTier.NEEDS_IMPROVEMENT
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return GradeTier(tier)
    return GradeTier.NEEDS_IMPROVEMENT


def certificate_standing(status: Optional[str]) -> CertificateStanding:
    try:
        return CertificateStanding(status)
    except ValueError:
        return CertificateStanding.UNKNOWN


def format_percentage(value: float) -> str:
    """Display a percentage with one decimal place."""
    return f"{value:.1f}%"
