"""
Enrollment Engine - Course-scoped action gating.
"""

from learnhub.engines.enrollment.enrollment_resolver import (
    DEFAULT_ENROLLMENT_FAILURE_POLICY,
    EnrollmentFailurePolicy,
    EnrollmentResolution,
    EnrollmentResolver,
    find_enrollment,
)

__all__ = [
    "DEFAULT_ENROLLMENT_FAILURE_POLICY",
    "EnrollmentFailurePolicy",
    "EnrollmentResolution",
    "EnrollmentResolver",
    "find_enrollment",
]
