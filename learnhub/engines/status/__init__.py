"""
Status Deriver - Pure mappings from work-item snapshots to display states.

Assignments: Graded > PendingReview > Overdue > NotSubmitted
Quizzes:     NotAttempted | Passed (best >= passing) | Failed
Certificates: tiers at 90 / 80 / 70 (inclusive)
"""

from learnhub.engines.status.assignment_status import (
    AssignmentStatus,
    AssignmentStatusKind,
    SubmissionBadge,
    can_submit_assignment,
    days_remaining,
    derive_assignment_status,
    format_days_remaining,
    is_past_due,
    submission_badge,
)
from learnhub.engines.status.quiz_status import (
    QuizStatus,
    derive_quiz_status,
    format_attempts,
    quiz_seconds_remaining,
    quiz_time_expired,
)
from learnhub.engines.status.certificate_tier import (
    CertificateStanding,
    GradeTier,
    certificate_grade_tier,
    certificate_standing,
    format_percentage,
)

__all__ = [
    "AssignmentStatus",
    "AssignmentStatusKind",
    "SubmissionBadge",
    "can_submit_assignment",
    "days_remaining",
    "derive_assignment_status",
    "format_days_remaining",
    "is_past_due",
    "submission_badge",
    "QuizStatus",
    "derive_quiz_status",
    "format_attempts",
    "quiz_seconds_remaining",
    "quiz_time_expired",
    "CertificateStanding",
    "GradeTier",
    "certificate_grade_tier",
    "certificate_standing",
    "format_percentage",
]
