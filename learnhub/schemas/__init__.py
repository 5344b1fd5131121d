"""
Pydantic schemas for the remote authority's data contract.
"""

from learnhub.schemas.common import ApiEnvelope, RemoteModel
from learnhub.schemas.course import CourseTree, Module, Topic
from learnhub.schemas.enrollment import (
    CourseProgress,
    Enrollment,
    EnrollmentRecord,
    EnrollmentStatus,
    normalize_course_ref,
)
from learnhub.schemas.work_item import AssignmentItem, QuizItem, Submission
from learnhub.schemas.certificate import CertificateItem
from learnhub.schemas.notification import NotificationBadge, NotificationFilter, NotificationItem

__all__ = [
    "ApiEnvelope",
    "RemoteModel",
    "CourseTree",
    "Module",
    "Topic",
    "CourseProgress",
    "Enrollment",
    "EnrollmentRecord",
    "EnrollmentStatus",
    "normalize_course_ref",
    "AssignmentItem",
    "QuizItem",
    "Submission",
    "CertificateItem",
    "NotificationBadge",
    "NotificationFilter",
    "NotificationItem",
]
