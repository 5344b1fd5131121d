"""
Catalog Engine - List views over course work items and certificates.
"""

from learnhub.engines.catalog.views import ListView, ViewState
from learnhub.engines.catalog.work_items import (
    AssignmentRow,
    CertificateRow,
    CourseListView,
    QuizRow,
    WorkItemCatalog,
)

__all__ = [
    "ListView",
    "ViewState",
    "AssignmentRow",
    "CertificateRow",
    "CourseListView",
    "QuizRow",
    "WorkItemCatalog",
]
