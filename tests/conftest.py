"""
Pytest fixtures for LearnHub client core tests.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from learnhub.config import get_settings
from learnhub.kernel.client import LearnApiClient
from learnhub.kernel.identity import Identity, Role
from learnhub.schemas.course import CourseTree
from learnhub.schemas.enrollment import EnrollmentRecord


# Fixed "now" for status derivation
FIXED_NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make each test see its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def learner() -> Identity:
    return Identity(authenticated=True, role=Role.LEARNER, user_id="u-learner")


@pytest.fixture
def admin() -> Identity:
    return Identity(authenticated=True, role=Role.ADMIN, user_id="u-admin")


@pytest.fixture
def anonymous() -> Identity:
    return Identity()


@pytest.fixture
def api_client() -> AsyncMock:
    """Authority client double; every endpoint is an AsyncMock."""
    return AsyncMock(spec=LearnApiClient)


@pytest.fixture
def sample_course_payload() -> dict:
    """Course tree as served by GET /api/courses/{id}."""
    return {
        "_id": "c1",
        "title": "Java Fundamentals",
        "isEnrolled": True,
        "modules": [
            {
                "moduleId": "m1",
                "title": "Basics",
                "order": 1,
                "topics": [
                    {"topicId": "t1", "title": "Variables", "order": 1},
                    {"topicId": "t2", "title": "Loops", "order": 2},
                ],
            },
            {
                "moduleId": "m2",
                "title": "Objects",
                "order": 2,
                "topics": [
                    {"topicId": "t3", "title": "Classes", "order": 1},
                ],
            },
        ],
    }


@pytest.fixture
def sample_course(sample_course_payload: dict) -> CourseTree:
    return CourseTree.model_validate(sample_course_payload)


@pytest.fixture
def enrollment_record() -> EnrollmentRecord:
    return EnrollmentRecord.model_validate(
        {"course": {"_id": "c1", "title": "Java Fundamentals"}, "progress": 33.3, "completedTopics": ["t1"]}
    )
