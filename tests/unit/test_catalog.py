"""Unit tests for work-item list views."""

from datetime import timedelta

import pytest

from learnhub.engines.catalog import ViewState, WorkItemCatalog
from learnhub.engines.enrollment import EnrollmentResolver
from learnhub.engines.status import AssignmentStatusKind, GradeTier, QuizStatus
from learnhub.kernel.client import ApiError
from learnhub.schemas.certificate import CertificateItem
from learnhub.schemas.enrollment import EnrollmentRecord
from learnhub.schemas.work_item import AssignmentItem, QuizItem


@pytest.fixture
def catalog(api_client, now) -> WorkItemCatalog:
    return WorkItemCatalog(api_client, EnrollmentResolver(api_client), clock=lambda: now)


@pytest.fixture
def enrolled(api_client):
    api_client.list_my_enrollments.return_value = [EnrollmentRecord.model_validate({"course": "c1"})]


@pytest.fixture
def not_enrolled(api_client):
    api_client.list_my_enrollments.return_value = []


class TestAssignments:
    """Tests for WorkItemCatalog.load_assignments."""

    @pytest.fixture(autouse=True)
    def assignments(self, api_client, now):
        api_client.list_assignments.return_value = [
            AssignmentItem.model_validate(
                {"_id": "a1", "dueDate": now - timedelta(days=2), "submission": {"status": "graded", "score": 9}, "totalPoints": 10}
            ),
            AssignmentItem.model_validate({"_id": "a2", "dueDate": now - timedelta(days=3)}),
            AssignmentItem.model_validate({"_id": "a3", "dueDate": now + timedelta(days=1)}),
        ]

    @pytest.mark.asyncio
    async def test_rows_for_enrolled_learner(self, catalog, learner, enrolled):
        view = await catalog.load_assignments(learner, "c1")

        assert view.state == ViewState.LOADED
        assert view.actions_enabled is True
        assert view.enrollment_notice is None
        assert [row.status.kind for row in view.rows] == [
            AssignmentStatusKind.GRADED,
            AssignmentStatusKind.OVERDUE,
            AssignmentStatusKind.NOT_SUBMITTED,
        ]
        assert view.rows[0].status.label == "Graded: 9/10"
        assert view.rows[1].due_label == "3 days overdue"
        assert view.rows[2].due_label == "Due tomorrow"
        assert [row.can_submit for row in view.rows] == [False, False, True]

    @pytest.mark.asyncio
    async def test_not_enrolled_learner_can_browse_but_not_submit(self, catalog, learner, not_enrolled):
        view = await catalog.load_assignments(learner, "c1")

        assert view.state == ViewState.LOADED
        assert len(view.rows) == 3
        assert view.actions_enabled is False
        assert view.enrollment_notice is not None
        assert not any(row.can_submit for row in view.rows)

    @pytest.mark.asyncio
    async def test_enrollment_outage_fails_open(self, catalog, api_client, learner):
        api_client.list_my_enrollments.side_effect = ApiError("down", 503)

        view = await catalog.load_assignments(learner, "c1")

        assert view.enrollment.degraded is True
        assert view.actions_enabled is True
        assert view.rows[2].can_submit is True

    @pytest.mark.asyncio
    async def test_list_failure(self, catalog, api_client, learner, enrolled):
        api_client.list_assignments.side_effect = ApiError("boom", 500)

        view = await catalog.load_assignments(learner, "c1")

        assert view.state == ViewState.FAILED
        assert view.error == "Failed to load assignments"
        assert view.rows == []


class TestQuizzes:
    """Tests for WorkItemCatalog.load_quizzes."""

    @pytest.mark.asyncio
    async def test_rows(self, catalog, api_client, learner, enrolled):
        api_client.list_quizzes.return_value = [
            QuizItem.model_validate({"_id": "q1", "attempts": 0, "maxAttempts": 3}),
            QuizItem.model_validate({"_id": "q2", "attempts": 1, "bestScore": 85, "maxAttempts": 0}),
            QuizItem.model_validate({"_id": "q3", "attempts": 3, "bestScore": 40, "maxAttempts": 3, "canAttempt": False}),
        ]

        view = await catalog.load_quizzes(learner, "c1")

        assert [row.status for row in view.rows] == [QuizStatus.NOT_ATTEMPTED, QuizStatus.PASSED, QuizStatus.FAILED]
        assert [row.attempts_label for row in view.rows] == ["0 / 3", "1 / ∞", "3 / 3"]
        assert [row.can_start for row in view.rows] == [True, True, False]

    @pytest.mark.asyncio
    async def test_not_enrolled_cannot_start(self, catalog, api_client, learner, not_enrolled):
        api_client.list_quizzes.return_value = [QuizItem.model_validate({"_id": "q1"})]

        view = await catalog.load_quizzes(learner, "c1")

        assert view.rows[0].can_start is False

    @pytest.mark.asyncio
    async def test_empty_list(self, catalog, api_client, learner, enrolled):
        api_client.list_quizzes.return_value = []
        view = await catalog.load_quizzes(learner, "c1")
        assert view.is_empty is True

    @pytest.mark.asyncio
    async def test_list_failure(self, catalog, api_client, learner, enrolled):
        api_client.list_quizzes.side_effect = ApiError("boom")
        view = await catalog.load_quizzes(learner, "c1")
        assert view.error == "Failed to load quizzes"


class TestCertificates:
    """Tests for WorkItemCatalog.load_certificates."""

    @pytest.mark.asyncio
    async def test_rows(self, catalog, api_client):
        api_client.list_my_certificates.return_value = [
            CertificateItem.model_validate({"_id": "x1", "finalScore": 90, "status": "active"}),
            CertificateItem.model_validate({"_id": "x2", "finalScore": 79.95, "status": "revoked"}),
            CertificateItem.model_validate({"_id": "x3"}),
        ]

        view = await catalog.load_certificates()

        assert [row.tier for row in view.rows] == [GradeTier.EXCELLENT, GradeTier.SATISFACTORY, GradeTier.NEEDS_IMPROVEMENT]
        assert [row.score_label for row in view.rows] == ["90.0%", "80.0%", None]

    @pytest.mark.asyncio
    async def test_failure(self, catalog, api_client):
        api_client.list_my_certificates.side_effect = ApiError("boom")
        view = await catalog.load_certificates()
        assert view.state == ViewState.FAILED
        assert view.error == "Failed to load certificates"
