"""Unit tests for enrollment resolution."""

import httpx
import pytest

from learnhub.engines.enrollment import (
    EnrollmentFailurePolicy,
    EnrollmentResolver,
    find_enrollment,
)
from learnhub.kernel.client import ApiError, LearnApiClient
from learnhub.schemas.enrollment import EnrollmentRecord, EnrollmentStatus, normalize_course_ref


def records(*payloads):
    return [EnrollmentRecord.model_validate(p) for p in payloads]


class TestCourseReference:
    """Nested and flat course references normalise to the same id."""

    @pytest.mark.parametrize(
        "payload",
        [
            {"course": {"_id": "c1", "title": "Java"}},
            {"course": {"id": "c1"}},
            {"course": "c1"},
            {"courseId": "c1"},
        ],
    )
    def test_course_id_forms(self, payload):
        assert EnrollmentRecord.model_validate(payload).course_id == "c1"

    def test_normalize_course_ref(self):
        assert normalize_course_ref(None) is None
        assert normalize_course_ref({"title": "no id"}) is None
        assert normalize_course_ref(42) == "42"

    def test_find_enrollment_picks_first_match(self):
        found = find_enrollment(
            records({"course": "c2", "progress": 10}, {"course": {"_id": "c1"}, "progress": 50}),
            "c1",
        )
        assert found is not None
        assert found.percent_complete == 50
        assert find_enrollment([], "c1") is None


class TestEnrollmentResolver:
    """Tests for EnrollmentResolver.resolve_enrollment."""

    @pytest.mark.asyncio
    async def test_enrolled_when_course_is_listed(self, api_client, learner):
        api_client.list_my_enrollments.return_value = records({"course": {"_id": "c1"}, "progress": 40})

        result = await EnrollmentResolver(api_client).resolve_enrollment(learner, "c1")

        assert result.status == EnrollmentStatus.ENROLLED
        assert result.enrolled and result.can_mutate
        assert result.record.percent_complete == 40
        assert result.degraded is False

    @pytest.mark.asyncio
    async def test_flat_reference_matches_too(self, api_client, learner):
        api_client.list_my_enrollments.return_value = records({"course": "c1"})
        result = await EnrollmentResolver(api_client).resolve_enrollment(learner, "c1")
        assert result.status == EnrollmentStatus.ENROLLED

    @pytest.mark.asyncio
    async def test_not_enrolled_when_no_match(self, api_client, learner):
        api_client.list_my_enrollments.return_value = records({"course": {"_id": "other"}})

        result = await EnrollmentResolver(api_client).resolve_enrollment(learner, "c1")

        assert result.status == EnrollmentStatus.NOT_ENROLLED
        assert result.can_mutate is False
        assert result.can_browse is True

    @pytest.mark.asyncio
    async def test_fetch_failure_fails_open_by_default(self, api_client, learner):
        api_client.list_my_enrollments.side_effect = ApiError("Service unavailable", 503)

        result = await EnrollmentResolver(api_client).resolve_enrollment(learner, "c1")

        assert result.status == EnrollmentStatus.ENROLLED
        assert result.degraded is True
        assert result.record is None

    @pytest.mark.asyncio
    async def test_fail_closed_policy(self, api_client, learner):
        api_client.list_my_enrollments.side_effect = ApiError("timeout")

        resolver = EnrollmentResolver(api_client, EnrollmentFailurePolicy.FAIL_CLOSED)
        result = await resolver.resolve_enrollment(learner, "c1")

        assert result.status == EnrollmentStatus.NOT_ENROLLED
        assert result.degraded is True

    @pytest.mark.asyncio
    async def test_policy_from_environment(self, api_client, learner, monkeypatch):
        monkeypatch.setenv("ENROLLMENT_FAILURE_POLICY", "fail_closed")
        api_client.list_my_enrollments.side_effect = ApiError("down")

        resolver = EnrollmentResolver(api_client)
        result = await resolver.resolve_enrollment(learner, "c1")

        assert resolver.failure_policy == EnrollmentFailurePolicy.FAIL_CLOSED
        assert result.status == EnrollmentStatus.NOT_ENROLLED

    @pytest.mark.asyncio
    async def test_anonymous_viewer_is_not_enrolled_without_fetch(self, api_client, anonymous):
        result = await EnrollmentResolver(api_client).resolve_enrollment(anonymous, "c1")

        assert result.status == EnrollmentStatus.NOT_ENROLLED
        api_client.list_my_enrollments.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"success": None, "data": []},
            {"success": True, "message": ["x"], "data": []},
        ],
    )
    async def test_malformed_envelope_fails_open(self, learner, body):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
        async with LearnApiClient(token="tok", base_url="http://authority.test", transport=transport) as client:
            result = await EnrollmentResolver(client).resolve_enrollment(learner, "c1")

        assert result.status == EnrollmentStatus.ENROLLED
        assert result.degraded is True
