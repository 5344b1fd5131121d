"""
Async client for the remote content authority.

Every endpoint answers with the envelope ``{"success": bool, "message": str,
"data": ...}``. The client unwraps it, validates ``data`` into schema objects
and turns every failure (transport, HTTP status, ``success: false``, malformed
payload) into a single ``ApiError``.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from learnhub.config import get_settings
from learnhub.logging_config import get_logger, get_navigation_id
from learnhub.schemas.certificate import CertificateItem
from learnhub.schemas.common import ApiEnvelope
from learnhub.schemas.course import CourseTree
from learnhub.schemas.enrollment import EnrollmentRecord
from learnhub.schemas.notification import NotificationFilter, NotificationItem
from learnhub.schemas.work_item import AssignmentItem, QuizItem

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

M = TypeVar("M", bound=BaseModel)


class ApiError(Exception):
    """Raised when the remote authority cannot satisfy a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ApiError({self.message!r}, status_code={self.status_code})"


class LearnApiClient:
    """
    Thin async wrapper over the authority's REST endpoints.

    The bearer token is passed in explicitly; the client never reads the
    persisted session itself.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> "LearnApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        headers = {}
        nav_id = get_navigation_id()
        if nav_id:
            headers[REQUEST_ID_HEADER] = nav_id

        try:
            resp = await self._http.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise ApiError(f"{method} {path} failed: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.is_error:
            message = None
            if isinstance(payload, dict):
                message = payload.get("message") or payload.get("detail")
            raise ApiError(message or f"{method} {path} returned {resp.status_code}", resp.status_code)

        if not isinstance(payload, dict):
            raise ApiError(f"{method} {path} returned a non-JSON body", resp.status_code)

        try:
            envelope = ApiEnvelope.model_validate(payload)
        except ValidationError as exc:
            raise ApiError(f"{method} {path} returned a malformed envelope", resp.status_code) from exc
        if not envelope.success:
            raise ApiError(envelope.message or f"{method} {path} was rejected", resp.status_code)
        return envelope.data

    @staticmethod
    def _parse(model: Type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ApiError(f"Malformed {model.__name__} payload: {exc.error_count()} error(s)") from exc

    @classmethod
    def _parse_list(cls, model: Type[M], data: Any) -> List[M]:
        if not isinstance(data, list):
            raise ApiError(f"Expected a list of {model.__name__}")
        return [cls._parse(model, item) for item in data]

    # ------------------------------------------------------------------
    # Enrollment & progress
    # ------------------------------------------------------------------

    async def list_my_enrollments(self) -> List[EnrollmentRecord]:
        """GET the viewer's full enrollment set."""
        data = await self._request("GET", "/api/users/enrollments/me")
        return self._parse_list(EnrollmentRecord, data)

    async def get_my_enrollment(self, course_id: str) -> EnrollmentRecord:
        """GET the viewer's enrollment aggregate for one course."""
        data = await self._request("GET", f"/api/enrollments/course/{course_id}/my-enrollment")
        return self._parse(EnrollmentRecord, data)

    async def update_progress(
        self,
        course_id: str,
        module_id: str,
        topic_id: str,
        completed: bool = True,
    ) -> None:
        """POST a topic completion record."""
        await self._request(
            "POST",
            "/api/progress/update",
            json={
                "courseId": course_id,
                "moduleId": module_id,
                "topicId": topic_id,
                "completed": completed,
            },
        )

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    async def get_course(self, course_id: str) -> CourseTree:
        data = await self._request("GET", f"/api/courses/{course_id}")
        return self._parse(CourseTree, data)

    async def list_assignments(self, course_id: str) -> List[AssignmentItem]:
        data = await self._request("GET", f"/api/assignments/course/{course_id}")
        return self._parse_list(AssignmentItem, data)

    async def list_quizzes(self, course_id: str) -> List[QuizItem]:
        data = await self._request("GET", f"/api/quizzes/course/{course_id}")
        return self._parse_list(QuizItem, data)

    async def list_my_certificates(self) -> List[CertificateItem]:
        data = await self._request("GET", "/api/certificates/my-certificates")
        return self._parse_list(CertificateItem, data)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def get_unread_count(self) -> int:
        data = await self._request("GET", "/api/notifications/unread-count")
        if not isinstance(data, dict) or not isinstance(data.get("count"), int):
            raise ApiError("Malformed unread-count payload")
        return max(0, data["count"])

    async def list_notifications(
        self,
        read_filter: NotificationFilter = NotificationFilter.ALL,
    ) -> List[NotificationItem]:
        params = None
        if read_filter != NotificationFilter.ALL:
            params = {"isRead": "true" if read_filter == NotificationFilter.READ else "false"}
        data = await self._request("GET", "/api/notifications", params=params)
        return self._parse_list(NotificationItem, data)

    async def mark_notification_read(self, notification_id: str) -> None:
        await self._request("PUT", f"/api/notifications/{notification_id}/read")

    async def mark_all_notifications_read(self) -> None:
        await self._request("PUT", "/api/notifications/mark-all-read")

    async def delete_notification(self, notification_id: str) -> None:
        await self._request("DELETE", f"/api/notifications/{notification_id}")

    async def clear_read_notifications(self) -> None:
        await self._request("DELETE", "/api/notifications/clear-read")
