"""
Fake content authority for integration tests.

A small FastAPI app speaking the authority's envelope format, driven in
process through httpx.ASGITransport.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

import httpx
import pytest
from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse

from learnhub.kernel.identity import PersistedSession

LEARNER_TOKEN = "learner-token"
ADMIN_TOKEN = "admin-token"


@dataclass
class AuthorityState:
    """Mutable server-side data for one test."""
    enrolled_courses: Set[str] = field(default_factory=lambda: {"c1"})
    completed: Dict[str, Set[str]] = field(default_factory=lambda: {"c1": {"t1"}})
    unread: int = 2
    enrollments_down: bool = False
    progress_writes: List[dict] = field(default_factory=list)
    notifications: List[dict] = field(
        default_factory=lambda: [
            {"_id": "n1", "title": "Assignment graded", "isRead": False},
            {"_id": "n2", "title": "New quiz", "isRead": False},
            {"_id": "n3", "title": "Welcome", "isRead": True},
        ]
    )


COURSES = {
    "c1": {
        "_id": "c1",
        "title": "Java Fundamentals",
        "modules": [
            {"moduleId": "m2", "title": "Objects", "order": 2, "topics": [{"topicId": "t3", "order": 1}]},
            {
                "moduleId": "m1",
                "title": "Basics",
                "order": 1,
                "topics": [{"topicId": "t2", "order": 2}, {"topicId": "t1", "order": 1}],
            },
        ],
    },
    "c2": {"_id": "c2", "title": "Empty Course", "modules": []},
}


def envelope(data=None, message: str = "ok") -> dict:
    return {"success": True, "message": message, "data": data}


def build_authority(state: AuthorityState) -> FastAPI:
    app = FastAPI()

    @app.exception_handler(HTTPException)
    async def http_error(request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.detail})

    def require_user(authorization: Optional[str] = Header(default=None)) -> str:
        if authorization not in (f"Bearer {LEARNER_TOKEN}", f"Bearer {ADMIN_TOKEN}"):
            raise HTTPException(status_code=401, detail="Not authorized")
        return authorization

    def topic_count(course_id: str) -> int:
        return sum(len(m["topics"]) for m in COURSES[course_id]["modules"])

    def enrollment_of(course_id: str) -> dict:
        done = state.completed.get(course_id, set())
        total = topic_count(course_id)
        return {
            "course": {"_id": course_id, "title": COURSES[course_id]["title"]},
            "status": "active",
            "progress": round(len(done) / total * 100, 1) if total else 0,
            "completedTopics": sorted(done),
        }

    @app.get("/api/users/enrollments/me")
    async def my_enrollments(user: str = Depends(require_user)):
        if state.enrollments_down:
            raise HTTPException(status_code=503, detail="Enrollment service unavailable")
        return envelope([enrollment_of(c) for c in sorted(state.enrolled_courses)])

    @app.get("/api/enrollments/course/{course_id}/my-enrollment")
    async def my_enrollment(course_id: str, user: str = Depends(require_user)):
        if course_id not in state.enrolled_courses:
            raise HTTPException(status_code=404, detail="Enrollment not found")
        return envelope(enrollment_of(course_id))

    @app.post("/api/progress/update")
    async def update_progress(body: dict, user: str = Depends(require_user)):
        state.progress_writes.append(body)
        if body.get("completed"):
            state.completed.setdefault(body["courseId"], set()).add(body["topicId"])
        return envelope(message="Progress updated")

    @app.get("/api/courses/{course_id}")
    async def course(course_id: str, authorization: Optional[str] = Header(default=None)):
        if course_id not in COURSES:
            raise HTTPException(status_code=404, detail="Course not found")
        enrolled = authorization is not None and course_id in state.enrolled_courses
        return envelope({**COURSES[course_id], "isEnrolled": enrolled})

    @app.get("/api/assignments/course/{course_id}")
    async def assignments(course_id: str, user: str = Depends(require_user)):
        return envelope([
            {"_id": "a1", "title": "Lab 1", "dueDate": "2020-01-01T00:00:00Z", "submission": {"status": "graded", "score": 45}, "totalPoints": 50},
            {"_id": "a2", "title": "Lab 2", "dueDate": "2099-01-01T00:00:00Z"},
        ])

    @app.get("/api/quizzes/course/{course_id}")
    async def quizzes(course_id: str, user: str = Depends(require_user)):
        return envelope([
            {"_id": "q1", "title": "Quiz 1", "attempts": 1, "bestScore": 70, "passingScore": 70, "maxAttempts": 3},
        ])

    @app.get("/api/certificates/my-certificates")
    async def certificates(user: str = Depends(require_user)):
        return envelope([{"_id": "x1", "course": {"_id": "c1", "title": "Java Fundamentals"}, "finalScore": 88.44}])

    @app.get("/api/notifications/unread-count")
    async def unread_count(user: str = Depends(require_user)):
        return envelope({"count": state.unread})

    @app.get("/api/notifications")
    async def notifications(isRead: Optional[str] = None, user: str = Depends(require_user)):
        items = state.notifications
        if isRead is not None:
            items = [n for n in items if n["isRead"] == (isRead == "true")]
        return envelope(items)

    @app.put("/api/notifications/mark-all-read")
    async def mark_all_read(user: str = Depends(require_user)):
        for n in state.notifications:
            n["isRead"] = True
        state.unread = 0
        return envelope()

    @app.delete("/api/notifications/clear-read")
    async def clear_read(user: str = Depends(require_user)):
        state.notifications = [n for n in state.notifications if not n["isRead"]]
        return envelope()

    @app.put("/api/notifications/{notification_id}/read")
    async def mark_read(notification_id: str, user: str = Depends(require_user)):
        for n in state.notifications:
            if n["_id"] == notification_id and not n["isRead"]:
                n["isRead"] = True
                state.unread = max(0, state.unread - 1)
        return envelope()

    return app


@pytest.fixture
def authority_state() -> AuthorityState:
    return AuthorityState()


@pytest.fixture
def transport(authority_state: AuthorityState) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=build_authority(authority_state))


@pytest.fixture
def learner_session() -> PersistedSession:
    return PersistedSession(token=LEARNER_TOKEN, user={"_id": "u1", "role": "student"})


@pytest.fixture
def admin_session() -> PersistedSession:
    return PersistedSession(token=ADMIN_TOKEN, user='{"_id": "u2", "isAdmin": true}')
