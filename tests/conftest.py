"""Shared pytest fixtures for question-feed tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from question_feed.models import Author, Question, QuestionPage, Role, Viewer
from question_feed.notifications import Notification

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_question(
    question_id: str,
    votes: int = 0,
    minutes: int = 0,
    title: str | None = None,
    author_id: str = "u1",
    username: str = "alice",
    **overrides,
) -> Question:
    """Build a Question created `minutes` after BASE_TIME."""
    fields = dict(
        id=question_id,
        title=title or f"Question {question_id}",
        description=f"<p>Body of {question_id}</p>",
        author=Author(user_id=author_id, username=username),
        created_at=BASE_TIME + timedelta(minutes=minutes),
        vote_count=votes,
        tags=("python",),
    )
    fields.update(overrides)
    return Question(**fields)


def question_record(question_id: str, votes: int = 0, created_at: str = "2024-05-01T12:00:00.000Z") -> dict:
    """A question as the service serializes it."""
    return {
        "_id": question_id,
        "title": f"Question {question_id}",
        "description": "<p>How do I <b>sort</b>?</p>",
        "userId": {"_id": "u1", "username": "alice"},
        "tags": ["python", "sorting"],
        "votes": [{"userId": "u2", "vote": 1}],
        "answers": ["a1", "a2"],
        "acceptedAnswerId": "a2",
        "voteCount": votes,
        "createdAt": created_at,
    }


class FakeService:
    """In-memory QuestionService recording every call."""

    def __init__(self, questions=(), list_error=None, delete_error=None, ban_error=None):
        self.questions = tuple(questions)
        self.list_error = list_error
        self.delete_error = delete_error
        self.ban_error = ban_error
        self.calls: list[tuple] = []

    async def list_questions(self) -> QuestionPage:
        self.calls.append(("list",))
        if self.list_error:
            raise self.list_error
        return QuestionPage(questions=self.questions, total_pages=1, current_page=1)

    async def delete_question(self, question_id, auth_token) -> None:
        self.calls.append(("delete", question_id, auth_token))
        if self.delete_error:
            raise self.delete_error

    async def ban_user(self, user_id, auth_token) -> None:
        self.calls.append(("ban", user_id, auth_token))
        if self.ban_error:
            raise self.ban_error


class Recorder:
    """Collects notifications and confirmation prompts."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.notifications: list[Notification] = []
        self.prompts: list[str] = []

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)

    def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.answer


@pytest.fixture
def admin() -> Viewer:
    return Viewer(id="admin-1", role=Role.ADMIN, username="root")


@pytest.fixture
def member() -> Viewer:
    return Viewer(id="m-1", role=Role.MEMBER, username="bob")


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def questions() -> list[Question]:
    return [
        make_question("q1", votes=5, minutes=0, title="Q1"),
        make_question("q2", votes=12, minutes=10, author_id="u2", username="bob"),
        make_question("q3", votes=3, minutes=5),
    ]
