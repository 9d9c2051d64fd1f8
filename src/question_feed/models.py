"""Data models for the question feed."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from question_feed.exceptions import ServiceError

_MARKUP_RE = re.compile(r"<[^>]*>")


class FeedStatus(str, Enum):
    """Lifecycle of a single feed load."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERRORED = "errored"


class SortKey(str, Enum):
    """Viewer-selected display order."""

    NEWEST = "newest"
    MOST_VOTES = "votes"
    RECENT_ACTIVITY = "activity"


class Role(str, Enum):
    GUEST = "guest"
    MEMBER = "member"
    ADMIN = "admin"


@dataclass(frozen=True)
class Author:
    """The user who posted a question."""

    user_id: str
    username: str


@dataclass(frozen=True)
class Viewer:
    """The signed-in user looking at the feed."""

    id: str
    role: Role
    username: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Viewer:
        """Build a viewer from a session record.

        Unknown roles fall back to ``Role.GUEST`` so that a malformed session
        can never grant moderation rights.
        """
        try:
            role = Role(str(data.get("role", Role.GUEST.value)).lower())
        except ValueError:
            role = Role.GUEST
        return cls(
            id=str(data.get("id") or data.get("_id") or ""),
            role=role,
            username=data.get("username"),
        )


@dataclass(frozen=True)
class Question:
    """A single question as listed by the remote service."""

    id: str
    title: str
    description: str
    author: Author
    created_at: datetime
    vote_count: int = 0
    tags: tuple[str, ...] = ()
    answer_ids: tuple[str, ...] = ()
    accepted_answer_id: str | None = None

    @property
    def answer_count(self) -> int:
        """Number of answers posted to the question."""
        return len(self.answer_ids)

    @property
    def has_accepted_answer(self) -> bool:
        return self.accepted_answer_id is not None

    @property
    def plain_description(self) -> str:
        """Description with markup tags removed."""
        return _MARKUP_RE.sub("", self.description)

    @classmethod
    def from_dict(cls, data: Any) -> Question:
        """Build a question from a service record.

        Raises:
            ServiceError: If required fields are missing or malformed.
        """
        if not isinstance(data, dict):
            raise ServiceError(f"Malformed question record: {data!r}")
        try:
            author_data = data["userId"]
            author = Author(
                user_id=str(author_data["_id"]),
                username=str(author_data["username"]),
            )
            return cls(
                id=str(data["_id"]),
                title=str(data["title"]),
                description=str(data.get("description") or ""),
                author=author,
                created_at=parse_timestamp(data["createdAt"]),
                vote_count=_vote_count(data.get("voteCount", 0)),
                tags=tuple(str(tag) for tag in data.get("tags") or ()),
                answer_ids=tuple(str(answer) for answer in data.get("answers") or ()),
                accepted_answer_id=data.get("acceptedAnswerId") or None,
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise ServiceError(f"Malformed question record: {exc}") from exc


@dataclass(frozen=True)
class QuestionPage:
    """Envelope returned by the question listing endpoint."""

    questions: tuple[Question, ...] = field(default_factory=tuple)
    total_pages: int = 1
    current_page: int = 1

    @classmethod
    def from_dict(cls, data: Any) -> QuestionPage:
        if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
            raise ServiceError("Malformed response: missing questions list")
        questions = tuple(Question.from_dict(item) for item in data["questions"])
        try:
            total_pages = int(data.get("totalPages") or 1)
            current_page = int(data.get("currentPage") or 1)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ServiceError(f"Malformed pagination fields: {exc}") from exc
        return cls(questions=questions, total_pages=total_pages, current_page=current_page)


@dataclass(frozen=True)
class FeedView:
    """Everything a renderer needs to draw the feed."""

    status: FeedStatus
    questions: tuple[Question, ...]
    sort_key: SortKey
    error_message: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status in (FeedStatus.IDLE, FeedStatus.LOADING)

    @property
    def is_empty(self) -> bool:
        """True when a completed load returned no questions."""
        return self.status is FeedStatus.READY and not self.questions


def _vote_count(value: Any) -> int:
    # bool is an int subclass; the service sends a plain integer or null
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"voteCount must be an integer, got {value!r}")
    return value


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
