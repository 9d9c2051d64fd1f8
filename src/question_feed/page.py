"""High-level orchestration for the question feed page."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from question_feed.exceptions import FeedError
from question_feed.feed_state import FeedState
from question_feed.models import FeedView, Question, SortKey
from question_feed.moderation import Confirm, ModerationController, ModerationOutcome
from question_feed.notifications import Notification
from question_feed.session import DEFAULT_SESSION_PATH
from question_feed.viewer import can_moderate

if TYPE_CHECKING:
    from question_feed.gateway import QuestionService
    from question_feed.notifications import Notifier
    from question_feed.viewer import TokenProvider, ViewerProvider

LOGGER = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load questions. Please try again later."


@dataclass
class FeedConfig:
    backend_url: str = "http://localhost:5000"
    timeout: float = 30
    session_path: Path = DEFAULT_SESSION_PATH

    @classmethod
    def from_env(cls) -> FeedConfig:
        """Build a config from QUESTION_FEED_* environment variables."""
        defaults = cls()
        return cls(
            backend_url=os.getenv("QUESTION_FEED_BACKEND", defaults.backend_url),
            timeout=float(os.getenv("QUESTION_FEED_TIMEOUT", str(defaults.timeout))),
            session_path=Path(os.getenv("QUESTION_FEED_SESSION", str(defaults.session_path))),
        )


class QuestionFeedPage:
    """Loads the feed once, renders it, and routes viewer intents."""

    def __init__(
        self,
        service: QuestionService,
        viewer: ViewerProvider,
        token: TokenProvider,
        confirm: Confirm,
        notify: Notifier,
        sort_key: SortKey = SortKey.NEWEST,
    ) -> None:
        self.service = service
        self.viewer = viewer
        self.notify = notify
        self.feed = FeedState(sort_key=sort_key)
        self.moderation = ModerationController(
            feed=self.feed,
            service=service,
            viewer=viewer,
            token=token,
            confirm=confirm,
            notify=notify,
        )
        self._unmounted = False

    @property
    def can_moderate(self) -> bool:
        """Whether moderation controls should be offered to the viewer."""
        return can_moderate(self.viewer())

    async def mount(self) -> FeedView:
        """Perform the initial load and return the resulting view."""
        await self._load()
        return self.render()

    async def reload(self) -> FeedView:
        """Load the feed again, e.g. after an error."""
        await self._load()
        return self.render()

    def unmount(self) -> None:
        """Tear the page down; loads finishing afterwards are discarded."""
        self._unmounted = True

    def render(self) -> FeedView:
        return self.feed.view()

    def change_sort(self, sort_key: SortKey | str) -> FeedView:
        self.feed.set_sort_key(sort_key)
        return self.render()

    async def delete_question(self, question: Question) -> ModerationOutcome:
        return await self.moderation.request_delete(question.id, question.title)

    async def ban_author(self, question: Question) -> ModerationOutcome:
        return await self.moderation.request_ban(question.author.user_id, question.author.username)

    async def _load(self) -> None:
        if self._unmounted or not self.feed.begin_load():
            return

        try:
            page = await self.service.list_questions()
        except FeedError as exc:
            if self._unmounted:
                LOGGER.debug("Discarding load failure for unmounted page: %s", exc)
                return
            self.feed.fail_load(str(exc))
            self.notify(Notification.error(LOAD_FAILED_MESSAGE))
            return
        except Exception:
            LOGGER.exception("Unexpected error while loading questions")
            if self._unmounted:
                return
            self.feed.fail_load("Failed to fetch questions")
            self.notify(Notification.error(LOAD_FAILED_MESSAGE))
            return

        if self._unmounted:
            LOGGER.debug("Discarding %d questions loaded after unmount", len(page.questions))
            return
        if page.total_pages > 1:
            LOGGER.debug("Showing page %d of %d", page.current_page, page.total_pages)
        self.feed.complete_load(page.questions)
