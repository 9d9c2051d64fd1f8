"""Privileged moderation actions on the question feed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Literal

from question_feed.exceptions import FeedError
from question_feed.notifications import Notification
from question_feed.viewer import can_moderate

if TYPE_CHECKING:
    from question_feed.feed_state import FeedState
    from question_feed.gateway import QuestionService
    from question_feed.notifications import Notifier
    from question_feed.viewer import TokenProvider, ViewerProvider

LOGGER = logging.getLogger(__name__)

ModerationOutcome = Literal["skipped", "declined", "succeeded", "failed"]
Confirm = Callable[[str], bool]


class ModerationController:
    """Delete questions and ban authors on behalf of an admin viewer."""

    def __init__(
        self,
        feed: FeedState,
        service: QuestionService,
        viewer: ViewerProvider,
        token: TokenProvider,
        confirm: Confirm,
        notify: Notifier,
    ) -> None:
        """
        Initialize controller.

        Args:
            feed: FeedState reconciled after a successful delete.
            service: Remote question service.
            viewer: Returns the current viewer, or None when signed out.
            token: Returns the current auth token, or None.
            confirm: Synchronous yes/no gate for destructive actions.
            notify: Receives one notification per completed action.
        """
        self.feed = feed
        self.service = service
        self.viewer = viewer
        self.token = token
        self.confirm = confirm
        self.notify = notify

    async def request_delete(self, question_id: str, question_title: str) -> ModerationOutcome:
        """
        Delete a question after confirmation.

        On success the question is removed from the feed. On failure the
        feed is left as it is and an error notification is emitted.
        """
        if not can_moderate(self.viewer()):
            LOGGER.debug("Delete of %s ignored: viewer cannot moderate", question_id)
            return "skipped"

        prompt = (
            f'Are you sure you want to delete the question "{question_title}" '
            "and all its answers? This action cannot be undone."
        )
        if not self.confirm(prompt):
            LOGGER.debug("Delete of %s declined", question_id)
            return "declined"

        try:
            await self.service.delete_question(question_id, self.token())
        except FeedError as exc:
            LOGGER.warning("Delete of question %s failed: %s", question_id, exc)
            self.notify(Notification.error(str(exc) or "Failed to delete question"))
            return "failed"

        self.feed.remove_question(question_id)
        LOGGER.info("Deleted question %s", question_id)
        self.notify(
            Notification.info(
                "Question deleted",
                "The question and all its answers have been deleted.",
            )
        )
        return "succeeded"

    async def request_ban(self, user_id: str, username: str) -> ModerationOutcome:
        """
        Ban a question author after confirmation.

        The feed is never modified: existing questions by the banned user
        stay listed.
        """
        if not can_moderate(self.viewer()):
            LOGGER.debug("Ban of %s ignored: viewer cannot moderate", user_id)
            return "skipped"

        prompt = (
            f'Are you sure you want to ban user "{username}"? '
            "This will prevent them from logging in."
        )
        if not self.confirm(prompt):
            LOGGER.debug("Ban of %s declined", user_id)
            return "declined"

        try:
            await self.service.ban_user(user_id, self.token())
        except FeedError as exc:
            LOGGER.warning("Ban of user %s failed: %s", user_id, exc)
            self.notify(Notification.error(str(exc) or "Failed to ban user"))
            return "failed"

        LOGGER.info("Banned user %s (%s)", user_id, username)
        self.notify(
            Notification.info(
                "User banned",
                f'User "{username}" has been banned successfully.',
            )
        )
        return "succeeded"
