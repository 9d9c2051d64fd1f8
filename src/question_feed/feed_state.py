"""Mutable state of the question feed."""

from __future__ import annotations

import logging
from typing import Iterable

from question_feed.exceptions import InvalidTransitionError
from question_feed.models import FeedStatus, FeedView, Question, SortKey
from question_feed.sorting import order, parse_sort_key

LOGGER = logging.getLogger(__name__)


class FeedState:
    """Question collection, load status and sort preference for one page.

    Status moves ``IDLE -> LOADING -> READY | ERRORED``; a later load may
    re-enter LOADING from either terminal status. The stored collection is
    kept in service order; sorting only happens in ``view()``.

    While ERRORED the collection is always empty and while READY there is
    never an error message.
    """

    def __init__(self, sort_key: SortKey = SortKey.NEWEST) -> None:
        self._questions: tuple[Question, ...] = ()
        self._status = FeedStatus.IDLE
        self._error_message: str | None = None
        self._sort_key = sort_key

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def status(self) -> FeedStatus:
        return self._status

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    def begin_load(self) -> bool:
        """Enter LOADING. Returns False if a load is already in flight."""
        if self._status is FeedStatus.LOADING:
            LOGGER.debug("Load already in progress; ignoring duplicate request")
            return False
        self._status = FeedStatus.LOADING
        return True

    def complete_load(self, questions: Iterable[Question]) -> None:
        """Store the delivered collection verbatim and enter READY."""
        self._require(FeedStatus.LOADING, "complete load")
        self._questions = tuple(questions)
        self._error_message = None
        self._status = FeedStatus.READY
        LOGGER.info("Feed ready with %d questions", len(self._questions))

    def fail_load(self, message: str) -> None:
        """Record a failed load and enter ERRORED."""
        self._require(FeedStatus.LOADING, "fail load")
        self._questions = ()
        self._error_message = message
        self._status = FeedStatus.ERRORED
        LOGGER.warning("Feed load failed: %s", message)

    def set_sort_key(self, sort_key: SortKey | str) -> None:
        self._sort_key = parse_sort_key(sort_key)

    def remove_question(self, question_id: str) -> bool:
        """Drop a question from the collection.

        Only applies while READY. Unknown ids are ignored, which makes
        repeated removals harmless.

        Returns:
            True if an entry was removed.
        """
        if self._status is not FeedStatus.READY:
            LOGGER.debug("Feed is %s; nothing to remove for %s", self._status.value, question_id)
            return False
        remaining = tuple(q for q in self._questions if q.id != question_id)
        if len(remaining) == len(self._questions):
            LOGGER.debug("Question %s already absent from feed", question_id)
            return False
        self._questions = remaining
        return True

    def view(self) -> FeedView:
        """Snapshot for rendering, with questions in display order."""
        return FeedView(
            status=self._status,
            questions=tuple(order(self._questions, self._sort_key)),
            sort_key=self._sort_key,
            error_message=self._error_message,
        )

    def _require(self, status: FeedStatus, operation: str) -> None:
        if self._status is not status:
            raise InvalidTransitionError(operation, self._status.value)
