"""Display ordering for the question feed."""

from __future__ import annotations

from typing import Callable, Iterable

from question_feed.models import Question, SortKey


def _by_created_at(question: Question):
    return question.created_at


def _by_votes(question: Question):
    return question.vote_count


# RECENT_ACTIVITY orders by creation time until the service exposes an
# activity timestamp.
_SORT_FIELDS: dict[SortKey, Callable[[Question], object]] = {
    SortKey.NEWEST: _by_created_at,
    SortKey.MOST_VOTES: _by_votes,
    SortKey.RECENT_ACTIVITY: _by_created_at,
}


def order(questions: Iterable[Question], sort_key: SortKey) -> list[Question]:
    """Return a new list of questions in display order.

    Sorting is descending on the key's field and stable, so questions that
    compare equal keep the order the service delivered them in. The input is
    never modified.
    """
    return sorted(questions, key=_SORT_FIELDS[sort_key], reverse=True)


def parse_sort_key(value: SortKey | str) -> SortKey:
    """Accept a SortKey or its string form ("newest", "votes", "activity")."""
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(key.value for key in SortKey)
        raise ValueError(f"Unknown sort key {value!r} (expected one of: {choices})")
