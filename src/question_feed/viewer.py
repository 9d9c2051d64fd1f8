"""Viewer capabilities consumed by the feed."""

from __future__ import annotations

from typing import Callable, Optional

from question_feed.models import Role, Viewer

ViewerProvider = Callable[[], Optional[Viewer]]
TokenProvider = Callable[[], Optional[str]]


def can_moderate(viewer: Viewer | None) -> bool:
    """Return True if the viewer may delete questions and ban users."""
    return viewer is not None and viewer.role is Role.ADMIN
