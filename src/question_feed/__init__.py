"""Community question feed: loading, sorting and admin moderation."""

from question_feed.exceptions import (
    AuthorizationError,
    FeedError,
    InvalidTransitionError,
    NetworkError,
    NotFoundError,
    ServiceError,
)
from question_feed.feed_state import FeedState
from question_feed.gateway import QuestionGateway, QuestionService
from question_feed.models import (
    Author,
    FeedStatus,
    FeedView,
    Question,
    QuestionPage,
    Role,
    SortKey,
    Viewer,
)
from question_feed.moderation import ModerationController
from question_feed.notifications import Notification
from question_feed.page import FeedConfig, QuestionFeedPage
from question_feed.session import SessionStore
from question_feed.sorting import order, parse_sort_key
from question_feed.viewer import can_moderate

__all__ = [
    # Exceptions
    "AuthorizationError",
    "FeedError",
    "InvalidTransitionError",
    "NetworkError",
    "NotFoundError",
    "ServiceError",
    # Models
    "Author",
    "FeedStatus",
    "FeedView",
    "Question",
    "QuestionPage",
    "Role",
    "SortKey",
    "Viewer",
    # Feed
    "FeedState",
    "order",
    "parse_sort_key",
    # Remote
    "QuestionGateway",
    "QuestionService",
    # Moderation
    "ModerationController",
    "Notification",
    "can_moderate",
    # Page
    "FeedConfig",
    "QuestionFeedPage",
    "SessionStore",
]
