"""HTTP client for the remote question/answer service."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Protocol
from urllib.parse import quote

import requests
from requests import Response
from requests.exceptions import RequestException

from question_feed.exceptions import (
    AuthorizationError,
    NetworkError,
    NotFoundError,
    ServiceError,
)
from question_feed.models import QuestionPage

LOGGER = logging.getLogger(__name__)


class QuestionService(Protocol):
    """The remote operations the feed depends on."""

    async def list_questions(self) -> QuestionPage:
        ...

    async def delete_question(self, question_id: str, auth_token: Optional[str]) -> None:
        ...

    async def ban_user(self, user_id: str, auth_token: Optional[str]) -> None:
        ...


class QuestionGateway:
    """Small wrapper around the question service HTTP API.

    Requests are issued with a blocking ``requests.Session`` on a worker
    thread so callers only suspend at the remote call itself. Nothing is
    retried: every failure is raised to the caller as a ``FeedError``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    async def list_questions(self) -> QuestionPage:
        """Fetch the first page of questions."""

        return await asyncio.to_thread(self._list_questions)

    async def delete_question(self, question_id: str, auth_token: Optional[str]) -> None:
        """Delete a question and its answers as an admin."""

        await asyncio.to_thread(
            self._privileged,
            "DELETE",
            f"/api/questions/{quote(question_id, safe='')}/admin-delete",
            auth_token,
            "Failed to delete question",
        )

    async def ban_user(self, user_id: str, auth_token: Optional[str]) -> None:
        """Ban a user account as an admin."""

        await asyncio.to_thread(
            self._privileged,
            "PUT",
            f"/api/admin/ban-user/{quote(user_id, safe='')}",
            auth_token,
            "Failed to ban user",
            params={"banned": "true"},
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def _list_questions(self) -> QuestionPage:
        response = self._send("GET", "/api/questions")
        if not response.ok:
            raise ServiceError("Failed to fetch questions", status_code=response.status_code)
        try:
            data = response.json()
        except ValueError as exc:
            raise ServiceError(f"Malformed response: {exc}", status_code=response.status_code)

        page = QuestionPage.from_dict(data)
        LOGGER.debug(
            "Fetched %d questions (page %d of %d)",
            len(page.questions),
            page.current_page,
            page.total_pages,
        )
        return page

    def _privileged(
        self,
        method: str,
        endpoint: str,
        auth_token: Optional[str],
        failure: str,
        params: Optional[Dict[str, str]] = None,
    ) -> None:
        if not auth_token:
            raise AuthorizationError(f"{failure}: not signed in")

        response = self._send(
            method,
            endpoint,
            headers={"Authorization": f"Bearer {auth_token}"},
            params=params,
        )
        if response.ok:
            return
        status = response.status_code
        if status in (401, 403):
            raise AuthorizationError(f"{failure}: not authorized ({status})", status_code=status)
        if status == 404:
            raise NotFoundError(f"{failure}: not found", status_code=status)
        raise ServiceError(f"{failure} ({status})", status_code=status)

    def _send(self, method: str, endpoint: str, **kwargs) -> Response:
        url = f"{self.base_url}{endpoint}"
        try:
            return self._session.request(method, url, timeout=self.timeout, **kwargs)
        except RequestException as exc:
            LOGGER.warning("%s %s failed: %s", method, url, exc)
            raise NetworkError(f"Cannot connect to {self.base_url}") from exc
