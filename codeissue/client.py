"""Authenticated access to the issues feed endpoints."""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import quote, quote_plus

import requests

from .auth import authorization_header, status_line
from .errors import ProtocolError, TransportError
from .models import Entry, Feed, decode_entry, decode_feed

logger = logging.getLogger(__name__)

FEEDS_URL = "https://code.google.com/feeds/issues/p"
ATOM_CONTENT_TYPE = "application/atom+xml"


class FeedClient:
    """Issue and comment feeds for a single project."""

    def __init__(
        self,
        project: str,
        token: str,
        session: Optional[requests.Session] = None,
        base_url: str = FEEDS_URL,
        timeout: Optional[float] = None,
    ) -> None:
        self.project = project
        self.token = token
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def issues_url(self) -> str:
        return f"{self.base_url}/{quote(self.project, safe='')}/issues"

    def _headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = authorization_header(self.token)
        if extra:
            headers.update(extra)
        return headers

    def _get(self, url: str, action: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            with self.session.get(url, headers=self._headers(), timeout=self.timeout) as response:
                if response.status_code != 200:
                    status = status_line(response)
                    raise ProtocolError(
                        f"failed to {action}: {status}",
                        status_code=response.status_code,
                        status=status,
                    )
                return response.content
        except requests.RequestException as exc:
            raise TransportError(f"failed to {action}: {exc}") from exc

    def list_issues(self) -> Feed:
        feed = decode_feed(self._get(f"{self.issues_url}/full", "get issues"))
        logger.info("Fetched %d issues for project %s", len(feed.entries), self.project)
        return feed

    def search_issues(self, query: str) -> Feed:
        url = f"{self.issues_url}/full?q={quote_plus(query)}"
        feed = decode_feed(self._get(url, "get issues"))
        logger.info("Search %r matched %d issues", query, len(feed.entries))
        return feed

    def show_issue(self, issue_id: str) -> Entry:
        url = f"{self.issues_url}/full/{quote(str(issue_id), safe='')}"
        return decode_entry(self._get(url, "get issue"))

    def list_comments(self, issue_id: str) -> Feed:
        url = f"{self.issues_url}/{quote(str(issue_id), safe='')}/comments/full"
        feed = decode_feed(self._get(url, "get comments"))
        logger.info("Fetched %d comments for issue %s", len(feed.entries), issue_id)
        return feed

    def create_issue(self, document: str) -> str:
        """Post a ready-made Atom entry document; return the status line."""
        body = document.encode("utf-8")
        headers = self._headers(
            {
                "Content-Type": ATOM_CONTENT_TYPE,
                "Content-Length": str(len(body)),
            }
        )
        url = f"{self.issues_url}/full"
        logger.debug("POST %s (%d bytes)", url, len(body))
        try:
            with self.session.post(url, data=body, headers=headers, timeout=self.timeout) as response:
                status = status_line(response)
                if not 200 <= response.status_code < 300:
                    raise ProtocolError(
                        f"failed to post issue: {status}",
                        status_code=response.status_code,
                        status=status,
                    )
        except requests.RequestException as exc:
            raise TransportError(f"failed to post issue: {exc}") from exc
        logger.info("Created issue in project %s: %s", self.project, status)
        return status
