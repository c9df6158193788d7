"""Console rendering of issues and comments."""

from __future__ import annotations

from typing import List

from .content import render_content
from .models import Entry, Feed


def issue_line(entry: Entry) -> str:
    return f"{entry.id}: {entry.title}"


def issue_lines(feed: Feed) -> List[str]:
    """One ``"<id>: <title>"`` line per entry, in feed order."""
    return [issue_line(entry) for entry in feed.entries]


def render_entry(entry: Entry) -> str:
    """Title followed by the flattened HTML content."""
    return f"{entry.title}\n{render_content(entry.content)}"
