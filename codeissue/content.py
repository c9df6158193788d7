"""Plain-text rendering of HTML issue and comment bodies."""

from __future__ import annotations

import io
import logging
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, PageElement, PreformattedString, Tag

from .errors import InvalidDocument, UnsupportedNodeKind

logger = logging.getLogger(__name__)

INDENT = "  "


def parse_html(markup: str) -> BeautifulSoup:
    """Parse an HTML fragment into a document tree."""
    return BeautifulSoup(markup or "", "html.parser")


def _dump(out: io.StringIO, node: PageElement, level: int) -> None:
    out.write(INDENT * level)

    if isinstance(node, BeautifulSoup):
        raise InvalidDocument("unexpected document node")
    if isinstance(node, Comment):
        raise UnsupportedNodeKind("unexpected comment node")
    if isinstance(node, PreformattedString):
        # Doctype, CData, processing instructions and declarations.
        raise InvalidDocument(f"unexpected {type(node).__name__} node")
    if isinstance(node, NavigableString):
        out.write(str(node))
        return
    if not isinstance(node, Tag):
        raise InvalidDocument(f"unknown node type: {type(node).__name__}")

    for child in node.contents:
        _dump(out, child, level + 1)


def flatten(root: Optional[Tag]) -> str:
    """Render the children of ``root`` as text indented by tree depth.

    Markup is dropped; only text runs survive, each preceded by two spaces
    per level of nesting. Every visited element also contributes its own
    indent. Comments raise :class:`UnsupportedNodeKind`; nested documents and
    any other node kind raise :class:`InvalidDocument`. The root itself is
    never rendered, and a root without children renders as ``""``.
    """
    if root is None or not root.contents:
        return ""

    out = io.StringIO()
    for child in root.contents:
        _dump(out, child, 0)
    return out.getvalue()


def render_content(markup: str) -> str:
    """Parse ``markup`` and flatten it."""
    text = flatten(parse_html(markup))
    logger.debug("Flattened %d characters of HTML into %d characters", len(markup or ""), len(text))
    return text
