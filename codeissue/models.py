"""Issue tracker Atom feed model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union
from xml.etree import ElementTree as ET

from .errors import MalformedFeed

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
ISSUES_NS = "http://schemas.google.com/projecthosting/issues/2009"

_ATOM = "{%s}" % ATOM_NS
_ISSUES = "{%s}" % ISSUES_NS


@dataclass
class Link:
    href: str = ""
    rel: str = ""
    type: str = ""
    hreflang: str = ""


@dataclass
class Author:
    name: str = ""
    uri: str = ""
    email: str = ""


@dataclass
class Owner:
    """Tracker account an issue is assigned to."""

    uri: str = ""
    username: str = ""


@dataclass
class Cc:
    """Tracker account copied on an issue."""

    uri: str = ""
    username: str = ""


@dataclass
class Entry:
    """One issue or comment as delivered by the feeds API.

    Timestamps are kept as the opaque strings the server sent. List fields
    keep wire order and multiplicity.
    """

    namespace: str = ATOM_NS
    id: str = ""
    published: str = ""
    updated: str = ""
    title: str = ""
    content: str = ""
    links: List[Link] = field(default_factory=list)
    authors: List[Author] = field(default_factory=list)
    cc: List[Cc] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    owners: List[Owner] = field(default_factory=list)
    stars: List[int] = field(default_factory=list)
    state: List[str] = field(default_factory=list)
    status: List[str] = field(default_factory=list)
    summary: str = ""


@dataclass
class Feed:
    """Entries in the order the server returned them."""

    entries: List[Entry] = field(default_factory=list)


def _parse_root(data: Union[bytes, str]) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise MalformedFeed(f"failed to parse xml: {exc}") from exc


def _account(element: ET.Element, cls):
    return cls(
        uri=element.findtext(_ISSUES + "uri", ""),
        username=element.findtext(_ISSUES + "username", ""),
    )


def _parse_stars(element: ET.Element) -> int:
    raw = (element.text or "").strip()
    try:
        return int(raw)
    except ValueError as exc:
        raise MalformedFeed(f"invalid issues:stars value: {raw!r}") from exc


def _entry_from_element(element: ET.Element) -> Entry:
    namespace = ATOM_NS
    if element.tag.startswith("{"):
        namespace = element.tag[1:].split("}", 1)[0]

    return Entry(
        namespace=namespace,
        id=element.findtext(_ATOM + "id", ""),
        published=element.findtext(_ATOM + "published", ""),
        updated=element.findtext(_ATOM + "updated", ""),
        title=element.findtext(_ATOM + "title", ""),
        content=element.findtext(_ATOM + "content", ""),
        links=[
            Link(
                href=link.attrib.get("href", ""),
                rel=link.attrib.get("rel", ""),
                type=link.attrib.get("type", ""),
                hreflang=link.attrib.get("hreflang", ""),
            )
            for link in element.findall(_ATOM + "link")
        ],
        authors=[
            Author(
                name=author.findtext(_ATOM + "name", ""),
                uri=author.findtext(_ATOM + "uri", ""),
                email=author.findtext(_ATOM + "email", ""),
            )
            for author in element.findall(_ATOM + "author")
        ],
        cc=[_account(node, Cc) for node in element.findall(_ISSUES + "cc")],
        labels=[node.text or "" for node in element.findall(_ISSUES + "label")],
        owners=[_account(node, Owner) for node in element.findall(_ISSUES + "owner")],
        stars=[_parse_stars(node) for node in element.findall(_ISSUES + "stars")],
        state=[node.text or "" for node in element.findall(_ISSUES + "state")],
        status=[node.text or "" for node in element.findall(_ISSUES + "status")],
        summary=element.findtext(_ISSUES + "summary", ""),
    )


def _feed_from_element(element: ET.Element) -> Feed:
    return Feed(entries=[_entry_from_element(node) for node in element.findall(_ATOM + "entry")])


def decode(data: Union[bytes, str]) -> Union[Feed, Entry]:
    """Decode a feed or single-entry document."""
    root = _parse_root(data)
    if root.tag == _ATOM + "feed":
        feed = _feed_from_element(root)
        logger.debug("Decoded feed with %d entries", len(feed.entries))
        return feed
    if root.tag == _ATOM + "entry":
        return _entry_from_element(root)
    raise MalformedFeed(f"unexpected root element: {root.tag}")


def decode_feed(data: Union[bytes, str]) -> Feed:
    result = decode(data)
    if not isinstance(result, Feed):
        raise MalformedFeed("expected an Atom feed, got a single entry")
    return result


def decode_entry(data: Union[bytes, str]) -> Entry:
    result = decode(data)
    if not isinstance(result, Entry):
        raise MalformedFeed("expected an Atom entry, got a feed")
    return result


# Encoding builds literal ``issues:`` prefixed names and declares both
# namespaces on the document root only.


def _sub(parent: ET.Element, tag: str, text: Optional[str]) -> ET.Element:
    child = ET.SubElement(parent, tag)
    child.text = text
    return child


def _declare_namespaces(element: ET.Element, namespace: str) -> None:
    element.set("xmlns", namespace or ATOM_NS)
    element.set("xmlns:issues", ISSUES_NS)


def _entry_element(entry: Entry, parent: Optional[ET.Element] = None) -> ET.Element:
    if parent is None:
        element = ET.Element("entry")
        _declare_namespaces(element, entry.namespace)
    else:
        element = ET.SubElement(parent, "entry")

    for tag in ("id", "published", "updated", "title", "content"):
        value = getattr(entry, tag)
        if value:
            _sub(element, tag, value)

    for link in entry.links:
        attrs = {
            key: value
            for key, value in (
                ("href", link.href),
                ("rel", link.rel),
                ("type", link.type),
                ("hreflang", link.hreflang),
            )
            if value
        }
        ET.SubElement(element, "link", attrs)

    for author in entry.authors:
        node = ET.SubElement(element, "author")
        _sub(node, "name", author.name)
        if author.uri:
            _sub(node, "uri", author.uri)
        if author.email:
            _sub(node, "email", author.email)

    for tag, accounts in (("issues:cc", entry.cc), ("issues:owner", entry.owners)):
        for account in accounts:
            node = ET.SubElement(element, tag)
            _sub(node, "issues:uri", account.uri)
            _sub(node, "issues:username", account.username)

    for label in entry.labels:
        _sub(element, "issues:label", label)
    for stars in entry.stars:
        _sub(element, "issues:stars", str(stars))
    for state in entry.state:
        _sub(element, "issues:state", state)
    for status in entry.status:
        _sub(element, "issues:status", status)
    if entry.summary:
        _sub(element, "issues:summary", entry.summary)

    return element


def encode_entry(entry: Entry) -> bytes:
    """Serialise a single entry as a standalone Atom document.

    Counterpart of :func:`decode_entry` for fixtures and round trips. Issue
    submission posts the literal ``entry.xml.j2`` document instead.
    """
    return ET.tostring(_entry_element(entry), encoding="utf-8", xml_declaration=True)


def encode_feed(feed: Feed) -> bytes:
    """Serialise a feed and its entries as an Atom document."""
    root = ET.Element("feed")
    namespace = feed.entries[0].namespace if feed.entries else ATOM_NS
    _declare_namespaces(root, namespace)
    for entry in feed.entries:
        _entry_element(entry, parent=root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)
