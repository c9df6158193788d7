"""Jinja2 environment for codeissue templates."""

from __future__ import annotations

from importlib import resources

from jinja2 import Environment, FileSystemLoader, StrictUndefined

_ENV: Environment | None = None

_XML_SPECIAL = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
    "&": "&amp;",
}


def xml_escape(value: str | None) -> str:
    """Replace the five XML special characters with named entities.

    Nothing else is touched. Escaping is not idempotent: ``&amp;`` becomes
    ``&amp;amp;`` on a second pass.
    """
    if not value:
        return ""
    return "".join(_XML_SPECIAL.get(char, char) for char in value)


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        # Escaping is explicit through the xml_escape filter.
        _ENV = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        _ENV.filters["xml_escape"] = xml_escape
    return _ENV
