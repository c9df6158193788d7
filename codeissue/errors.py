"""Exception hierarchy for codeissue."""

from __future__ import annotations

from typing import Optional


class CodeIssueError(RuntimeError):
    """Base class for failures that abort the current command."""


class TransportError(CodeIssueError):
    """The HTTP request could not be completed."""


class AuthError(CodeIssueError):
    """The login endpoint rejected the credentials or answered nonsense."""


class ProtocolError(CodeIssueError):
    """An authenticated request returned an unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None, status: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.status = status


class DecodeError(CodeIssueError):
    """A response body is not a well-formed issues feed document."""


MalformedFeed = DecodeError


class RenderError(CodeIssueError):
    """An HTML body could not be flattened to text."""


class UnsupportedNodeKind(RenderError):
    pass


class InvalidDocument(RenderError):
    pass


class DraftValidationError(CodeIssueError):
    """The edited draft does not have the expected header lines."""


class EditorError(CodeIssueError):
    """The external editor could not be run or exited with an error."""


class ConfigError(ValueError):
    """The settings file is unusable."""
