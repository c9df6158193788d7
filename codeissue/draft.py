"""Create an issue by editing a draft file in an external editor."""

from __future__ import annotations

import contextlib
import enum
import logging
import os
import random
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from .errors import DraftValidationError, EditorError
from .templating import get_environment

logger = logging.getLogger(__name__)

AUTHOR_PREFIX = "from: "
TITLE_PREFIX = "title: "

DEFAULT_STATUS = "Started"
DEFAULT_LABELS = ("-Type-Defect", "-Priority-Medium")


class DraftState(enum.Enum):
    INIT = "init"
    TEMPLATE_WRITTEN = "template-written"
    EDITED = "edited"
    PARSED = "parsed"
    SUBMITTED = "submitted"


@dataclass
class Draft:
    """Fields extracted from an edited draft."""

    author: str
    title: str
    body: str


def draft_template() -> str:
    return get_environment().get_template("draft.txt.j2").render()


def new_draft_path(directory: Path) -> Path:
    return Path(directory) / f"{random.getrandbits(63)}.txt"


def default_editor() -> str:
    return "notepad" if sys.platform.startswith("win") else "vim"


def resolve_editor(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return ``$EDITOR`` if set, else the platform default."""
    env = os.environ if environ is None else environ
    return env.get("EDITOR") or default_editor()


def run_editor(editor: str, path: Path) -> None:
    """Run ``editor path`` in the foreground and wait for it to exit."""
    logger.info("Launching editor %s on %s", editor, path)
    try:
        completed = subprocess.run([editor, str(path)])
    except OSError as exc:
        raise EditorError(f"failed to execute text editor {editor!r}: {exc}") from exc
    if completed.returncode != 0:
        raise EditorError(
            f"failed to execute text editor {editor!r}: exit status {completed.returncode}"
        )


def parse_draft(text: str) -> Draft:
    """Split an edited draft into author, title and body.

    The first line must be ``from: <name>``, the second ``title: <title>``,
    the third is the separator, and everything after it is the body.
    """
    lines = text.split("\n")
    if len(lines) < 4:
        raise DraftValidationError("failed to create issue")

    author_line, title_line = lines[0], lines[1]
    if len(author_line) <= len(AUTHOR_PREFIX) or not author_line.startswith(AUTHOR_PREFIX):
        raise DraftValidationError("failed to create issue")
    if len(title_line) <= len(TITLE_PREFIX) or not title_line.startswith(TITLE_PREFIX):
        raise DraftValidationError("failed to create issue")

    return Draft(
        author=author_line[len(AUTHOR_PREFIX):],
        title=title_line[len(TITLE_PREFIX):],
        body="\n".join(lines[3:]),
    )


def build_entry_document(
    draft: Draft,
    status: str = DEFAULT_STATUS,
    labels: Sequence[str] = DEFAULT_LABELS,
) -> str:
    """Render the Atom entry posted to create an issue.

    The summary repeats the title. Title, body and author are XML-escaped;
    nothing else is.
    """
    template = get_environment().get_template("entry.xml.j2")
    return template.render(
        title=draft.title,
        body=draft.body,
        author=draft.author,
        status=status,
        labels=list(labels),
    )


class DraftWorkflow:
    """Template -> editor -> parse -> submit, with the draft always removed."""

    def __init__(self, client, directory: Path, editor: Optional[str] = None) -> None:
        self.client = client
        self.directory = Path(directory)
        self.editor = editor or resolve_editor()
        self.state = DraftState.INIT
        self.path: Optional[Path] = None

    def _advance(self, state: DraftState) -> None:
        logger.debug("Draft %s: %s -> %s", self.path, self.state.value, state.value)
        self.state = state

    def _write_template(self, path: Path, text: str) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        self.path = path
        with open(fd, "w", encoding="utf-8") as handle:
            handle.write(text)

    def _read_draft(self) -> Draft:
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise DraftValidationError("failed to create issue") from exc
        return parse_draft(text)

    def run(self) -> str:
        """Run the whole workflow and return the server's status line."""
        self.directory.mkdir(parents=True, exist_ok=True)
        template = draft_template()
        try:
            self._write_template(new_draft_path(self.directory), template)
            self._advance(DraftState.TEMPLATE_WRITTEN)

            run_editor(self.editor, self.path)
            self._advance(DraftState.EDITED)

            draft = self._read_draft()
            self._advance(DraftState.PARSED)

            status = self.client.create_issue(build_entry_document(draft))
            self._advance(DraftState.SUBMITTED)
            return status
        finally:
            if self.path is not None:
                with contextlib.suppress(FileNotFoundError):
                    self.path.unlink()


def create_issue(client, directory: Path, editor: Optional[str] = None) -> str:
    return DraftWorkflow(client, directory, editor=editor).run()
