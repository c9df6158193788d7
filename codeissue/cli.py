"""Command-line interface for codeissue."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import requests

from .auth import login
from .client import FeedClient
from .config import AppConfig, default_settings_path, parse_settings
from .draft import create_issue
from .errors import CodeIssueError
from .renderers import issue_lines, render_entry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="codeissue",
        usage="%(prog)s [-c ID ... | -s WORD | -C]",
        description="List, search, show and create issues on a hosted issue tracker.",
    )
    parser.add_argument("ids", nargs="*", metavar="ID", help="Issue ids to show.")
    parser.add_argument("-s", dest="search", metavar="WORD", default="", help="search issues")
    parser.add_argument("-C", dest="create", action="store_true", help="create issue")
    parser.add_argument("-c", dest="comments", action="store_true", help="show comments")

    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings.json. Defaults to the per-user config directory.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides settings.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides settings.",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def build_session() -> requests.Session:
    return requests.Session()


def show_issue(client: FeedClient, issue_id: str, comments: bool = False) -> None:
    print(render_entry(client.show_issue(issue_id)))
    if comments:
        for comment in client.list_comments(issue_id).entries:
            print(render_entry(comment))


def run(args: argparse.Namespace, config: AppConfig, session: requests.Session) -> None:
    """Authenticate and dispatch a single command."""
    token = login(config.email, config.password, session=session)
    client = FeedClient(config.project, token, session=session, timeout=config.timeout)

    if args.create:
        directory = Path(config.settings_dir) if config.settings_dir else default_settings_path().parent
        print(create_issue(client, directory))
    elif args.search:
        for line in issue_lines(client.search_issues(args.search)):
            print(line)
    elif not args.ids:
        for line in issue_lines(client.list_issues()):
            print(line)
    else:
        for issue_id in args.ids:
            show_issue(client, issue_id, comments=args.comments)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = parse_settings(args.config or default_settings_path())

        log_level = args.log_level or config.logging.level
        log_file = args.log_file or config.logging.file
        configure_logging(log_level, log_file)

        logger.info("Using project %s", config.project)

        with build_session() as session:
            run(args, config, session)
    except ValueError as exc:
        parser.error(str(exc))
    except (CodeIssueError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    return 0
