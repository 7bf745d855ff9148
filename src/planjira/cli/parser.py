"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version

from planjira.config import DEFAULT_ENV_FILE
from planjira.persistence import DEFAULT_HISTORY_FILE, DEFAULT_MAPPING_FILE


def _package_version() -> str:
    try:
        return version("planjira")
    except PackageNotFoundError:
        return "0.0.0"


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--env-file",
        default=str(DEFAULT_ENV_FILE),
        help=f"File with JIRA_* variables, read when they are not exported (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="planjira", description="Import markdown development plans into Jira")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Create Jira issues from a markdown plan")
    import_parser.add_argument("file", help="Path to the markdown plan")
    mode = import_parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", action="store_true", help="Preview the issues without calling Jira")
    mode.add_argument("--create", action="store_true", help="Create the issues in Jira")
    import_parser.add_argument(
        "--update-file",
        action="store_true",
        help="Write Tracker links under each plan heading after a successful create",
    )
    import_parser.add_argument("--force", action="store_true", help="Skip the already-imported check")
    import_parser.add_argument(
        "--tasks-as-subtasks",
        action="store_true",
        help="Create plan Tasks and Subtasks as Jira Sub-tasks under each Story",
    )
    import_parser.add_argument(
        "--mapping",
        default=str(DEFAULT_MAPPING_FILE),
        help=f"Issue mapping output path (default: {DEFAULT_MAPPING_FILE})",
    )
    import_parser.add_argument(
        "--history",
        default=str(DEFAULT_HISTORY_FILE),
        help=f"Import history path (default: {DEFAULT_HISTORY_FILE})",
    )
    _add_common_arguments(import_parser)

    cleanup_parser = subparsers.add_parser("cleanup", help="Delete the issues created by an import batch")
    target = cleanup_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--list", action="store_true", help="List recorded imports")
    target.add_argument("--batch", metavar="ID", help="Delete every issue labelled with this batch id")
    target.add_argument("--file", metavar="PATH", help="Delete the issues of the recorded import of this plan")
    cleanup_parser.add_argument("--yes", "-y", action="store_true", help="Skip the confirmation prompt")
    cleanup_parser.add_argument(
        "--history",
        default=str(DEFAULT_HISTORY_FILE),
        help=f"Import history path (default: {DEFAULT_HISTORY_FILE})",
    )
    _add_common_arguments(cleanup_parser)

    transition_parser = subparsers.add_parser("transition", help="Move an issue to another status")
    transition_parser.add_argument("key", help="Issue key, e.g. MVP-123")
    transition_parser.add_argument("status", help='Target status or transition name, e.g. "In Progress"')
    _add_common_arguments(transition_parser)

    comment_parser = subparsers.add_parser("comment", help="Add a markdown comment to an issue")
    comment_parser.add_argument("key", help="Issue key, e.g. MVP-123")
    comment_parser.add_argument("text", nargs="+", help="Comment text (markdown)")
    _add_common_arguments(comment_parser)

    return parser


__all__ = ["build_parser"]
