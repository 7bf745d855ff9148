"""Transition and comment commands."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from planjira.contracts.exceptions import TransitionError
from planjira.jira.client import JiraClient

_LOG = logging.getLogger(__name__)


def _transition_names(transition: dict[str, Any]) -> tuple[str, ...]:
    names = [transition.get("name"), (transition.get("to") or {}).get("name")]
    return tuple(name for name in names if name)


async def transition(client: JiraClient, key: str, status: str) -> bool:
    """Move *key* to *status*, matched against transition or target status names.

    Idempotent: an issue already in *status* is left alone.

    Returns:
        ``True`` when a transition was performed.

    Raises:
        TransitionError: No available transition leads to *status*.
    """
    target = status.strip().lower()
    issue = await client.get_issue(key)
    current = issue["fields"]["status"]["name"]
    if current.lower() == target:
        _LOG.info("%s is already in %r", key, current)
        return False

    transitions = await client.get_transitions(key)
    for candidate in transitions:
        if target in (name.lower() for name in _transition_names(candidate)):
            await client.transition_issue(key, str(candidate["id"]))
            return True

    available = tuple(_transition_names(candidate)[0] for candidate in transitions if _transition_names(candidate))
    raise TransitionError(
        f'transition "{status}" not available for {key}; current status: {current}, '
        f"available: {', '.join(available) or 'none'}",
        current_status=current,
        available=available,
    )


async def run_transition(args: argparse.Namespace) -> int:
    import planjira.cli as cli

    config = cli.resolve_config(args)
    async with cli.JiraClient(config) as client:
        moved = await transition(client, args.key, args.status)

    if moved:
        print(f"{args.key} -> {args.status}")
    else:
        print(f"{args.key} is already in {args.status!r}; no transition needed")
    return 0


async def run_comment(args: argparse.Namespace) -> int:
    import planjira.cli as cli

    text = " ".join(args.text).strip()
    if not text:
        print("error: comment text is required", file=sys.stderr)
        return 2

    config = cli.resolve_config(args)
    async with cli.JiraClient(config) as client:
        await client.add_comment(args.key, cli.markdown_to_adf(text))

    print(f"{args.key} <- comment added")
    return 0


__all__ = ["run_comment", "run_transition", "transition"]
