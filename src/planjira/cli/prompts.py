"""Interactive confirmations (questionary)."""

from __future__ import annotations

from enum import StrEnum

import questionary


class ReimportAction(StrEnum):
    SKIP = "skip"
    REIMPORT = "reimport"
    CONTINUE = "continue"


def choose_reimport_action() -> ReimportAction:
    """Ask what to do with a plan that was already imported.

    Re-importing creates duplicate issues, so it needs a second confirmation.
    Cancelling either prompt (Ctrl-C) counts as skip.
    """
    answer = questionary.select(
        "What would you like to do?",
        choices=[
            questionary.Choice("Skip (cancel)", value=ReimportAction.SKIP),
            questionary.Choice("Re-import (create new issues)", value=ReimportAction.REIMPORT),
            questionary.Choice("Continue anyway", value=ReimportAction.CONTINUE),
        ],
    ).ask()
    if answer is None:
        return ReimportAction.SKIP

    action = ReimportAction(answer)
    if action is ReimportAction.REIMPORT:
        confirmed = questionary.confirm(
            "This will create duplicate issues in Jira. Are you sure?", default=False
        ).ask()
        if not confirmed:
            return ReimportAction.SKIP
    return action


def confirm_deletion(count: int) -> bool:
    return bool(questionary.confirm(f"Delete all {count} issue(s)? This cannot be undone.", default=False).ask())
