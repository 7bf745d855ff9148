"""Time estimate normalization for Jira time tracking."""

from __future__ import annotations

import re

_RANGE = re.compile(r"(\d+)-\d+")
_ESTIMATE = re.compile(r"(\d+)\s*(hour|week|day|minute)", re.IGNORECASE)
_UNIT_SUFFIX = {"hour": "h", "week": "w", "day": "d", "minute": "m"}


def parse_time_estimate(text: str | None) -> str | None:
    """Convert ``"8 hours"``, ``"~4 hours"`` or ``"2-3 days"`` to ``8h``, ``4h``, ``2d``.

    Ranges keep their lower bound. Returns ``None`` when no duration is found.
    """
    if not text:
        return None
    estimate = _RANGE.sub(r"\1", text.removeprefix("~"), count=1)
    match = _ESTIMATE.search(estimate)
    if match is None:
        return None
    return f"{match.group(1)}{_UNIT_SUFFIX[match.group(2).lower()]}"
