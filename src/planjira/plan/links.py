"""Write tracker links back into a plan document after import."""

from __future__ import annotations

import re
from collections.abc import Mapping

from planjira.plan.headings import heading_id

LINK_LABEL = "Tracker"

# Legacy ``**JIRA:**`` lines are recognized so older plans get their links replaced.
_LINK_LINE = re.compile(r"^\*\*(?:Tracker|JIRA):\*\* \[.+\]\(.+\)")


def issue_url(base_url: str, key: str) -> str:
    return f"{base_url.rstrip('/')}/browse/{key}"


def link_line(key: str, base_url: str) -> str:
    return f"**{LINK_LABEL}:** [{key}]({issue_url(base_url, key)})"


def inject_links(original_text: str, issue_keys: Mapping[str, str], base_url: str) -> str:
    """Insert a tracker link line below every heading whose id has a key.

    A link line already sitting directly below such a heading is replaced, so
    applying the same mapping twice gives the same text as applying it once.
    """
    lines = original_text.split("\n")
    out: list[str] = []
    previous_id: str | None = None

    for line in lines:
        node_id = heading_id(line)
        if node_id is not None and node_id in issue_keys:
            out.append(line)
            out.append(link_line(issue_keys[node_id], base_url))
        elif not (_LINK_LINE.match(line) and previous_id is not None and previous_id in issue_keys):
            out.append(line)
        previous_id = node_id

    return "\n".join(out)
