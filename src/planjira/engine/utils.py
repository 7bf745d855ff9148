"""Batch identifiers shared by the import engine and cleanup."""

from __future__ import annotations

import secrets
import time

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

BATCH_LABEL_PREFIX = "import-batch-"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_batch_id() -> str:
    """Millisecond timestamp in base 36, a dash, and 8 random hex characters."""
    return f"{_to_base36(time.time_ns() // 1_000_000)}-{secrets.token_hex(4)}"


def batch_label(batch_id: str) -> str:
    return f"{BATCH_LABEL_PREFIX}{batch_id}"
