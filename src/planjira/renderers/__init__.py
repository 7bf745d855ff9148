"""Description renderers."""

from planjira.renderers.adf import (
    EMPTY_DESCRIPTION,
    audit_trail_blocks,
    empty_document,
    markdown_to_adf,
    parse_inline,
    prepend_audit_trail,
)

__all__ = [
    "EMPTY_DESCRIPTION",
    "audit_trail_blocks",
    "empty_document",
    "markdown_to_adf",
    "parse_inline",
    "prepend_audit_trail",
]
