"""Markdown to Atlassian Document Format conversion.

Supported markdown: headings, bold / italic / inline code, links, ordered and
bullet lists, checkboxes, fenced code blocks with a language, horizontal rules,
and paragraphs. Formatting does not nest; the first span found claims its range.

Checkbox items render as plain bullets prefixed with a ballot box.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from planjira.contracts.document import (
    Block,
    BulletList,
    CodeBlock,
    CodeBlockAttrs,
    Document,
    Heading,
    HeadingAttrs,
    ListItem,
    MarkType,
    OrderedList,
    Paragraph,
    Rule,
    Text,
)

EMPTY_DESCRIPTION = "No description provided"
TOOL_NAME = "planjira"

_FENCE = "```"
_HEADING = re.compile(r"^(#{1,6}) (.+)")
_ORDERED_ITEM = re.compile(r"^\d+\. ")
_BULLET_ITEM = re.compile(r"^[-*] ")
_CHECKBOX_ITEM = re.compile(r"^[-*] \[([ x])\] (.+)")
_RULE = re.compile(r"^---+$")

_CHECKED = "☑ "
_UNCHECKED = "☐ "

# (mark, pattern); link patterns capture text and href.
_INLINE_PATTERNS: tuple[tuple[MarkType, re.Pattern[str]], ...] = (
    (MarkType.LINK, re.compile(r"\[([^\]]+)\]\(([^)]+)\)")),
    (MarkType.STRONG, re.compile(r"\*\*([^*]+)\*\*")),
    (MarkType.EM, re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)")),
    (MarkType.CODE, re.compile(r"`([^`]+)`")),
)


def parse_inline(text: str) -> tuple[Text, ...]:
    """Split *text* into plain and marked spans; never returns an empty tuple."""
    found = [(mark, match) for mark, pattern in _INLINE_PATTERNS for match in pattern.finditer(text)]
    # Stable sort: on equal starts the pattern listed first wins.
    found.sort(key=lambda item: item[1].start())

    spans: list[Text] = []
    last_end = 0
    for mark, match in found:
        start, end = match.span()
        if start < last_end:
            continue
        if start > last_end:
            spans.append(Text.plain(text[last_end:start]))
        if mark is MarkType.LINK:
            spans.append(Text.link(match.group(1), match.group(2)))
        else:
            spans.append(Text.marked(match.group(1), mark))
        last_end = end

    if last_end < len(text):
        spans.append(Text.plain(text[last_end:]))

    return tuple(spans) or (Text.plain(text),)


def _is_block_start(line: str) -> bool:
    return (
        line.startswith("#")
        or line.startswith(_FENCE)
        or bool(_ORDERED_ITEM.match(line))
        or bool(_BULLET_ITEM.match(line))
        or bool(_RULE.match(line))
        or not line.strip()
    )


def _list_item(text: str) -> ListItem:
    return ListItem(content=(Paragraph(content=parse_inline(text)),))


class _BlockScanner:
    """Line cursor that groups markdown lines into ADF blocks."""

    def __init__(self, markdown: str) -> None:
        self._lines = markdown.split("\n")
        self._pos = 0
        self._blocks: list[Block] = []

    def scan(self) -> list[Block]:
        while self._pos < len(self._lines):
            line = self._lines[self._pos]

            if line.startswith(_FENCE):
                self._code_block()
            elif heading := _HEADING.match(line):
                level = min(len(heading.group(1)), 6)
                self._blocks.append(Heading(attrs=HeadingAttrs(level=level), content=parse_inline(heading.group(2))))
                self._pos += 1
            elif _ORDERED_ITEM.match(line):
                self._ordered_list()
            elif _BULLET_ITEM.match(line):
                self._bullet_list()
            elif _RULE.match(line):
                self._blocks.append(Rule())
                self._pos += 1
            elif not line.strip():
                self._pos += 1
            else:
                self._paragraph()

        return self._blocks

    def _code_block(self) -> None:
        language = self._lines[self._pos][len(_FENCE) :].strip() or None
        self._pos += 1
        code_lines: list[str] = []
        while self._pos < len(self._lines):
            line = self._lines[self._pos]
            self._pos += 1
            if line.startswith(_FENCE):
                break
            code_lines.append(line)

        code = "\n".join(code_lines)
        self._blocks.append(
            CodeBlock(attrs=CodeBlockAttrs(language=language), content=(Text.plain(code),) if code else ())
        )

    def _ordered_list(self) -> None:
        items: list[ListItem] = []
        while self._pos < len(self._lines) and _ORDERED_ITEM.match(self._lines[self._pos]):
            items.append(_list_item(_ORDERED_ITEM.sub("", self._lines[self._pos], count=1)))
            self._pos += 1
        self._blocks.append(OrderedList(content=tuple(items)))

    def _bullet_list(self) -> None:
        items: list[ListItem] = []
        while self._pos < len(self._lines):
            line = self._lines[self._pos]
            if checkbox := _CHECKBOX_ITEM.match(line):
                prefix = _CHECKED if checkbox.group(1) == "x" else _UNCHECKED
                items.append(_list_item(prefix + checkbox.group(2)))
            elif _BULLET_ITEM.match(line):
                items.append(_list_item(_BULLET_ITEM.sub("", line, count=1)))
            else:
                break
            self._pos += 1
        self._blocks.append(BulletList(content=tuple(items)))

    def _paragraph(self) -> None:
        paragraph_lines = [self._lines[self._pos]]
        self._pos += 1
        while self._pos < len(self._lines) and not _is_block_start(self._lines[self._pos]):
            paragraph_lines.append(self._lines[self._pos])
            self._pos += 1
        self._blocks.append(Paragraph(content=parse_inline(" ".join(paragraph_lines))))


def empty_document() -> Document:
    return Document(content=(Paragraph(content=(Text.plain(EMPTY_DESCRIPTION),)),))


def markdown_to_adf(markdown: str | None) -> Document:
    """Convert a markdown description into an ADF document.

    Empty or whitespace-only input yields a single placeholder paragraph.
    """
    if not markdown or not markdown.strip():
        return empty_document()
    blocks = _BlockScanner(markdown).scan()
    if not blocks:
        return empty_document()
    return Document(content=tuple(blocks))


def audit_trail_blocks(file_path: str, batch_id: str, timestamp: datetime | None = None) -> tuple[Block, ...]:
    """Blocks recording where an issue came from: source plan, batch, and import time."""
    imported_at = (timestamp or datetime.now(UTC)).isoformat()
    return (
        Rule(),
        Paragraph(
            content=(
                Text.plain("Created by "),
                Text.marked(TOOL_NAME, MarkType.CODE),
                Text.plain(" from: "),
                Text.marked(file_path, MarkType.CODE),
            )
        ),
        Paragraph(content=(Text.plain("Batch ID: "), Text.marked(batch_id, MarkType.CODE))),
        Paragraph(content=(Text.plain("Import date: "), Text.marked(imported_at, MarkType.CODE))),
        Rule(),
    )


def prepend_audit_trail(
    document: Document, file_path: str, batch_id: str, timestamp: datetime | None = None
) -> Document:
    """Return a copy of *document* with the audit trail ahead of its content."""
    trail = audit_trail_blocks(file_path, batch_id, timestamp)
    return document.model_copy(update={"content": (*trail, *document.content)})
