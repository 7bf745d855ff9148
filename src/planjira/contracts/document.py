"""Rich-text document contracts (Atlassian Document Format).

Nodes are frozen pydantic models whose field names mirror ADF, so a
:class:`Document` serializes straight into the JSON Jira expects::

    fields["description"] = document.to_adf()
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class MarkType(StrEnum):
    STRONG = "strong"
    EM = "em"
    CODE = "code"
    LINK = "link"


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class LinkAttrs(_Node):
    href: str


class Mark(_Node):
    type: MarkType
    attrs: LinkAttrs | None = None


class Text(_Node):
    """Inline span: plain text, or text carrying exactly one mark."""

    type: Literal["text"] = "text"
    text: str
    marks: tuple[Mark, ...] | None = None

    @classmethod
    def plain(cls, text: str) -> Text:
        return cls(text=text)

    @classmethod
    def marked(cls, text: str, mark: MarkType) -> Text:
        return cls(text=text, marks=(Mark(type=mark),))

    @classmethod
    def link(cls, text: str, href: str) -> Text:
        return cls(text=text, marks=(Mark(type=MarkType.LINK, attrs=LinkAttrs(href=href)),))

    @property
    def mark(self) -> MarkType | None:
        return self.marks[0].type if self.marks else None


class Paragraph(_Node):
    type: Literal["paragraph"] = "paragraph"
    content: tuple[Text, ...]

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.content)


class HeadingAttrs(_Node):
    level: int = Field(ge=1, le=6)


class Heading(_Node):
    type: Literal["heading"] = "heading"
    attrs: HeadingAttrs
    content: tuple[Text, ...]


class CodeBlockAttrs(_Node):
    language: str | None = None


class CodeBlock(_Node):
    type: Literal["codeBlock"] = "codeBlock"
    attrs: CodeBlockAttrs = Field(default_factory=CodeBlockAttrs)
    content: tuple[Text, ...] = ()


class ListItem(_Node):
    type: Literal["listItem"] = "listItem"
    content: tuple[Paragraph, ...]


class BulletList(_Node):
    type: Literal["bulletList"] = "bulletList"
    content: tuple[ListItem, ...]


class OrderedList(_Node):
    type: Literal["orderedList"] = "orderedList"
    content: tuple[ListItem, ...]


class Rule(_Node):
    type: Literal["rule"] = "rule"


Block = Annotated[
    Heading | CodeBlock | OrderedList | BulletList | Rule | Paragraph,
    Field(discriminator="type"),
]


class Document(_Node):
    type: Literal["doc"] = "doc"
    version: int = 1
    content: tuple[Block, ...] = Field(min_length=1)

    def to_adf(self) -> dict[str, Any]:
        """Serialize to an ADF JSON-compatible dict."""
        return self.model_dump(mode="json", exclude_none=True)
