"""Public contracts for planjira."""

from planjira.contracts.config import JiraConfig
from planjira.contracts.document import (
    Block,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    ListItem,
    MarkType,
    OrderedList,
    Paragraph,
    Rule,
    Text,
)
from planjira.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    ImportRunError,
    JiraApiError,
    PlanJiraError,
    PlanLoadError,
    ProviderError,
    TransitionError,
)
from planjira.contracts.imports import CleanupResult, ImportHistory, ImportRecord, ImportResult, IssueMapping
from planjira.contracts.plan import Epic, ParsedPlan, PlanNode, PlanNodeType, Story, Subtask, Task

__all__ = [
    "AuthenticationError",
    "Block",
    "BulletList",
    "CleanupResult",
    "CodeBlock",
    "ConfigError",
    "Document",
    "Epic",
    "Heading",
    "ImportHistory",
    "ImportRecord",
    "ImportResult",
    "ImportRunError",
    "IssueMapping",
    "JiraApiError",
    "JiraConfig",
    "ListItem",
    "MarkType",
    "OrderedList",
    "Paragraph",
    "ParsedPlan",
    "PlanJiraError",
    "PlanLoadError",
    "PlanNode",
    "PlanNodeType",
    "ProviderError",
    "Rule",
    "Story",
    "Subtask",
    "Task",
    "Text",
    "TransitionError",
]
