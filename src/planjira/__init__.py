"""Public API surface for planjira."""

__version__ = "0.1.0"

from planjira.config import apply_env_file, load_config, load_env_file
from planjira.contracts.config import JiraConfig
from planjira.contracts.document import Document
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
from planjira.contracts.imports import ImportResult
from planjira.contracts.plan import Epic, ParsedPlan, PlanNodeType, Story, Subtask, Task
from planjira.engine import ImportEngine, ImportProgress, NullImportProgress, batch_label, generate_batch_id
from planjira.jira import JiraClient, redact_auth
from planjira.plan import (
    PlanParser,
    heading_id,
    inject_links,
    load_plan,
    parse_plan,
    parse_time_estimate,
    plan_item_id,
    summary_with_plan_id,
)
from planjira.renderers import markdown_to_adf

__all__ = [
    "__version__",
    "AuthenticationError",
    "ConfigError",
    "Document",
    "Epic",
    "ImportEngine",
    "ImportProgress",
    "ImportResult",
    "ImportRunError",
    "JiraApiError",
    "JiraClient",
    "JiraConfig",
    "NullImportProgress",
    "ParsedPlan",
    "PlanJiraError",
    "PlanLoadError",
    "PlanNodeType",
    "PlanParser",
    "ProviderError",
    "Story",
    "Subtask",
    "Task",
    "TransitionError",
    "apply_env_file",
    "batch_label",
    "generate_batch_id",
    "heading_id",
    "inject_links",
    "load_config",
    "load_env_file",
    "load_plan",
    "markdown_to_adf",
    "parse_plan",
    "parse_time_estimate",
    "plan_item_id",
    "redact_auth",
    "summary_with_plan_id",
]
