"""Command-line interface for planjira."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from planjira.cli import prompts as prompts
from planjira.cli.app import main as main
from planjira.cli.commands import cleanup as cleanup_command
from planjira.cli.commands import import_plan as import_command
from planjira.cli.commands import transition as transition_command
from planjira.cli.common import resolve_config as resolve_config
from planjira.cli.parser import _package_version as _package_version
from planjira.cli.parser import build_parser as build_parser
from planjira.config import apply_env_file as apply_env_file
from planjira.config import load_config as load_config
from planjira.engine import ImportEngine as ImportEngine
from planjira.engine import batch_label as batch_label
from planjira.engine import generate_batch_id as generate_batch_id
from planjira.jira import JiraClient as JiraClient
from planjira.persistence import load_import_history as load_import_history
from planjira.persistence import persist_issue_mapping as persist_issue_mapping
from planjira.persistence import record_import as record_import
from planjira.plan import inject_links as inject_links
from planjira.plan import load_plan as load_plan
from planjira.renderers import markdown_to_adf as markdown_to_adf

_format_import_summary = import_command.format_import_summary
_format_cleanup_summary = cleanup_command.format_cleanup_summary

_run_import = import_command.run_import
_run_cleanup = cleanup_command.run_cleanup
_run_transition = transition_command.run_transition
_run_comment = transition_command.run_comment
