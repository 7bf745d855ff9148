"""Plan module entrypoints."""

from planjira.plan.estimates import parse_time_estimate
from planjira.plan.headings import HeadingMatch, heading_id, match_heading, plan_item_id, summary_with_plan_id
from planjira.plan.links import inject_links, issue_url
from planjira.plan.loader import LoadedPlan, PlanLoader, load_plan
from planjira.plan.parser import PlanParser, parse_plan

__all__ = [
    "HeadingMatch",
    "LoadedPlan",
    "PlanLoader",
    "PlanParser",
    "heading_id",
    "inject_links",
    "issue_url",
    "load_plan",
    "match_heading",
    "parse_plan",
    "parse_time_estimate",
    "plan_item_id",
    "summary_with_plan_id",
]
