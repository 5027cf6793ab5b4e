"""
Event filtering for GitHub webhooks.

Deliveries that do not describe a repository freshly created from the
configured template are acknowledged and skipped. Skipped deliveries are
expected traffic, not failures.
"""

from dataclasses import dataclass
from typing import Any

import structlog

from src.core.models import EventType, RepositoryAction, RepositoryOrigin

logger = structlog.get_logger()


@dataclass
class FilterResult:
    """Result of event filter check."""

    should_process: bool
    reason: str = ""


def should_process_event(event_name: str | None, payload: dict[str, Any]) -> FilterResult:
    """
    Accept only `repository` events with the `created` action.

    Returns FilterResult with should_process=True to process, False to skip.
    """
    action = payload.get("action")
    if event_name != EventType.REPOSITORY.value:
        result = FilterResult(should_process=False, reason=f"Event '{event_name}' not processed")
    elif action != RepositoryAction.CREATED.value:
        result = FilterResult(should_process=False, reason=f"Repository action '{action}' not processed")
    else:
        result = FilterResult(should_process=True)

    if not result.should_process:
        logger.info("event_filtered", event=event_name, action=action, reason=result.reason)
    return result


def matches_template(origin: RepositoryOrigin, expected_full_name: str) -> FilterResult:
    """
    Require the repository to have been generated from the expected template.

    The comparison is exact and case-sensitive. An empty expected name never matches.
    """
    if not expected_full_name or origin.template_full_name != expected_full_name:
        logger.info(
            "origin_filtered",
            repo=origin.full_name,
            template=origin.template_full_name,
            expected_template=expected_full_name,
        )
        return FilterResult(should_process=False, reason=f"Repository not created from {expected_full_name}")
    return FilterResult(should_process=True)
