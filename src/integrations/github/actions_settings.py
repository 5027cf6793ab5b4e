"""
GitHub Actions settings applied to newly created repositories.

Each change is a full desired-state write (PUT or PATCH), so applying it
again leaves the repository unchanged. Changes are applied one at a time and a
failed change never stops the next one.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, Field

from src.core.errors import ChangeApplicationError
from src.integrations.github.client import GitHubClient

logger = structlog.get_logger(__name__)

DEFAULT_CACHE_SIZE_LIMIT_GB = 10


@dataclass(frozen=True)
class ConfigurationChange:
    """One named, idempotent repository settings mutation."""

    setting_name: str
    method: str
    path_template: str
    body: dict[str, Any] = field(default_factory=dict)

    def path(self, owner: str, repo: str) -> str:
        return self.path_template.format(owner=owner, repo=repo)


class ConfigurationOutcome(BaseModel):
    """Result of attempting a single ConfigurationChange."""

    setting: str = Field(..., description="Name of the setting that was attempted")
    succeeded: bool = Field(..., description="Whether GitHub accepted the change")
    status_code: int | None = Field(None, description="HTTP status returned by GitHub, if any")
    error: str | None = Field(None, description="Error detail when the change failed")


def default_configuration_changes(cache_size_limit_gb: int = DEFAULT_CACHE_SIZE_LIMIT_GB) -> list[ConfigurationChange]:
    """The settings batch applied to every repository created from the template."""
    return [
        # Enable all actions and reusable workflows
        ConfigurationChange(
            setting_name="actions_permissions",
            method="PUT",
            path_template="/repos/{owner}/{repo}/actions/permissions",
            body={"enabled": True, "allowed_actions": "all"},
        ),
        # Read/write workflow token, allowed to create and approve PRs
        ConfigurationChange(
            setting_name="workflow_permissions",
            method="PUT",
            path_template="/repos/{owner}/{repo}/actions/permissions/workflow",
            body={"default_workflow_permissions": "write", "can_approve_pull_request_reviews": True},
        ),
        ConfigurationChange(
            setting_name="cache_size_limit",
            method="PATCH",
            path_template="/repos/{owner}/{repo}/actions/cache/usage-policy",
            body={"repo_cache_size_limit_in_gb": cache_size_limit_gb},
        ),
    ]


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return response.text[:200]


class ConfigurationApplier:
    """Applies a batch of ConfigurationChange objects to one repository."""

    def __init__(self, github: GitHubClient):
        self._github = github

    async def apply_change(self, owner: str, repo: str, token: str, change: ConfigurationChange) -> int:
        """
        Apply a single change and return the HTTP status GitHub answered with.

        Raises:
            ChangeApplicationError: If GitHub rejects the change or the request fails.
        """
        try:
            path = change.path(owner, repo)
        except (KeyError, IndexError) as e:
            raise ChangeApplicationError(change.setting_name, f"Invalid path template: {e}") from e

        # InvalidURL is not an HTTPError subclass
        try:
            response = await self._github.request(change.method, path, token=token, json=change.body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ChangeApplicationError(change.setting_name, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise ChangeApplicationError(change.setting_name, _error_detail(response), status_code=response.status_code)
        return response.status_code

    async def apply(
        self,
        owner: str,
        repo: str,
        token: str,
        changes: list[ConfigurationChange],
    ) -> list[ConfigurationOutcome]:
        """
        Apply every change in declared order, recording one outcome per change.

        Returns:
            Outcomes in the same order as ``changes``, even if every change fails.
        """
        outcomes: list[ConfigurationOutcome] = []

        for change in changes:
            try:
                status_code = await self.apply_change(owner, repo, token, change)
            except ChangeApplicationError as e:
                logger.warning(
                    "configuration_change_failed",
                    repo=f"{owner}/{repo}",
                    setting=change.setting_name,
                    status_code=e.status_code,
                    error=str(e),
                )
                outcomes.append(
                    ConfigurationOutcome(
                        setting=change.setting_name, succeeded=False, status_code=e.status_code, error=str(e)
                    )
                )
            else:
                logger.info("configuration_change_applied", repo=f"{owner}/{repo}", setting=change.setting_name)
                outcomes.append(
                    ConfigurationOutcome(setting=change.setting_name, succeeded=True, status_code=status_code)
                )

        logger.info(
            "configuration_results",
            repo=f"{owner}/{repo}",
            succeeded=sum(1 for outcome in outcomes if outcome.succeeded),
            failed=sum(1 for outcome in outcomes if not outcome.succeeded),
        )
        return outcomes
