"""
GitHub API adapter.

This package provides GitHub App authentication and the repository settings
calls made on behalf of an installation.
"""

from src.integrations.github.actions_settings import (
    ConfigurationApplier,
    ConfigurationChange,
    ConfigurationOutcome,
    default_configuration_changes,
)
from src.integrations.github.app_auth import CredentialExchanger, SignedAssertion, TokenSigner
from src.integrations.github.client import GitHubClient

__all__ = [
    "ConfigurationApplier",
    "ConfigurationChange",
    "ConfigurationOutcome",
    "CredentialExchanger",
    "GitHubClient",
    "SignedAssertion",
    "TokenSigner",
    "default_configuration_changes",
]
