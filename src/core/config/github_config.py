"""
GitHub App configuration.
"""

from dataclasses import dataclass


@dataclass
class GitHubConfig:
    """Credentials and API settings for the GitHub App."""

    app_id: str
    private_key: str
    webhook_secret: str
    api_base_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"
    user_agent: str = "Template-Repo-Configurator"
