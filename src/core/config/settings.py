"""
Main configuration class that composes all configs.
"""

import os

from dotenv import load_dotenv

from src.core.config.github_config import GitHubConfig
from src.core.config.logging_config import LoggingConfig
from src.core.config.template_config import TemplateConfig

# Load environment variables from a .env file
load_dotenv()


def _int_env(name: str, default: int) -> int:
    """Read an integer variable. Unparseable values become 0 so validate() reports them."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return 0


class Config:
    """Main configuration class."""

    def __init__(
        self,
        github: GitHubConfig,
        template: TemplateConfig,
        logging: LoggingConfig | None = None,
    ) -> None:
        self.github = github
        self.template = template
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_env(cls) -> "Config":
        """Build a configuration from the current process environment."""
        github = GitHubConfig(
            app_id=os.getenv("APP_IDENTIFIER", ""),
            private_key=os.getenv("APP_PRIVATE_KEY", ""),
            webhook_secret=os.getenv("WEBHOOK_SHARED_SECRET", ""),
            api_base_url=os.getenv("GITHUB_API_BASE_URL", "https://api.github.com").rstrip("/"),
            api_version=os.getenv("GITHUB_API_VERSION", "2022-11-28"),
            user_agent=os.getenv("GITHUB_USER_AGENT", "Template-Repo-Configurator"),
        )

        template = TemplateConfig(
            expected_full_name=os.getenv("EXPECTED_TEMPLATE_FULL_NAME", ""),
            cache_size_limit_gb=_int_env("REPO_CACHE_SIZE_LIMIT_GB", 10),
        )

        logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "console"),
        )

        return cls(github=github, template=template, logging=logging)

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if not self.github.app_id:
            errors.append("APP_IDENTIFIER is required")

        if not self.github.private_key:
            errors.append("APP_PRIVATE_KEY is required")

        if not self.github.webhook_secret:
            errors.append("WEBHOOK_SHARED_SECRET is required")

        if not self.template.expected_full_name:
            errors.append("EXPECTED_TEMPLATE_FULL_NAME is required")

        if self.template.cache_size_limit_gb <= 0:
            errors.append("REPO_CACHE_SIZE_LIMIT_GB must be a positive integer")

        if self.logging.format not in ("console", "json"):
            errors.append("LOG_FORMAT must be 'console' or 'json'")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config.from_env()
