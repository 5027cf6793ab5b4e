"""
Configuration package - unified access point.

This package provides all configuration classes and the global config instance.
"""

from src.core.config.github_config import GitHubConfig
from src.core.config.logging_config import LoggingConfig
from src.core.config.settings import Config, config
from src.core.config.template_config import TemplateConfig

__all__ = [
    "Config",
    "GitHubConfig",
    "LoggingConfig",
    "TemplateConfig",
    "config",
]
