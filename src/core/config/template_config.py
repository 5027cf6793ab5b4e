"""
Template origin configuration.
"""

from dataclasses import dataclass


@dataclass
class TemplateConfig:
    """Which template repositories are configured, and with what settings."""

    expected_full_name: str = ""
    cache_size_limit_gb: int = 10
