"""
Integrations for external services and APIs.

This package contains the GitHub App integration: app authentication and the
repository settings API.
"""
