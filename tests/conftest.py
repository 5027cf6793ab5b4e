"""
Pytest configuration: project root on sys.path and shared fixtures.
"""

import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
import respx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

ROOT = Path(__file__).resolve().parent.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.core.config import Config, GitHubConfig, LoggingConfig, TemplateConfig  # noqa: E402
from tests.helpers import API_BASE_URL, EXPECTED_TEMPLATE, INSTALLATION_ID, WEBHOOK_SECRET  # noqa: E402


@pytest.fixture(autouse=True)
def _clear_global_respx_routes() -> Iterator[None]:
    """Drop routes left on respx's global router by tests that never started it."""
    yield
    respx.mock.clear()


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """A throwaway RSA key for signing app JWTs."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def settings(private_key_pem: str) -> Config:
    """Configuration injected into the pipeline instead of the process environment."""
    return Config(
        github=GitHubConfig(
            app_id="123456",
            private_key=private_key_pem,
            webhook_secret=WEBHOOK_SECRET,
            api_base_url=API_BASE_URL,
        ),
        template=TemplateConfig(expected_full_name=EXPECTED_TEMPLATE, cache_size_limit_gb=10),
        logging=LoggingConfig(),
    )


@pytest.fixture
def repository_created_payload() -> dict[str, Any]:
    """A `repository.created` payload for a repository generated from the template."""
    return {
        "action": "created",
        "repository": {
            "id": 987654,
            "name": "new-agent",
            "full_name": "octocat/new-agent",
            "private": True,
            "owner": {"login": "octocat", "id": 1, "type": "User"},
            "template_repository": {"id": 111, "name": "agent-template", "full_name": EXPECTED_TEMPLATE},
        },
        "installation": {"id": INSTALLATION_ID},
        "sender": {"login": "octocat", "id": 1, "type": "User"},
    }
