"""
Shared builders for webhook deliveries used across unit and integration tests.
"""

import json
from typing import Any

from src.core.models import WebhookDelivery
from src.webhooks.auth import compute_signature

WEBHOOK_SECRET = "It's a Secret to Everybody"
EXPECTED_TEMPLATE = "octo-org/agent-template"
API_BASE_URL = "https://api.github.com"
INSTALLATION_ID = 424242
DELIVERY_ID = "72d3162e-cc78-11e3-81ab-4c9367dc0958"


def make_delivery(
    payload: dict[str, Any] | None = None,
    *,
    raw_body: bytes | None = None,
    event: str | None = "repository",
    method: str = "POST",
    secret: str = WEBHOOK_SECRET,
    signature: str | None = None,
) -> WebhookDelivery:
    """Build a delivery whose signature is valid for ``secret`` unless one is given."""
    body = raw_body if raw_body is not None else json.dumps(payload or {}).encode()
    return WebhookDelivery(
        method=method,
        raw_body=body,
        signature_header=signature if signature is not None else compute_signature(body, secret),
        event_type=event,
        delivery_id=DELIVERY_ID,
    )


def webhook_headers(body: bytes, event: str = "repository", secret: str = WEBHOOK_SECRET) -> dict[str, str]:
    """Headers GitHub sends with a delivery of ``body``."""
    return {
        "X-GitHub-Event": event,
        "X-GitHub-Delivery": DELIVERY_ID,
        "X-Hub-Signature-256": compute_signature(body, secret),
        "Content-Type": "application/json",
    }
