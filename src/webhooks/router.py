from collections.abc import AsyncIterator

import httpx
import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from src.core.config import Config, config
from src.core.models import WebhookDelivery
from src.webhooks.dispatcher import DispatchResult, WebhookDispatcher

logger = structlog.get_logger(__name__)
router = APIRouter()


def get_settings() -> Config:
    """Returns the process configuration. Tests override this dependency."""
    return config


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound HTTP client per delivery, closed when the request ends."""
    async with httpx.AsyncClient() as client:
        yield client


def get_dispatcher(
    settings: Config = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> WebhookDispatcher:
    return WebhookDispatcher.from_config(settings, http_client)


def _to_response(result: DispatchResult) -> Response:
    if result.is_json:
        return JSONResponse(content=result.content, status_code=result.status_code)
    return PlainTextResponse(content=result.content, status_code=result.status_code)


# Every verb is routed here so the dispatcher answers non-POST requests itself.
@router.api_route(
    "/github",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    summary="Endpoint for GitHub App webhooks",
)
async def github_webhook_endpoint(
    request: Request,
    dispatcher_instance: WebhookDispatcher = Depends(get_dispatcher),
) -> Response:
    """
    Receives GitHub App webhook deliveries.

    The raw body is captured before any parsing so the dispatcher can verify
    the signature over the exact bytes GitHub signed.
    """
    raw_body = await request.body()
    delivery = WebhookDelivery(
        method=request.method,
        raw_body=raw_body,
        signature_header=request.headers.get("X-Hub-Signature-256"),
        event_type=request.headers.get("X-GitHub-Event"),
        delivery_id=request.headers.get("X-GitHub-Delivery"),
    )

    result = await dispatcher_instance.dispatch(delivery)
    logger.info(
        "delivery_processed",
        delivery_id=delivery.delivery_id,
        state=result.state.value,
        status_code=result.status_code,
    )
    return _to_response(result)
