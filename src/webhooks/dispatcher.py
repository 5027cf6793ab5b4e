import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
import structlog

from src.core.config import Config
from src.core.errors import AuthenticationError, CredentialExchangeError, KeySigningError, MalformedRequestError
from src.core.models import RepositoryOrigin, WebhookDelivery
from src.core.utils.event_filter import matches_template, should_process_event
from src.core.utils.logging import log_operation
from src.integrations.github.actions_settings import (
    ConfigurationApplier,
    ConfigurationChange,
    default_configuration_changes,
)
from src.integrations.github.app_auth import CredentialExchanger, TokenSigner
from src.integrations.github.client import GitHubClient
from src.webhooks.auth import verify_signature
from src.webhooks.models import ConfigurationResponse, ErrorResponse

logger = structlog.get_logger(__name__)


class DispatchState(Enum):
    """Processing stages of a delivery, in the order they are reached."""

    RECEIVED = "received"
    BODY_READ = "body_read"
    SIGNATURE_CHECKED = "signature_checked"
    PARSED = "parsed"
    FILTERED = "filtered"
    ORIGIN_CHECKED = "origin_checked"
    AUTHENTICATED = "authenticated"
    TOKEN_ISSUED = "token_issued"
    CONFIGURED = "configured"
    RESPONDED = "responded"


@dataclass(frozen=True)
class DispatchResult:
    """
    The definitive answer for one delivery.

    ``state`` is the stage processing stopped at; ``RESPONDED`` means the
    delivery went through the whole pipeline.
    """

    status_code: int
    state: DispatchState
    content: str | dict[str, Any]

    @property
    def is_json(self) -> bool:
        return isinstance(self.content, dict)

    @classmethod
    def text(cls, status_code: int, message: str, state: DispatchState) -> "DispatchResult":
        return cls(status_code=status_code, state=state, content=message)

    @classmethod
    def error(cls, status_code: int, message: str, state: DispatchState) -> "DispatchResult":
        return cls(status_code=status_code, state=state, content=ErrorResponse(error=message).model_dump())


class WebhookDispatcher:
    """
    Runs one webhook delivery through the configuration pipeline.

    Every gate either lets the delivery continue or ends it with a
    DispatchResult. Individual settings that fail to apply are reported in the
    response body; they never fail the delivery.
    """

    def __init__(
        self,
        settings: Config,
        exchanger: CredentialExchanger,
        applier: ConfigurationApplier,
        changes: list[ConfigurationChange] | None = None,
    ):
        self._settings = settings
        self._exchanger = exchanger
        self._applier = applier
        self._changes = (
            changes if changes is not None else default_configuration_changes(settings.template.cache_size_limit_gb)
        )

    @classmethod
    def from_config(cls, settings: Config, http_client: httpx.AsyncClient) -> "WebhookDispatcher":
        """Wire the signer, exchanger and applier around a single HTTP client."""
        github = GitHubClient(http_client, settings.github)
        signer = TokenSigner(settings.github.app_id, settings.github.private_key)
        return cls(
            settings=settings,
            exchanger=CredentialExchanger(signer, github),
            applier=ConfigurationApplier(github),
        )

    async def dispatch(self, delivery: WebhookDelivery) -> DispatchResult:
        state = DispatchState.RECEIVED
        logger.info("delivery_received", event=delivery.event_type, delivery_id=delivery.delivery_id)

        try:
            if delivery.method.upper() != "POST":
                return DispatchResult.text(405, "Method not allowed", state)

            # The router hands over the raw bytes before anything else touches them.
            state = DispatchState.BODY_READ

            state = DispatchState.SIGNATURE_CHECKED
            if not verify_signature(delivery.raw_body, delivery.signature_header, self._settings.github.webhook_secret):
                raise AuthenticationError()

            state = DispatchState.PARSED
            payload = self._parse(delivery.raw_body)

            state = DispatchState.FILTERED
            if not should_process_event(delivery.event_type, payload).should_process:
                return DispatchResult.text(200, "Event ignored", state)

            state = DispatchState.ORIGIN_CHECKED
            origin = RepositoryOrigin.from_payload(payload)
            if not matches_template(origin, self._settings.template.expected_full_name).should_process:
                return DispatchResult.text(200, "Not from target template", state)

            state = DispatchState.AUTHENTICATED
            installation_id = self._require_installation(origin)

            state = DispatchState.TOKEN_ISSUED
            logger.info(
                "configuring_repository",
                repo=origin.full_name,
                template=origin.template_full_name,
                installation_id=installation_id,
            )
            async with log_operation("installation_token_exchange", installation_id=installation_id):
                token = await self._exchanger.exchange(installation_id)

            state = DispatchState.CONFIGURED
            async with log_operation("repository_configuration", repo=origin.full_name):
                outcomes = await self._applier.apply(origin.owner, origin.name, token, self._changes)

            state = DispatchState.RESPONDED
            response = ConfigurationResponse(
                message=f"Configured {origin.full_name}",
                repository=origin.full_name,
                outcomes=outcomes,
            )
            return DispatchResult(status_code=200, state=state, content=response.model_dump())

        except AuthenticationError as e:
            return DispatchResult.text(401, str(e), state)
        except MalformedRequestError as e:
            logger.warning("malformed_delivery", delivery_id=delivery.delivery_id, error=str(e))
            return DispatchResult.text(400, str(e), state)
        except (KeySigningError, CredentialExchangeError) as e:
            return DispatchResult.error(500, str(e), state)
        except Exception as e:
            logger.exception("delivery_processing_failed", delivery_id=delivery.delivery_id, state=state.value)
            return DispatchResult.error(500, str(e), state)

    @staticmethod
    def _parse(raw_body: bytes) -> dict[str, Any]:
        try:
            payload = json.loads(raw_body)
        except (ValueError, UnicodeDecodeError) as e:
            raise MalformedRequestError("Invalid JSON payload") from e
        if not isinstance(payload, dict):
            raise MalformedRequestError("Webhook payload must be a JSON object")
        return payload

    @staticmethod
    def _require_installation(origin: RepositoryOrigin) -> int:
        if origin.installation_id is None:
            raise MalformedRequestError("No installation ID found")
        if not origin.owner or not origin.name:
            raise MalformedRequestError("Repository owner or name missing")
        return origin.installation_id
