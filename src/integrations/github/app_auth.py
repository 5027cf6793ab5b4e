"""
GitHub App authentication.

A GitHub App proves its identity with a short-lived RS256 JWT, then trades
that JWT for an access token scoped to one installation. Both steps run once
per webhook delivery; nothing here is cached.
"""

import base64
import binascii
import time
from dataclasses import dataclass
from typing import Any

import httpx
import jwt
import structlog
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from pydantic import ValidationError

from src.core.errors import CredentialExchangeError, KeySigningError
from src.integrations.github.client import GitHubClient
from src.integrations.github.schemas import InstallationToken

logger = structlog.get_logger(__name__)

# Backdate iat to tolerate clock drift between us and GitHub.
ISSUED_AT_SKEW_SECONDS = 60
# GitHub rejects app JWTs that live longer than 10 minutes.
EXPIRATION_SECONDS = 10 * 60

JWT_ALGORITHM = "RS256"
PEM_MARKER = "-----BEGIN"


@dataclass(frozen=True)
class SignedAssertion:
    """A signed, time-bounded app JWT and its decoded parts."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signature: str
    token: str

    @property
    def issued_at(self) -> int:
        return self.payload["iat"]

    @property
    def expires_at(self) -> int:
        return self.payload["exp"]


def load_private_key(private_key: str) -> RSAPrivateKey:
    """
    Parse the app's RSA private key.

    Accepts a PEM string (PKCS#1 or PKCS#8), a PEM whose newlines were escaped
    as literal ``\\n``, or a base64-encoded PEM.

    Raises:
        KeySigningError: If the key cannot be parsed. The key itself is never
            included in the message.
    """
    pem = private_key.strip()
    if pem and PEM_MARKER not in pem:
        try:
            pem = base64.b64decode("".join(pem.split()), validate=True).decode("utf-8").strip()
        except (binascii.Error, UnicodeDecodeError):
            raise KeySigningError("Invalid private key format. Expected a PEM or base64-encoded PEM key.") from None
    pem = pem.replace("\\n", "\n")

    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        # The underlying message can echo key bytes; keep only the type.
        raise KeySigningError(f"Unable to load private key ({type(e).__name__}).") from None

    if not isinstance(key, RSAPrivateKey):
        raise KeySigningError("Private key is not an RSA key.")
    return key


class TokenSigner:
    """Builds and signs app JWTs for a single GitHub App."""

    def __init__(self, app_id: str, private_key: str):
        self._app_id = app_id
        self._private_key = private_key

    def __repr__(self) -> str:
        return f"TokenSigner(app_id={self._app_id!r})"

    def sign(self, now: int | None = None) -> SignedAssertion:
        """
        Generate a JWT to authenticate as the GitHub App.

        Args:
            now: Current unix time in seconds. Defaults to the system clock.

        Raises:
            KeySigningError: If the key is unusable or signing fails.
        """
        if now is None:
            now = int(time.time())

        header = {"alg": JWT_ALGORITHM, "typ": "JWT"}
        payload = {
            "iat": now - ISSUED_AT_SKEW_SECONDS,
            "exp": now + EXPIRATION_SECONDS,
            "iss": self._app_id,
        }

        key = load_private_key(self._private_key)
        try:
            token = jwt.encode(payload, key, algorithm=JWT_ALGORITHM, headers={"typ": "JWT"})
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            raise KeySigningError(f"Failed to sign app assertion ({type(e).__name__}).") from None

        signature = token.rsplit(".", 1)[1]
        logger.debug("app_assertion_signed", iss=self._app_id, iat=payload["iat"], exp=payload["exp"])
        return SignedAssertion(header=header, payload=payload, signature=signature, token=token)


class CredentialExchanger:
    """Exchanges a signed app assertion for an installation access token."""

    def __init__(self, signer: TokenSigner, github: GitHubClient):
        self._signer = signer
        self._github = github

    async def exchange(self, installation_id: int, assertion: SignedAssertion | None = None) -> str:
        """
        Request an installation access token.

        Args:
            installation_id: The installation the token is scoped to.
            assertion: A pre-signed assertion. A fresh one is signed when omitted.

        Returns:
            The opaque token string. Its expiry is not inspected.

        Raises:
            KeySigningError: If a fresh assertion cannot be signed.
            CredentialExchangeError: If GitHub refuses or the call fails.
        """
        if assertion is None:
            assertion = self._signer.sign()

        path = f"/app/installations/{installation_id}/access_tokens"
        try:
            response = await self._github.request("POST", path, token=assertion.token)
        except httpx.HTTPError as e:
            raise CredentialExchangeError(f"Failed to get installation token: {e}") from e

        if not response.is_success:
            body = response.text
            logger.error(
                "installation_token_rejected",
                installation_id=installation_id,
                status_code=response.status_code,
                response_body=body,
            )
            raise CredentialExchangeError(
                f"Failed to get installation token: {response.status_code} {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            data = InstallationToken.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise CredentialExchangeError(
                "Failed to get installation token: response did not contain a token",
                status_code=response.status_code,
                body=response.text,
            ) from e

        logger.info("installation_token_issued", installation_id=installation_id, expires_at=data.expires_at)
        return data.token
