"""
Core error classes for the template repository configurator.
"""


class ConfiguratorError(Exception):
    """Base class for errors raised while processing a webhook delivery."""

    pass


class AuthenticationError(ConfiguratorError):
    """Raised when a webhook delivery fails signature verification."""

    def __init__(self, message: str = "Invalid signature") -> None:
        super().__init__(message)


class MalformedRequestError(ConfiguratorError):
    """Raised when a delivery is authentic but its body cannot be used."""

    pass


class KeySigningError(ConfiguratorError):
    """
    Raised when the app assertion cannot be signed.

    The message must never include private key material.
    """

    pass


class CredentialExchangeError(ConfiguratorError):
    """Raised when GitHub refuses to issue an installation access token."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ChangeApplicationError(ConfiguratorError):
    """Raised when a single repository setting cannot be applied."""

    def __init__(self, setting: str, message: str, status_code: int | None = None) -> None:
        self.setting = setting
        self.status_code = status_code
        super().__init__(message)
