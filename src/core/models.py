from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(Enum):
    """Supported GitHub event types."""

    REPOSITORY = "repository"


class RepositoryAction(Enum):
    """Actions of the `repository` event that trigger configuration."""

    CREATED = "created"


@dataclass(frozen=True)
class WebhookDelivery:
    """
    A single webhook delivery exactly as it arrived.

    The body is kept as raw bytes: the sender signs those bytes, so nothing
    may be parsed or re-serialized before the signature has been checked.
    """

    method: str
    raw_body: bytes
    signature_header: str | None
    event_type: str | None
    delivery_id: str | None = None


@dataclass(frozen=True)
class RepositoryOrigin:
    """The repository a `repository.created` event refers to, and where it came from."""

    owner: str
    name: str
    installation_id: int | None
    template_full_name: str | None

    @property
    def full_name(self) -> str:
        """The full name of the repository (e.g., 'owner/repo')."""
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RepositoryOrigin":
        repository = _section(payload, "repository")
        template = _section(repository, "template_repository")
        installation = _section(payload, "installation")

        installation_id = installation.get("id")
        # bool is an int subclass; a boolean id is not an installation.
        if not isinstance(installation_id, int) or isinstance(installation_id, bool):
            installation_id = None

        template_full_name = template.get("full_name")
        owner = _section(repository, "owner").get("login")
        name = repository.get("name")

        return cls(
            owner=owner if isinstance(owner, str) else "",
            name=name if isinstance(name, str) else "",
            installation_id=installation_id,
            template_full_name=template_full_name if isinstance(template_full_name, str) else None,
        )


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}
