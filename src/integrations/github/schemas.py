from pydantic import BaseModel, ConfigDict, Field


class InstallationToken(BaseModel):
    """Schema for the installation access token response."""

    model_config = ConfigDict(extra="ignore")

    token: str = Field(..., min_length=1)
    expires_at: str | None = None
    permissions: dict[str, str] = Field(default_factory=dict)
    repository_selection: str | None = None
