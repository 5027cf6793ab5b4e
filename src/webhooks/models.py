from pydantic import BaseModel, Field

from src.integrations.github.actions_settings import ConfigurationOutcome


class ConfigurationResponse(BaseModel):
    """Response body once a repository has been configured."""

    success: bool = Field(True, description="The delivery was fully processed")
    message: str = Field(..., description="Human-readable summary")
    repository: str = Field(..., description="Owner/repo format")
    outcomes: list[ConfigurationOutcome] = Field(default_factory=list, description="One entry per setting, in order")


class ErrorResponse(BaseModel):
    """Response body for deliveries that could not be processed."""

    error: str = Field(..., description="What went wrong, without secrets")
