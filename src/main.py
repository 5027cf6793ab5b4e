from fastapi import Depends, FastAPI

from src.core.config import Config, config
from src.core.utils.logging import configure_logging
from src.webhooks.router import get_settings
from src.webhooks.router import router as webhook_router

# --- Application Setup ---

configure_logging(config.logging)

app = FastAPI(
    title="Template Repository Configurator",
    description="Configures GitHub Actions settings on repositories created from a template.",
    version="0.1.0",
)

# --- Include Routers ---

app.include_router(webhook_router, prefix="/webhooks", tags=["GitHub Webhooks"])

# --- Health Check Endpoints ---


@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the service is running."""
    return {"status": "ok", "message": "Template repository configurator is running."}


@app.get("/health", tags=["Health Check"])
async def health(settings: Config = Depends(get_settings)):
    """Reports whether the service is fully configured. Values are never echoed."""
    try:
        settings.validate()
    except ValueError as e:
        return {"status": "misconfigured", "detail": str(e)}
    return {"status": "ok", "expected_template": settings.template.expected_full_name}
