import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.api.deps import get_context, get_settings
from src.app_shell.config import configure_logging, validate_ops_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)

    # Fail fast on bad rules or configuration, and pick the store adapter once
    ctx = get_context()
    validate_ops_rules(ctx.rules)
    logger.info(
        "Rules loaded from %s, store backend: %s", settings.rules_path, settings.store_backend
    )

    yield


app = FastAPI(
    title="Account Guard API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import mutations, users  # noqa: E402

app.include_router(mutations.router, prefix="/api/mutations", tags=["Mutations"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
