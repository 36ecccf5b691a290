import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.deps import get_plan_policies, get_rules, get_settings, get_store
from src.app_shell.config import validate_ops_rules

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules, check the environment and open storage (fail-fast)
    try:
        rules = get_rules()
        validate_ops_rules(rules)
        get_plan_policies()
        get_store()
    except Exception:
        logger.critical("Startup failed (rules: %s)", settings.rules_path, exc_info=True)
        raise
    logger.info(
        "Rules loaded from %s (pricing mode: %s)", settings.rules_path, rules.pricing.mode
    )

    yield


app = FastAPI(
    title="Folio API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- Routers ---
from src.api.routes import (  # noqa: E402
    admin_plans,
    me,
    portfolios,
    public_ssr,
    templates,
    wizard,
)

app.include_router(templates.router, prefix="/api/templates", tags=["Templates"])
app.include_router(me.router, prefix="/api/me", tags=["Account"])
app.include_router(wizard.router, prefix="/api/wizard", tags=["Wizard"])
app.include_router(portfolios.router, prefix="/api/portfolios", tags=["Portfolios"])
app.include_router(portfolios.slugs_router, prefix="/api/slugs", tags=["Slugs"])
app.include_router(admin_plans.router, prefix="/api/admin/plans", tags=["Admin"])
app.include_router(public_ssr.router, prefix="", tags=["Public"])


# CORS (Allow Frontend)
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "api"}
