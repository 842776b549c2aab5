from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cert_registry.api.admin import router as admin_router
from cert_registry.api.certificates import router as certificates_router
from cert_registry.api.events import router as events_router
from cert_registry.api.health import router as health_router
from cert_registry.api.issuers import router as issuers_router
from cert_registry.api.metrics_endpoint import router as metrics_router
from cert_registry.core.config import SETTINGS
from cert_registry.core.logging import setup_logging
from cert_registry.db.engine import lifespan_db
from cert_registry.db.redis import lifespan_redis
from cert_registry.middleware.metrics import MetricsMiddleware
from cert_registry.middleware.request_context import RequestContextMiddleware
from cert_registry.repos.ledger import open_ledger
from cert_registry.services import authority_registry

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)


async def bootstrap_admin() -> None:
    """Create the admin credential for ADMIN_ADDRESS on first start."""
    async with open_ledger() as ledger:
        admin = await authority_registry.bootstrap(
            ledger, deployer=SETTINGS.admin_address
        )
    logger.info("Admin credential id=%s owner=%s", admin.id, admin.owner)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    # Nested so teardown runs in reverse order.
    async with lifespan_db():
        async with lifespan_redis():
            await bootstrap_admin()
            yield


app = FastAPI(
    title="cert-registry",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Last added runs first: RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(admin_router)
app.include_router(issuers_router)
app.include_router(certificates_router)
app.include_router(events_router)

logger.info(
    "cert-registry started  env=%s log_level=%s port=%d docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "on" if SETTINGS.is_dev else "off",
)
