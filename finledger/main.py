"""finledger API: application assembly.

Invariants:
    - Every router is included here by name; nothing is discovered implicitly
    - The database manager exists only between lifespan startup and shutdown
    - Domain errors leave the app only through register_error_handlers

Design Decisions:
    - Module-level `app` so `uvicorn finledger.main:app` works without a factory flag
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finledger.api.error_handlers import register_error_handlers
from finledger.api.routes import account, auth, health, transactions, users
from finledger.config import get_settings
from finledger.infrastructure import database
from finledger.infrastructure.observability import log_request, setup_logging

logger = logging.getLogger(__name__)

ROUTERS = (
    health.router,
    auth.router,
    account.router,
    transactions.router,
    users.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.uses_default_jwt_secret:
        logger.warning(
            "JWT_SECRET_KEY is not set; access tokens are signed with the development default",
        )
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("finledger ready")
    try:
        yield
    finally:
        await manager.dispose()
        logger.info("finledger stopped")


app = FastAPI(title="finledger API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)
app.middleware("http")(log_request)

for router in ROUTERS:
    app.include_router(router)

register_error_handlers(app)
