"""Health Probes: liveness and readiness for the process and its database.

Invariants:
    - /health/ answers 200 whenever the process can serve requests; no IO
    - /health/ready answers 503 until the database manager exists and responds
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from finledger.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "finledger-api"
SERVICE_VERSION = "1.0.0"


@router.get("/")
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    # read through the module: init_db() rebinds db_manager after import
    manager = database.db_manager
    if manager is not None and await manager.health_check():
        return {"status": "ready", "checks": {"database": "healthy"}}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "checks": {"database": "unavailable"}},
    )
