"""
Health check endpoints for monitoring and orchestration.

- /health: liveness (siempre 200)
- /health/live: liveness mínima
- /health/db: conectividad con la base de datos
- /health/ready: readiness según el backend de persistencia configurado
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "tourism-backoffice"


async def _database_reachable(session: AsyncSession) -> bool:
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
    except Exception as e:
        logger.error("Database health check failed", exc_info=e)
        return False
    return True


@router.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/live")
async def health_check_live():
    """Liveness para orquestadores: no toca dependencias."""
    return {"status": "alive"}


@router.get("/health/db")
async def health_check_db(session: AsyncSession = Depends(get_db_session)):
    """Returns 503 if the database does not answer a trivial query."""
    if await _database_reachable(session):
        return {"status": "healthy", "component": "database"}
    return JSONResponse(
        status_code=503,
        content={
            "status": "unhealthy",
            "component": "database",
            "error": "Database connection failed",
        },
    )


@router.get("/health/ready")
async def health_check_ready(
    settings: Settings = Depends(get_settings),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Readiness check.

    Con el almacén in-memory no hay dependencias externas; con SQL se
    verifica la conexión antes de aceptar tráfico.
    """
    if settings.use_in_memory:
        return {"status": "ready", "checks": {"storage": "in_memory"}}

    if not await _database_reachable(session):
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "checks": {"storage": "sql", "database": "unhealthy"}},
        )
    return {"status": "ready", "checks": {"storage": "sql", "database": "healthy"}}
