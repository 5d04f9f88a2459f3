import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.api.deps import engine
from app.api.routers.health import router as health_router
from app.api.routers.invoices import router as invoices_router
from app.api.routers.payments import router as payments_router
from app.api.routers.reservations import router as reservations_router
from app.config import get_settings
from app.domain.errors import (
    ConflictError,
    DomainError,
    InvalidRangeError,
    InvalidStateError,
    NotFoundError,
)
from app.infrastructure.db.tables import metadata

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Orden de evaluación: la primera clase que coincida gana
DOMAIN_ERROR_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidRangeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidStateError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()

app = FastAPI(
    title="Tourism Backoffice API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = status_for(exc)
    logger.info(
        "Domain rule rejected request",
        extra={
            "code": exc.code,
            "status_code": status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
app.include_router(invoices_router, prefix="/api/v1", tags=["Invoices"])
app.include_router(payments_router, prefix="/api/v1", tags=["Payments"])
