import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reconciler.api.deps import engine
from reconciler.api.routers.health import router as health_router
from reconciler.api.routers.payment_methods import router as payment_methods_router
from reconciler.api.routers.webhooks import router as webhooks_router
from reconciler.config import get_settings
from reconciler.infrastructure.db.tables import metadata

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        # Create missing tables (dev/demo); production schemas are managed out of band
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()

app = FastAPI(
    title="Booking Payment Reconciler",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Log unexpected exceptions with an error_id and return a generic 500.

    A 5xx makes the processor redeliver, so nothing internal is exposed and
    nothing is lost.
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
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(webhooks_router, prefix="/api/v1", tags=["Webhooks"])
app.include_router(payment_methods_router, prefix="/api/v1", tags=["Payment Methods"])
