from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import netflix_shows
from core.config import settings
from core.database import engine, Base
from core.errors import register_error_handlers
from core.logging import configure_logging, get_logger, SERVICE_VERSION
from core.middleware import RequestLoggingMiddleware
import models  # noqa: F401  registers tables on Base.metadata

configure_logging(settings)

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup", api_prefix=settings.API_PREFIX, empty_list_not_found=settings.EMPTY_LIST_NOT_FOUND)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        log.info("tables_ready", tables=sorted(Base.metadata.tables))
    except Exception as e:
        log.warning("database_unavailable", error=str(e))

    yield

    await engine.dispose()
    log.info("shutdown")


app = FastAPI(
    title="Netflix Shows API",
    description="CRUD API for Netflix catalog entries with declarative request validation",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

register_error_handlers(app)

# last added runs first: CORS wraps request logging
app.add_middleware(RequestLoggingMiddleware, slow_threshold_ms=settings.SLOW_REQUEST_THRESHOLD_MS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(netflix_shows.router, prefix=settings.API_PREFIX, tags=["netflix-shows"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": SERVICE_VERSION}


if __name__ == "__main__":
    import uvicorn

    log.info("server_config", host=settings.BACKEND_HOST, port=settings.BACKEND_PORT, debug=settings.APP_DEBUG)
    uvicorn.run(
        "main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.APP_DEBUG,
        log_config=None,
    )
