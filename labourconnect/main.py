"""
labourconnect/main.py

Purpose: Application entry point

- Builds the FastAPI app: session cookie, CORS, error envelopes
- Mounts the JSON API, profile-picture media, page shell and static assets
- Connects MongoDB on startup unless DEMO_MODE is on
- No business logic should be written here
"""

from contextlib import asynccontextmanager
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from labourconnect.api import auth, catalog, users, workers
from labourconnect.core.config import settings, validate_settings
from labourconnect.core.errors import add_exception_handlers
from labourconnect.core.logging import get_logger, setup_logging
from labourconnect.db.indexes import create_indexes
from labourconnect.db.mongo import check_database_health, close_mongo_connection, connect_to_mongo
from labourconnect.web import router as web
from labourconnect.web.router import STATIC_DIR

setup_logging()
logger = get_logger(__name__)

VERSION = "1.0.0"
SESSION_COOKIE = "labourconnect_session"
SLOW_REQUEST_MS = 3000


def _mode() -> str:
    return "demo" if settings.DEMO_MODE else "live"


async def _database_check() -> str:
    """'skipped' in demo mode, otherwise 'healthy' or 'unhealthy'."""
    if settings.DEMO_MODE:
        return "skipped"
    return "healthy" if await check_database_health() else "unhealthy"


@asynccontextmanager
async def lifespan(app: FastAPI):
    validate_settings()
    logger.info(f"🚀 LabourConnect {VERSION} starting in {_mode()} mode ({settings.ENVIRONMENT})")

    if settings.DEMO_MODE:
        logger.warning("⚠️ DEMO_MODE enabled: accounts live in the session cookie, sample workers are served")
    else:
        try:
            await connect_to_mongo()
            await create_indexes()
        except Exception as e:
            logger.critical(f"Could not prepare the database: {e}", exc_info=True)
            raise
        logger.info("✅ Database ready")

    yield

    await close_mongo_connection()
    logger.info("👋 LabourConnect stopped")


app = FastAPI(
    title="LabourConnect",
    description="Marketplace connecting skilled labourers with customers and contractors",
    version=VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# currentUser, pendingVerification and demo_users all live in this cookie
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE_DAYS * 86400,
    same_site="lax",
    https_only=settings.is_production,
)


@app.middleware("http")
async def time_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.1f}"

    if elapsed_ms > SLOW_REQUEST_MS:
        logger.warning(f"Slow request: {request.method} {request.url.path} took {elapsed_ms:.0f}ms")

    return response


add_exception_handlers(app)

for api_router in (auth.router, users.router, workers.router, catalog.router):
    app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(catalog.media_router)
app.include_router(web.router)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Reports the run mode plus the state of MongoDB and Twilio Verify.
    503 when the database is expected but unreachable.
    """
    database = await _database_check()
    body = {
        "status": "degraded" if database == "unhealthy" else "healthy",
        "mode": _mode(),
        "version": VERSION,
        "environment": settings.ENVIRONMENT,
        "checks": {
            "database": database,
            "twilio_verify": "configured" if settings.twilio_configured else "not_configured",
        },
    }
    return JSONResponse(content=body, status_code=503 if database == "unhealthy" else 200)


@app.get("/ready", tags=["Health"])
async def readiness_check():
    if await _database_check() == "unhealthy":
        return JSONResponse(status_code=503, content={"status": "not_ready", "reason": "database_unavailable"})
    return {"status": "ready"}


@app.get("/live", tags=["Health"])
async def liveness_check():
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "labourconnect.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
