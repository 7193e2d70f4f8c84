import logging
import os
import time
from contextlib import asynccontextmanager

import redis
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models  # noqa: F401  (registers the tables on Base.metadata)
from .config import RATE_LIMIT_BACKEND
from .database import Base, engine
from .domain.assignments.router import router as assignments_router
from .domain.availability.router import router as availability_router
from .domain.chord_sheets.router import router as chord_sheets_router
from .domain.default_assignments.router import router as default_assignments_router
from .domain.instruments.router import router as instruments_router
from .domain.leader_rotations.router import router as leader_rotations_router
from .domain.notifications.router import router as notifications_router
from .domain.service_types.router import router as service_types_router
from .domain.services.router import router as services_router
from .domain.set_songs.router import router as set_songs_router
from .domain.singer_song_keys.router import profile_router as key_profile_router
from .domain.singer_song_keys.router import router as singer_song_keys_router
from .domain.song_versions.router import router as song_versions_router
from .domain.songs.router import router as songs_router
from .domain.suggestion_slots.router import router as suggestion_slots_router
from .domain.suggestions.router import router as suggestions_router
from .domain.user_instruments.router import router as user_instruments_router
from .domain.users.router import router as users_router
from .domain.worship_sets.router import router as worship_sets_router
from .rate_limiter import get_redis_client
from .security_headers import SecurityHeadersMiddleware

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Starting Worship Set Manager API")
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("✅ Database tables ready")

    if RATE_LIMIT_BACKEND != "memory":
        try:
            get_redis_client().ping()
            logger.info("✅ Redis connection verified")
        except redis.RedisError as e:
            logger.warning(f"⚠️ Redis not available, rate limiting uses process memory: {e}")

    yield
    logger.info("👋 Shutting down Worship Set Manager API")


app = FastAPI(
    title="Worship Set Manager API",
    description="Scheduling, song selection and team assignments for church worship services",
    version="1.0.0",
    lifespan=lifespan,
)


def _log_error(request: Request, status_code: int, message) -> None:
    line = f"{request.method} {request.url.path} -> {status_code}: {message}"
    if status_code >= 500:
        logger.error(f"❌ {line}")
    else:
        logger.warning(f"⚠️ {line}")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, dict):
        error = dict(exc.detail)
    else:
        error = {"message": exc.detail}
    _log_error(request, exc.status_code, error.get("message"))
    return JSONResponse(status_code=exc.status_code, content={"error": error}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request validation problems as a 400 with one entry per field"""
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append({"field": ".".join(loc), "message": error.get("msg")})
    _log_error(request, 400, f"Validation failed {details}")
    return JSONResponse(
        status_code=400,
        content={"error": {"message": "Validation failed", "details": details}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": {"message": "Internal Server Error"}})


if os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true":
    app.add_middleware(SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"])
    logger.info("🔒 Security headers middleware enabled")

allowed_origins = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Retry-After"],
)

app.include_router(users_router)
app.include_router(user_instruments_router)
app.include_router(key_profile_router)
app.include_router(leader_rotations_router)
app.include_router(instruments_router)
app.include_router(default_assignments_router)
app.include_router(service_types_router)
app.include_router(services_router)
app.include_router(worship_sets_router)
app.include_router(set_songs_router)
app.include_router(songs_router)
app.include_router(song_versions_router)
app.include_router(chord_sheets_router)
app.include_router(assignments_router)
app.include_router(suggestion_slots_router)
app.include_router(suggestions_router)
app.include_router(availability_router)
app.include_router(notifications_router)
app.include_router(singer_song_keys_router)


@app.get("/")
async def root():
    return {"status": "OK", "message": "Worship Set Manager API is running"}


@app.get("/health")
async def health():
    return {"status": "OK", "message": "Worship Set Manager API is running"}


@app.get("/health/redis")
async def redis_health():
    """Check Redis connection health"""
    if RATE_LIMIT_BACKEND == "memory":
        return {"status": "disabled", "message": "Rate limiting runs in process memory"}

    try:
        client = get_redis_client()
        start = time.time()
        client.ping()
        response_time_ms = round((time.time() - start) * 1000, 2)
        info = client.info("server")
        return {
            "status": "healthy",
            "response_time_ms": response_time_ms,
            "redis_version": info.get("redis_version"),
            "connected_clients": client.info("clients").get("connected_clients"),
        }
    except redis.RedisError as e:
        logger.error(f"❌ Redis health check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "unhealthy", "error": str(e)})
