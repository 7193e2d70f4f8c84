"""
Per-IP fixed-window rate limiting

Counters live in process memory so every request is answered locally.
When RATE_LIMIT_BACKEND is "redis" each window is seeded from Redis and
written back every few seconds, which lets several workers share one limit
and keeps counts across restarts. If Redis cannot be reached the limiter
keeps working from memory alone.
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request

from .config import RATE_LIMIT_BACKEND

logger = logging.getLogger(__name__)

REDIS_SYNC_SECONDS = 10
SWEEP_SECONDS = 60

_redis: Optional[redis.Redis] = None
_windows: dict[str, "Window"] = {}
_lock = Lock()
_last_sweep = 0


class Window:
    __slots__ = ("count", "expires_at", "synced_at")

    def __init__(self, expires_at: int, count: int = 0, synced_at: int = 0):
        self.count = count
        self.expires_at = expires_at
        self.synced_at = synced_at

    def ttl(self, now: int) -> int:
        return max(0, self.expires_at - now)


def _redis_url() -> str:
    url = os.getenv("REDIS_URL")
    if url:
        return url
    scheme = "rediss" if os.getenv("REDIS_SSL", "false").lower() == "true" else "redis"
    password = os.getenv("REDIS_PASSWORD")
    auth = f":{password}@" if password else ""
    host = os.getenv("REDIS_HOST", "localhost")
    port = os.getenv("REDIS_PORT", "6379")
    return f"{scheme}://{auth}{host}:{port}/{os.getenv('REDIS_DB', '0')}"


def get_redis_client() -> redis.Redis:
    """Lazily connect to Redis; raises redis.RedisError when it is unreachable"""
    global _redis
    if _redis is None:
        url = _redis_url()
        host_part = url.rsplit("@", 1)[-1]
        logger.info(f"📡 Connecting to Redis at {host_part}")
        client = redis.from_url(url, decode_responses=True, socket_connect_timeout=5, socket_timeout=5)
        try:
            client.ping()
        except redis.RedisError as e:
            logger.error(f"❌ Redis connection failed: {e}")
            raise
        _redis = client
        logger.info("✅ Redis connected")
    return _redis


def reset_memory_cache():
    """Forget every open window"""
    global _last_sweep
    with _lock:
        _windows.clear()
    _last_sweep = 0


def _sweep(now: int):
    global _last_sweep
    if now - _last_sweep < SWEEP_SECONDS:
        return
    stale = [key for key, window in _windows.items() if window.expires_at <= now]
    for key in stale:
        del _windows[key]
    if stale:
        logger.debug(f"🧹 Dropped {len(stale)} expired rate limit windows")
    _last_sweep = now


def _open_window(key: str, window_seconds: int, now: int, client: Optional[redis.Redis]) -> Window:
    window = Window(expires_at=now + window_seconds, synced_at=now)
    if client is None:
        return window
    try:
        stored, remaining = client.get(key), client.ttl(key)
    except redis.RedisError as e:
        logger.warning(f"⚠️ Could not read {key} from Redis: {e}")
        return window
    if stored and remaining > 0:
        window.count = int(stored)
        window.expires_at = now + remaining
    return window


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis] = None
) -> tuple[bool, int, int]:
    """Count one hit against key; returns (allowed, count, seconds until the window resets)"""
    now = int(time.time())

    with _lock:
        _sweep(now)
        window = _windows.get(key)
        if window is None:
            window = _windows[key] = _open_window(key, window_seconds, now, client)
        elif window.expires_at <= now:
            window.count, window.expires_at, window.synced_at = 0, now + window_seconds, 0

        allowed = window.count < limit
        if allowed:
            window.count += 1

        if client is not None and now - window.synced_at >= REDIS_SYNC_SECONDS:
            try:
                client.set(key, window.count, ex=window.ttl(now) or window_seconds)
                window.synced_at = now
            except redis.RedisError as e:
                logger.warning(f"⚠️ Could not write {key} to Redis: {e}")

        return allowed, window.count, window.ttl(now)


def _backend() -> Optional[redis.Redis]:
    if RATE_LIMIT_BACKEND == "memory":
        return None
    try:
        return get_redis_client()
    except redis.RedisError:
        logger.warning("⚠️ Rate limiting from process memory, Redis is unavailable")
        return None


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str, message: str):
    """
    Build a dependency allowing `limit` requests per client IP every `window_seconds`

    Example:
        @router.post("/login", dependencies=[Depends(login_rate_limit)])
    """

    async def rate_limiter(request: Request):
        key = f"{key_prefix}:{client_ip(request)}"
        allowed, count, retry_after = check_rate_limit(key, limit, window_seconds, _backend())
        if not allowed:
            logger.warning(f"🚫 Rate limit hit for {key} ({count}/{limit})")
            raise HTTPException(
                status_code=429,
                detail={"message": message, "retryAfter": retry_after},
                headers={"Retry-After": str(retry_after)},
            )
        request.state.rate_limit_remaining = limit - count

    return rate_limiter


login_rate_limit = create_rate_limiter(
    limit=5,
    window_seconds=15 * 60,
    key_prefix="login",
    message="Too many login attempts, please try again later",
)
signup_rate_limit = create_rate_limiter(
    limit=3,
    window_seconds=60 * 60,
    key_prefix="signup",
    message="Too many signup attempts, please try again later",
)
password_reset_rate_limit = create_rate_limiter(
    limit=5,
    window_seconds=60 * 60,
    key_prefix="password_reset",
    message="Too many password reset requests, please try again later",
)
