"""
Security headers for every API response

The API only serves JSON, so the content policy denies everything and
browser features are switched off. HSTS is sent in production only.
Responses without a route-level cache policy are marked no-store.
"""

import logging
import os
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .cache_control import NO_CACHE_VALUE

logger = logging.getLogger(__name__)

IS_PRODUCTION = os.getenv("ENVIRONMENT", "development").lower() == "production"

DISABLED_BROWSER_FEATURES = ("camera", "microphone", "geolocation", "payment", "usb")

API_CSP = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"

HSTS_VALUE = "max-age=31536000; includeSubDomains"


def build_security_headers(production: bool = IS_PRODUCTION) -> dict[str, str]:
    headers = {
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "no-referrer",
        "Content-Security-Policy": API_CSP,
        "Permissions-Policy": ", ".join(f"{feature}=()" for feature in DISABLED_BROWSER_FEATURES),
        "Cross-Origin-Resource-Policy": "same-site",
    }
    if production:
        headers["Strict-Transport-Security"] = HSTS_VALUE
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp the security header set onto responses outside exclude_paths"""

    def __init__(self, app, exclude_paths: Optional[list[str]] = None):
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or ())
        self.headers = build_security_headers()
        logger.debug(f"Security headers: {sorted(self.headers)}")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.exclude_paths):
            return response

        response.headers.update(self.headers)
        response.headers.setdefault("Cache-Control", NO_CACHE_VALUE)
        return response
