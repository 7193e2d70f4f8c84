"""
Cache-Control policies applied per route

Example usage:
    @router.get("", dependencies=[Depends(medium_cache)])
"""

from fastapi import Response

NO_CACHE_VALUE = "no-store, no-cache, must-revalidate, proxy-revalidate"


def cache_control(max_age: int = 0, is_private: bool = True):
    """Create a dependency that sets Cache-Control on the outgoing response"""

    def dependency(response: Response):
        if max_age <= 0:
            response.headers["Cache-Control"] = NO_CACHE_VALUE
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
            return
        scope = "private" if is_private else "public"
        response.headers["Cache-Control"] = f"{scope}, max-age={max_age}"

    return dependency


no_cache = cache_control(0)
short_cache = cache_control(300, is_private=True)  # 5 minutes, per user
medium_cache = cache_control(900, is_private=False)  # 15 minutes
long_cache = cache_control(3600, is_private=False)  # 1 hour
