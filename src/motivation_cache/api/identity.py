"""Resolve the caller's identity for cache bucketing.

Authentication itself happens upstream; this module only reads what a
session or auth middleware left on the request. Callers without an
identity fall back to the anonymous bucket.

With SHARE_ANONYMOUS_BUCKET=true (the default) every anonymous caller
shares one bucket per category and day, so they all see the same message
and share one regeneration budget. Set it to false to give each client
address its own anonymous bucket.
"""

from fastapi import Request

from motivation_cache.config import settings


def _session_user_id(request: Request) -> str | None:
    # request.session asserts when no SessionMiddleware is installed
    session = request.scope.get("session")
    if not session:
        return None
    user = session.get("user")
    if isinstance(user, dict) and user.get("cedula"):
        return str(user["cedula"])
    return None


def _auth_user_id(request: Request) -> str | None:
    user = getattr(request.state, "user", None)
    if user is None:
        return None
    user_id = user.get("id") if isinstance(user, dict) else getattr(user, "id", None)
    return str(user_id) if user_id else None


def anonymous_user_id(request: Request) -> str:
    """Identity used when neither session nor auth provide one."""
    if settings.share_anonymous_bucket:
        return settings.anonymous_user_id
    host = request.client.host if request.client else "unknown"
    return f"{settings.anonymous_user_id}:{host}"


def get_user_id(request: Request) -> str:
    """FastAPI dependency returning the cache identity for a request.

    Order: session ``user.cedula``, then ``request.state.user.id``,
    then the anonymous bucket.
    """
    return _session_user_id(request) or _auth_user_id(request) or anonymous_user_id(request)
