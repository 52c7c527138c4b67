"""
Request identity.

Token validation happens in the upstream auth gateway, which forwards the
authenticated user id in a header. Handlers only depend on that id.
"""
from uuid import UUID

from fastapi import HTTPException, Request

from progresspoint.core.config import settings
from progresspoint.core.logging import get_logger

logger = get_logger(__name__)


async def get_current_user_id(request: Request) -> UUID:
    """Resolve the authenticated user id or reject with 401."""
    raw_user_id = request.headers.get(settings.AUTH_USER_HEADER)
    if not raw_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        return UUID(raw_user_id)
    except ValueError:
        logger.warning("Malformed user id header", header=settings.AUTH_USER_HEADER)
        raise HTTPException(status_code=401, detail="Unauthorized")
