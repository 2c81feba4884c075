"""Per-request identity loading from the session token."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from authgate.core.exceptions import IdentityGone, StoreUnavailable
from authgate.services.session_codec import SESSION_USER_KEY

logger = logging.getLogger(__name__)


async def load_identity(request: Request, call_next):
    """
    Populate request.state.user once per request.

    A token that no longer resolves is dropped from the session and the
    request continues unauthenticated. Store outages end the request with 500.
    """
    request.state.user = None
    token = request.session.get(SESSION_USER_KEY)
    if token is not None:
        codec = request.app.state.components.codec
        try:
            request.state.user = await codec.deserialize(token)
        except IdentityGone:
            request.session.pop(SESSION_USER_KEY, None)
        except StoreUnavailable as e:
            logger.error("Identity load failed", extra={"path": request.url.path, "reason": e.message})
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": e.message},
            )
    return await call_next(request)
