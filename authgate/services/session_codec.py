"""Converts a user to the session token (its id) and back."""

import logging

from authgate.core.exceptions import IdentityGone
from authgate.schemas.auth import UserRecord
from authgate.services.user_store import UserStore

logger = logging.getLogger(__name__)

# Session key under which the token is stored.
SESSION_USER_KEY = "user_id"


class SessionIdentityCodec:
    """Only the user id lives in the session; the full record is reloaded per request."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    def serialize(self, user: UserRecord) -> int:
        return user.id

    async def deserialize(self, token: object) -> UserRecord:
        """
        Reload the user for a session token.

        Raises IdentityGone if the token is malformed or the user no longer
        exists; StoreUnavailable propagates.
        """
        # bool is an int subclass but never a valid id
        if isinstance(token, bool):
            raise IdentityGone(token)
        try:
            user_id = int(token)  # type: ignore[call-overload]
        except (TypeError, ValueError) as e:
            raise IdentityGone(token) from e

        user = await self._store.get_by_id(user_id)
        if user is None:
            logger.info("Session identity gone", extra={"user_id": user_id})
            raise IdentityGone(token)
        return user
