"""Credential verification: username lookup plus password check."""

import logging
from dataclasses import dataclass
from enum import Enum

from fastapi.concurrency import run_in_threadpool

from authgate.core.security import PasswordHasher
from authgate.schemas.auth import UserRecord
from authgate.services.user_store import UserStore

logger = logging.getLogger(__name__)


class AuthFailure(str, Enum):
    UNKNOWN_USER = "unknown_user"
    BAD_PASSWORD = "bad_password"


GENERIC_FAILURE_MESSAGE = "Invalid username or password"

# Legacy per-reason messages, shown only when REVEAL_CREDENTIAL_ERRORS is enabled.
FAILURE_MESSAGES = {
    AuthFailure.UNKNOWN_USER: "Incorrect username",
    AuthFailure.BAD_PASSWORD: "Incorrect password",
}


@dataclass(frozen=True)
class AuthResult:
    """Either user is set (success) or failure is set, never both."""

    user: UserRecord | None = None
    failure: AuthFailure | None = None

    @property
    def ok(self) -> bool:
        return self.user is not None

    def message(self, reveal_reason: bool = False) -> str | None:
        """User-visible failure text; None on success."""
        if self.failure is None:
            return None
        if reveal_reason:
            return FAILURE_MESSAGES[self.failure]
        return GENERIC_FAILURE_MESSAGE


class Authenticator:
    """Looks up a user by exact username and verifies the submitted password."""

    def __init__(self, store: UserStore, hasher: PasswordHasher) -> None:
        self._store = store
        self._hasher = hasher

    async def authenticate(self, username: str, password: str) -> AuthResult:
        """
        Return AuthResult for the submitted credentials.

        Unknown usernames still pay for one hash verification (against a dummy
        hash) so response time does not reveal whether the account exists.
        StoreUnavailable propagates.
        """
        user = await self._store.get_by_username(username)
        if user is None:
            await run_in_threadpool(self._verify_dummy, password)
            logger.info("Login failed", extra={"username": username, "reason": AuthFailure.UNKNOWN_USER.value})
            return AuthResult(failure=AuthFailure.UNKNOWN_USER)

        if not await run_in_threadpool(self._hasher.verify, password, user.password_hash):
            logger.info("Login failed", extra={"username": username, "reason": AuthFailure.BAD_PASSWORD.value})
            return AuthResult(failure=AuthFailure.BAD_PASSWORD)

        logger.info("Login succeeded", extra={"username": username, "user_id": user.id})
        return AuthResult(user=user)

    def _verify_dummy(self, password: str) -> bool:
        # dummy_hash is computed on first use, so keep it inside the worker thread too.
        return self._hasher.verify(password, self._hasher.dummy_hash)
