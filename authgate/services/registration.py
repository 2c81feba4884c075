"""Signup: validate the form, hash the password and insert the user."""

import logging

from fastapi.concurrency import run_in_threadpool

from authgate.core.exceptions import DuplicateUsername, ValidationError
from authgate.core.security import PASSWORD_MAX_BYTES, USERNAME_MAX_LEN, PasswordHasher, password_too_long
from authgate.schemas.auth import Role, UserRecord
from authgate.services.user_store import UserStore

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Indicate username and password"


def validate_signup(username: str, password: str) -> None:
    """Raise ValidationError when a field is empty or too long."""
    if not username or not password:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LEN} characters")
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")


async def register_user(
    store: UserStore,
    hasher: PasswordHasher,
    username: str,
    password: str,
    role: Role | None = None,
) -> UserRecord:
    """
    Create a user with a hashed password. Does not log the user in.

    Raises ValidationError, DuplicateUsername, or StoreUnavailable. Uniqueness
    is decided by the store's insert, so two concurrent signups for the same
    name cannot both succeed.
    """
    validate_signup(username, password)
    password_hash = await run_in_threadpool(hasher.hash, password)
    try:
        user = await store.create(username, password_hash, role=role)
    except DuplicateUsername:
        logger.info("Signup rejected: duplicate username", extra={"username": username})
        raise
    logger.info(
        "User created",
        extra={"user_id": user.id, "username": user.username, "role": user.role.value if user.role else None},
    )
    return user
