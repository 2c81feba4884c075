"""Domain errors raised by the store, signup and session identity components.

Login failures (unknown user, bad password) are not exceptions: the
Authenticator reports them as AuthFailure values on its AuthResult.
"""


class AuthGateError(Exception):
    """Base class; carries a user-presentable message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AuthGateError):
    """A required signup field is empty or out of bounds."""


class DuplicateUsername(AuthGateError):
    """The username is already taken (enforced by the store's unique index)."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("The username already exists")


class StoreUnavailable(AuthGateError):
    """The backing user store could not be reached. Fatal for the current request."""


class IdentityGone(AuthGateError):
    """A session token no longer resolves to a user (deleted account or malformed id)."""

    def __init__(self, token: object) -> None:
        self.token = token
        super().__init__("Session identity no longer resolves to a user")
