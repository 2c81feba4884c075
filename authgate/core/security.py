"""Password hashing and verification (bcrypt) plus credential length limits."""

import secrets

import bcrypt

# Default bcrypt cost (rounds); overridden by Settings.BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input; longer passwords are refused, never truncated.
PASSWORD_MAX_BYTES = 72

USERNAME_MAX_LEN = 255


def password_too_long(plain_password: str) -> bool:
    return len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES


class PasswordHasher:
    """
    Salted one-way hashing with a tunable work factor.

    Every hash() call draws a fresh salt, so hashing the same password twice
    yields different digests that both verify. Never logs its inputs.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        if rounds < 4 or rounds > 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds
        self._dummy_hash: str | None = None

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        if password_too_long(plain_password):
            raise ValueError(f"Password exceeds {PASSWORD_MAX_BYTES} bytes")
        return bcrypt.hashpw(
            plain_password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash; malformed hashes and over-long input never match."""
        try:
            if password_too_long(plain_password):
                return False
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    @property
    def dummy_hash(self) -> str:
        """Hash of a random throwaway secret, verified against when a username is unknown."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(secrets.token_urlsafe(32))
        return self._dummy_hash
