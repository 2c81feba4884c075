"""One-shot messages carried in the session across a redirect."""

from fastapi import Request

FLASH_KEY = "_flash"


def flash(request: Request, message: str) -> None:
    request.session.setdefault(FLASH_KEY, []).append(message)


def pop_flashed_messages(request: Request) -> list[str]:
    """Return and clear pending messages; a second call returns []."""
    return list(request.session.pop(FLASH_KEY, None) or [])
