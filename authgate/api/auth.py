"""Signup, login, logout and the password reminder stub."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from authgate.api.deps import RETURN_TO_KEY, get_components
from authgate.api.flash import flash, pop_flashed_messages
from authgate.container import AuthComponents
from authgate.core.exceptions import DuplicateUsername, ValidationError
from authgate.schemas.auth import PageResponse
from authgate.services.registration import register_user
from authgate.services.session_codec import SESSION_USER_KEY

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_CREDENTIALS_MESSAGE = "Missing credentials"


def _safe_return_to(value: object, default: str) -> str:
    """Only same-site absolute paths are honoured as post-login targets."""
    if isinstance(value, str) and value.startswith("/") and not value.startswith("//"):
        return value
    return default


def _page(section: str, status_code: int = status.HTTP_200_OK, **fields: object) -> JSONResponse:
    body = PageResponse(section=section, **fields)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@router.get("/signup", response_model=PageResponse)
def signup_page() -> PageResponse:
    return PageResponse(section="signup")


@router.post("/signup", response_model=None)
async def signup(
    components: Annotated[AuthComponents, Depends(get_components)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> JSONResponse | RedirectResponse:
    """
    Create an account. Validation and duplicate-name failures re-render the
    signup form with a message; success redirects home without logging in.
    """
    try:
        await register_user(components.store, components.hasher, username, password)
    except (ValidationError, DuplicateUsername) as e:
        return _page("signup", status.HTTP_400_BAD_REQUEST, message=e.message)
    return RedirectResponse(components.settings.HOME_PAGE, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_model=PageResponse)
def login_page(request: Request) -> PageResponse:
    return PageResponse(section="login", messages=pop_flashed_messages(request))


@router.post("/login")
async def login(
    request: Request,
    components: Annotated[AuthComponents, Depends(get_components)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> RedirectResponse:
    """
    Verify credentials. On success the user id goes into the session and the
    user is sent to the page they originally asked for (or home); on failure
    a flash message is set and the user goes back to the login page.
    """
    settings = components.settings
    if not username or not password:
        flash(request, MISSING_CREDENTIALS_MESSAGE)
        return RedirectResponse(settings.LOGIN_PAGE, status_code=status.HTTP_303_SEE_OTHER)

    result = await components.authenticator.authenticate(username, password)
    if not result.ok:
        flash(request, result.message(reveal_reason=settings.REVEAL_CREDENTIAL_ERRORS))
        return RedirectResponse(settings.LOGIN_PAGE, status_code=status.HTTP_303_SEE_OTHER)

    target = _safe_return_to(request.session.pop(RETURN_TO_KEY, None), settings.HOME_PAGE)
    request.session[SESSION_USER_KEY] = components.codec.serialize(result.user)
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/logout")
def logout(
    request: Request,
    components: Annotated[AuthComponents, Depends(get_components)],
) -> RedirectResponse:
    """Drop the session identity. Safe to call without a session."""
    user_id = request.session.pop(SESSION_USER_KEY, None)
    request.state.user = None
    if user_id is not None:
        logger.info("Logout", extra={"user_id": user_id})
    return RedirectResponse(components.settings.LOGIN_PAGE, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/remember", response_model=PageResponse)
def remember_page() -> PageResponse:
    return PageResponse(section="remember")


@router.post("/remember-password", status_code=status.HTTP_202_ACCEPTED)
def remember_password(email: Annotated[str, Form()] = "") -> dict[str, str]:
    """Password reminders are not implemented; the request is accepted and ignored."""
    logger.info("Password reminder requested (not implemented)")
    return {"detail": "Password reminders are not available"}
