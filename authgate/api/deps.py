"""Request-scoped dependencies: component access, current identity, route protection."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from authgate.container import AuthComponents
from authgate.schemas.auth import UserRecord
from authgate.services.access_guard import DenyRedirect, RoutePolicy

# Session key for the page to resume after login.
RETURN_TO_KEY = "return_to"


def get_components(request: Request) -> AuthComponents:
    return request.app.state.components


def current_identity(request: Request) -> UserRecord | None:
    """Identity loaded by the identity middleware; None when unauthenticated."""
    return getattr(request.state, "user", None)


def protect(policy: RoutePolicy) -> Callable[..., UserRecord | None]:
    """
    Dependency factory enforcing a route policy.

    Denials become 303 redirects. When the redirect goes to the login page
    the requested URL is remembered so login can send the user back.
    """

    def dependency(
        request: Request,
        components: Annotated[AuthComponents, Depends(get_components)],
        identity: Annotated[UserRecord | None, Depends(current_identity)],
    ) -> UserRecord | None:
        decision = components.guard.check(policy, identity)
        if isinstance(decision, DenyRedirect):
            if decision.target == components.guard.login_page:
                next_url = request.url.path
                if request.url.query:
                    next_url += "?" + request.url.query
                request.session[RETURN_TO_KEY] = next_url
            raise HTTPException(
                status_code=status.HTTP_303_SEE_OTHER,
                headers={"Location": decision.target},
            )
        return identity

    return dependency
