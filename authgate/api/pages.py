"""Gated pages. Each route declares its policy once, at import time."""

from typing import Annotated

from fastapi import APIRouter, Depends

from authgate.api.deps import protect
from authgate.schemas.auth import PageResponse, PublicUser, UserRecord
from authgate.services.access_guard import Access, require_roles

router = APIRouter()

# Route policy table.
ADMIN_OR_EDITOR = require_roles("ADMIN", "EDITOR")
ADMIN_ONLY = require_roles("ADMIN")


def _public(user: UserRecord) -> PublicUser:
    return PublicUser(id=user.id, username=user.username, role=user.role)


@router.get("/", response_model=PageResponse)
def index(user: Annotated[UserRecord, Depends(protect(Access.AUTHENTICATED))]) -> PageResponse:
    return PageResponse(section="index", user=_public(user))


@router.get("/private-page", response_model=PageResponse)
def private_page(user: Annotated[UserRecord, Depends(protect(Access.AUTHENTICATED))]) -> PageResponse:
    return PageResponse(section="private", user=_public(user))


@router.get("/private-page-admin-editors", response_model=PageResponse)
def private_page_admin_editors(user: Annotated[UserRecord, Depends(protect(ADMIN_OR_EDITOR))]) -> PageResponse:
    return PageResponse(section="private", page="onlyforadminseditors", user=_public(user))


@router.get("/private-page-admin", response_model=PageResponse)
def private_page_admin(user: Annotated[UserRecord, Depends(protect(ADMIN_ONLY))]) -> PageResponse:
    return PageResponse(section="private", page="onlyforadmins", user=_public(user))
