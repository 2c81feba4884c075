"""HTTP routes."""

from fastapi import APIRouter

from authgate.api import auth, health, pages

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(pages.router, tags=["pages"])
