"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, contents, health, templates

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(templates.router, prefix="/templates", tags=["templates"])
router.include_router(contents.router, prefix="/contents", tags=["contents"])
