"""API v1 routes."""

from fastapi import APIRouter

from inkpost.api.v1 import auth, blog, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(blog.router, prefix="/blog", tags=["blog"])
