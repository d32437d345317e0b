"""HTTP routes: public pages, admin login and the back office."""

from fastapi import APIRouter

from cosmos.api import auth, health, pages
from cosmos.api.admin import router as admin_router

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(pages.router, tags=["pages"])
router.include_router(auth.router, tags=["auth"])
router.include_router(admin_router, tags=["admin"])
