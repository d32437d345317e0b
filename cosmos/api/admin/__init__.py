"""Back-office routes. Every route depends on require_admin."""

from fastapi import APIRouter

from cosmos.api.admin import dashboard, galaxies, planets, users

router = APIRouter()
router.include_router(dashboard.router, prefix="/admin")
router.include_router(planets.router, prefix="/admin/planets")
router.include_router(galaxies.router, prefix="/admin/galaxies")
router.include_router(users.router, prefix="/admin/users")
