"""Admin dashboard with catalog and administrator counts."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cosmos.api.auth import require_admin
from cosmos.core.database import get_db
from cosmos.repositories import galaxies, planets, users
from cosmos.schemas.auth import TokenClaims
from cosmos.schemas.pages import DashboardPage

router = APIRouter()


@router.get("", response_model=DashboardPage)
def dashboard(
    admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardPage:
    return DashboardPage(
        title="Admin dashboard",
        current_page="admin",
        is_admin=True,
        username=admin.username,
        role=admin.role,
        planet_count=planets.count_planets(db),
        galaxy_count=galaxies.count_galaxies(db),
        admin_count=users.count_users(db, role="admin"),
    )
