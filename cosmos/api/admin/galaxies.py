"""Admin CRUD for galaxies. Deletion is refused while planets reference the galaxy."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from cosmos.api._forms import form_body
from cosmos.api._render import redirect_with_success, render
from cosmos.api.auth import require_admin
from cosmos.core.database import get_db
from cosmos.core.errors import ValidationError
from cosmos.repositories import galaxies
from cosmos.schemas.auth import TokenClaims
from cosmos.schemas.galaxy import GalaxyForm, GalaxyOut
from cosmos.schemas.pages import ConfirmDeletePage, GalaxyFormPage, GalaxyListPage

router = APIRouter()

GalaxyFormBody = Annotated[GalaxyForm, Depends(form_body(GalaxyForm))]

LIST_URL = "/admin/galaxies"


def _form_page(form: GalaxyForm, galaxy_id: int | None = None, error: str | None = None) -> GalaxyFormPage:
    return GalaxyFormPage(
        title="Edit galaxy" if galaxy_id else "New galaxy",
        current_page="admin_galaxy_form",
        is_admin=True,
        galaxy_id=galaxy_id,
        galaxy=form,
        error=error,
    )


@router.get("", response_model=GalaxyListPage)
def admin_galaxy_list(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    success: str | None = None,
) -> GalaxyListPage:
    """All galaxies, newest first."""
    rows = galaxies.list_galaxies(db, newest_first=True)
    return GalaxyListPage(
        title="Manage galaxies",
        current_page="admin_galaxies",
        is_admin=True,
        galaxies=[GalaxyOut.model_validate(g) for g in rows],
        galaxy_count=len(rows),
        success=success,
    )


@router.get("/new", response_model=GalaxyFormPage)
def admin_new_galaxy_form(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> GalaxyFormPage:
    return _form_page(GalaxyForm())


@router.post("/new", response_model=None)
def admin_create_galaxy(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    form: GalaxyFormBody,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        galaxy = galaxies.create_galaxy(db, form)
    except ValidationError as e:
        return render(_form_page(form, error=e.message), status.HTTP_422_UNPROCESSABLE_ENTITY)
    return redirect_with_success(LIST_URL, f"Galaxy {galaxy.name} created")


@router.get("/{galaxy_id}/edit", response_model=GalaxyFormPage)
def admin_edit_galaxy_form(
    galaxy_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> GalaxyFormPage:
    galaxy = galaxies.get_galaxy(db, galaxy_id)
    return _form_page(GalaxyForm.model_validate(galaxy, from_attributes=True), galaxy_id)


@router.post("/{galaxy_id}/edit", response_model=None)
def admin_update_galaxy(
    galaxy_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    form: GalaxyFormBody,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        galaxy = galaxies.update_galaxy(db, galaxy_id, form)
    except ValidationError as e:
        return render(
            _form_page(form, galaxy_id, error=e.message),
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    return redirect_with_success(LIST_URL, f"Galaxy {galaxy.name} updated")


@router.get("/{galaxy_id}/delete", response_model=ConfirmDeletePage)
def admin_confirm_delete_galaxy(
    galaxy_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ConfirmDeletePage:
    """Confirmation page; shows how many planets block the deletion, if any."""
    galaxy = galaxies.get_galaxy(db, galaxy_id)
    planet_count = galaxies.count_planets_in_galaxy(db, galaxy_id)
    return ConfirmDeletePage(
        title="Delete galaxy",
        current_page="admin_confirm_delete",
        is_admin=True,
        object_type="Galaxy",
        object_name=galaxy.name,
        delete_url=f"{LIST_URL}/{galaxy_id}/delete",
        return_url=LIST_URL,
        blocked=planet_count > 0,
        dependent_count=planet_count,
    )


@router.post("/{galaxy_id}/delete", response_model=None)
def admin_delete_galaxy(
    galaxy_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """ConflictError (409) when planets still reference the galaxy."""
    name = galaxies.delete_galaxy(db, galaxy_id)
    return redirect_with_success(LIST_URL, f"Galaxy {name} deleted")
