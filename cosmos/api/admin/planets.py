"""Admin CRUD for planets: list, new, edit, confirm and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from cosmos.api._forms import form_body
from cosmos.api._render import redirect_with_success, render
from cosmos.api.auth import require_admin
from cosmos.core.database import get_db
from cosmos.core.errors import ValidationError
from cosmos.repositories import galaxies, planets
from cosmos.schemas.auth import TokenClaims
from cosmos.schemas.galaxy import GalaxyChoice
from cosmos.schemas.pages import ConfirmDeletePage, PlanetFormPage, PlanetListPage
from cosmos.schemas.planet import PlanetForm, PlanetOut

router = APIRouter()

PlanetFormBody = Annotated[PlanetForm, Depends(form_body(PlanetForm))]

LIST_URL = "/admin/planets"


def _form_page(
    db: Session,
    form: PlanetForm,
    planet_id: int | None = None,
    error: str | None = None,
) -> PlanetFormPage:
    return PlanetFormPage(
        title="Edit planet" if planet_id else "New planet",
        current_page="admin_planet_form",
        is_admin=True,
        planet_id=planet_id,
        planet=form,
        galaxies=[GalaxyChoice.model_validate(g) for g in galaxies.list_galaxies(db)],
        error=error,
    )


@router.get("", response_model=PlanetListPage)
def admin_planet_list(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    success: str | None = None,
) -> PlanetListPage:
    """All planets, newest first."""
    rows = planets.list_planets(db, newest_first=True)
    return PlanetListPage(
        title="Manage planets",
        current_page="admin_planets",
        is_admin=True,
        planets=[PlanetOut.model_validate(p) for p in rows],
        planet_count=len(rows),
        success=success,
    )


@router.get("/new", response_model=PlanetFormPage)
def admin_new_planet_form(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> PlanetFormPage:
    return _form_page(db, PlanetForm())


@router.post("/new", response_model=None)
def admin_create_planet(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    form: PlanetFormBody,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        planet = planets.create_planet(db, form)
    except ValidationError as e:
        return render(_form_page(db, form, error=e.message), status.HTTP_422_UNPROCESSABLE_ENTITY)
    return redirect_with_success(LIST_URL, f"Planet {planet.name} created")


@router.get("/{planet_id}/edit", response_model=PlanetFormPage)
def admin_edit_planet_form(
    planet_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> PlanetFormPage:
    planet = planets.get_planet(db, planet_id)
    return _form_page(db, PlanetForm.model_validate(planet, from_attributes=True), planet_id)


@router.post("/{planet_id}/edit", response_model=None)
def admin_update_planet(
    planet_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    form: PlanetFormBody,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        planet = planets.update_planet(db, planet_id, form)
    except ValidationError as e:
        return render(
            _form_page(db, form, planet_id, error=e.message),
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    return redirect_with_success(LIST_URL, f"Planet {planet.name} updated")


@router.get("/{planet_id}/delete", response_model=ConfirmDeletePage)
def admin_confirm_delete_planet(
    planet_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ConfirmDeletePage:
    planet = planets.get_planet(db, planet_id)
    return ConfirmDeletePage(
        title="Delete planet",
        current_page="admin_confirm_delete",
        is_admin=True,
        object_type="Planet",
        object_name=planet.name,
        delete_url=f"{LIST_URL}/{planet_id}/delete",
        return_url=LIST_URL,
    )


@router.post("/{planet_id}/delete", response_model=None)
def admin_delete_planet(
    planet_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    name = planets.delete_planet(db, planet_id)
    return redirect_with_success(LIST_URL, f"Planet {name} deleted")
