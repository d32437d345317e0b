"""Public read-only pages: home, planet and galaxy listings and details."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from cosmos.core.database import get_db
from cosmos.repositories import galaxies, planets
from cosmos.schemas.galaxy import GalaxyOut
from cosmos.schemas.pages import (
    GalaxyDetailPage,
    GalaxyListPage,
    HomePage,
    PlanetDetailPage,
    PlanetListPage,
)
from cosmos.schemas.planet import PlanetOut

router = APIRouter()


@router.get("/", response_model=HomePage)
def home(db: Annotated[Session, Depends(get_db)]) -> HomePage:
    """Landing page with catalog totals."""
    return HomePage(
        title="Home",
        current_page="home",
        planet_count=planets.count_planets(db),
        galaxy_count=galaxies.count_galaxies(db),
    )


@router.get("/planets", response_model=PlanetListPage)
def planet_list(db: Annotated[Session, Depends(get_db)]) -> PlanetListPage:
    rows = planets.list_planets(db)
    return PlanetListPage(
        title="Planets",
        current_page="planets",
        planets=[PlanetOut.model_validate(p) for p in rows],
        planet_count=len(rows),
    )


@router.get("/planets/{planet_id}", response_model=PlanetDetailPage)
def planet_detail(planet_id: int, db: Annotated[Session, Depends(get_db)]) -> PlanetDetailPage:
    """Unknown ids raise NotFoundError, answered with 404."""
    planet = PlanetOut.model_validate(planets.get_planet(db, planet_id))
    return PlanetDetailPage(title=planet.name, current_page="planets", planet=planet)


@router.get("/galaxies", response_model=GalaxyListPage)
def galaxy_list(db: Annotated[Session, Depends(get_db)]) -> GalaxyListPage:
    rows = galaxies.list_galaxies(db)
    return GalaxyListPage(
        title="Galaxies",
        current_page="galaxies",
        galaxies=[GalaxyOut.model_validate(g) for g in rows],
        galaxy_count=len(rows),
    )


@router.get("/galaxies/{galaxy_id}", response_model=GalaxyDetailPage)
def galaxy_detail(galaxy_id: int, db: Annotated[Session, Depends(get_db)]) -> GalaxyDetailPage:
    galaxy = GalaxyOut.model_validate(galaxies.get_galaxy(db, galaxy_id))
    members = planets.list_planets_in_galaxy(db, galaxy_id)
    return GalaxyDetailPage(
        title=galaxy.name,
        current_page="galaxies",
        galaxy=galaxy,
        planets=[PlanetOut.model_validate(p) for p in members],
    )
