"""Planet persistence: ordered listing, lookup, create, update and delete."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from cosmos.core.errors import NotFoundError, ValidationError
from cosmos.models import Galaxy, Planet
from cosmos.repositories._common import commit, require_fields
from cosmos.schemas.planet import PlanetForm

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("name", "Planet name is required"),
    ("type", "Planet type is required"),
    ("description", "Description is required"),
)


def list_planets(db: Session, newest_first: bool = False) -> list[Planet]:
    """Public pages list by name; the back office lists newest (highest id) first."""
    order = Planet.id.desc() if newest_first else Planet.name
    return db.query(Planet).options(joinedload(Planet.galaxy)).order_by(order).all()


def list_planets_in_galaxy(db: Session, galaxy_id: int) -> list[Planet]:
    return (
        db.query(Planet)
        .options(joinedload(Planet.galaxy))
        .filter(Planet.galaxy_id == galaxy_id)
        .order_by(Planet.name)
        .all()
    )


def count_planets(db: Session) -> int:
    return db.query(func.count(Planet.id)).scalar() or 0


def get_planet(db: Session, planet_id: int) -> Planet:
    planet = (
        db.query(Planet)
        .options(joinedload(Planet.galaxy))
        .filter(Planet.id == planet_id)
        .first()
    )
    if planet is None:
        raise NotFoundError(f"Planet {planet_id} not found")
    return planet


def _validate(db: Session, form: PlanetForm) -> None:
    require_fields(form, REQUIRED_FIELDS)
    if form.galaxy_id is not None and db.get(Galaxy, form.galaxy_id) is None:
        raise ValidationError("Selected galaxy does not exist")


def _apply(planet: Planet, form: PlanetForm) -> None:
    planet.name = form.name
    planet.type = form.type
    planet.description = form.description
    planet.diameter_km = form.diameter_km
    planet.mass_kg = form.mass_kg
    planet.orbital_period_days = form.orbital_period_days
    planet.discovered_year = form.discovered_year
    planet.galaxy_id = form.galaxy_id
    planet.has_life = form.has_life
    planet.is_habitable = form.is_habitable


def create_planet(db: Session, form: PlanetForm) -> Planet:
    """Insert a planet; nothing is written when a required field is empty."""
    _validate(db, form)
    planet = Planet()
    _apply(planet, form)
    db.add(planet)
    commit(db, "create planet", integrity_message="Selected galaxy does not exist")
    db.refresh(planet)
    logger.info("Planet created: %s (id=%s)", planet.name, planet.id)
    return planet


def update_planet(db: Session, planet_id: int, form: PlanetForm) -> Planet:
    planet = get_planet(db, planet_id)
    _validate(db, form)
    _apply(planet, form)
    commit(db, "update planet", integrity_message="Selected galaxy does not exist")
    db.refresh(planet)
    logger.info("Planet updated: %s (id=%s)", planet.name, planet.id)
    return planet


def delete_planet(db: Session, planet_id: int) -> str:
    """Delete a planet and return its name."""
    planet = get_planet(db, planet_id)
    name = planet.name
    db.delete(planet)
    commit(db, "delete planet")
    logger.info("Planet deleted: %s (id=%s)", name, planet_id)
    return name
