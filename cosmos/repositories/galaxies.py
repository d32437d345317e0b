"""Galaxy persistence: ordered listing, lookup, create, update and guarded delete."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from cosmos.core.errors import ConflictError, NotFoundError
from cosmos.models import Galaxy, Planet
from cosmos.repositories._common import commit, require_fields
from cosmos.schemas.galaxy import GalaxyForm

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("name", "Galaxy name is required"),
    ("type", "Galaxy type is required"),
    ("description", "Description is required"),
)


def list_galaxies(db: Session, newest_first: bool = False) -> list[Galaxy]:
    """Public pages list by name; the back office lists newest (highest id) first."""
    order = Galaxy.id.desc() if newest_first else Galaxy.name
    return db.query(Galaxy).order_by(order).all()


def count_galaxies(db: Session) -> int:
    return db.query(func.count(Galaxy.id)).scalar() or 0


def get_galaxy(db: Session, galaxy_id: int) -> Galaxy:
    galaxy = db.get(Galaxy, galaxy_id)
    if galaxy is None:
        raise NotFoundError(f"Galaxy {galaxy_id} not found")
    return galaxy


def _apply(galaxy: Galaxy, form: GalaxyForm) -> None:
    galaxy.name = form.name
    galaxy.type = form.type
    galaxy.description = form.description
    galaxy.diameter_ly = form.diameter_ly
    galaxy.mass_suns = form.mass_suns
    galaxy.distance_from_earth_ly = form.distance_from_earth_ly
    galaxy.discovered_year = form.discovered_year


def create_galaxy(db: Session, form: GalaxyForm) -> Galaxy:
    """Insert a galaxy; the store assigns id and created_at."""
    require_fields(form, REQUIRED_FIELDS)
    galaxy = Galaxy()
    _apply(galaxy, form)
    db.add(galaxy)
    commit(db, "create galaxy")
    db.refresh(galaxy)
    logger.info("Galaxy created: %s (id=%s)", galaxy.name, galaxy.id)
    return galaxy


def update_galaxy(db: Session, galaxy_id: int, form: GalaxyForm) -> Galaxy:
    galaxy = get_galaxy(db, galaxy_id)
    require_fields(form, REQUIRED_FIELDS)
    _apply(galaxy, form)
    commit(db, "update galaxy")
    db.refresh(galaxy)
    logger.info("Galaxy updated: %s (id=%s)", galaxy.name, galaxy.id)
    return galaxy


def count_planets_in_galaxy(db: Session, galaxy_id: int) -> int:
    return (
        db.query(func.count(Planet.id)).filter(Planet.galaxy_id == galaxy_id).scalar() or 0
    )


def delete_galaxy(db: Session, galaxy_id: int) -> str:
    """
    Delete a galaxy that no planet references; return its name.

    The dependent-planet check and the delete are separate statements, so a
    planet inserted concurrently between them is not detected here.
    """
    galaxy = get_galaxy(db, galaxy_id)
    planet_count = count_planets_in_galaxy(db, galaxy_id)
    if planet_count > 0:
        logger.warning(
            "Refused to delete galaxy %s (id=%s): %s dependent planet(s)",
            galaxy.name,
            galaxy_id,
            planet_count,
        )
        raise ConflictError(
            f"Galaxy '{galaxy.name}' still has {planet_count} planet(s). "
            "Delete or move its planets first."
        )
    name = galaxy.name
    db.delete(galaxy)
    # A planet added after the count trips the foreign key instead.
    commit(
        db,
        "delete galaxy",
        integrity_message=f"Galaxy '{name}' still has planets. Delete or move its planets first.",
        integrity_error=ConflictError,
    )
    logger.info("Galaxy deleted: %s (id=%s)", name, galaxy_id)
    return name
