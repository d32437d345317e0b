"""ORM model for catalog planets."""

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from cosmos.models.base import Base


class Planet(Base):
    """Planet catalog entry, optionally belonging to a galaxy."""

    __tablename__ = "planets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    diameter_km = Column(Float, nullable=False, default=0.0)
    mass_kg = Column(Float, nullable=False, default=0.0)
    orbital_period_days = Column(Float, nullable=False, default=0.0)
    discovered_year = Column(Integer, nullable=True)
    galaxy_id = Column(Integer, ForeignKey("galaxies.id"), nullable=True, index=True)
    has_life = Column(Boolean, nullable=False, default=False)
    is_habitable = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    galaxy = relationship("Galaxy", back_populates="planets")

    @property
    def galaxy_name(self) -> str | None:
        return self.galaxy.name if self.galaxy is not None else None
