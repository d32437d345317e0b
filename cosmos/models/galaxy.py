"""ORM model for catalog galaxies."""

from sqlalchemy import Column, DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import relationship

from cosmos.models.base import Base


class Galaxy(Base):
    """
    Galaxy catalog entry. Physical attributes are optional (NULL when unknown).

    A galaxy referenced by planets cannot be deleted; the repository enforces it.
    """

    __tablename__ = "galaxies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    type = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    diameter_ly = Column(Float, nullable=True)
    mass_suns = Column(Float, nullable=True)
    distance_from_earth_ly = Column(Float, nullable=True)
    discovered_year = Column(Integer, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    planets = relationship("Planet", back_populates="galaxy", passive_deletes="all")
