"""SQLAlchemy ORM models."""

from cosmos.models.base import Base
from cosmos.models.galaxy import Galaxy
from cosmos.models.planet import Planet
from cosmos.models.user import User

__all__ = ["Base", "Galaxy", "Planet", "User"]
