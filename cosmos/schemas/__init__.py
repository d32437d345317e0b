"""Pydantic request/response and page view schemas."""

from cosmos.schemas.auth import LoginRequest, TokenClaims
from cosmos.schemas.galaxy import GalaxyChoice, GalaxyForm, GalaxyOut
from cosmos.schemas.health import HealthResponse
from cosmos.schemas.planet import PlanetForm, PlanetOut
from cosmos.schemas.user import UserForm, UserOut

__all__ = [
    "GalaxyChoice",
    "GalaxyForm",
    "GalaxyOut",
    "HealthResponse",
    "LoginRequest",
    "PlanetForm",
    "PlanetOut",
    "TokenClaims",
    "UserForm",
    "UserOut",
]
