"""Schemas for planet forms and planet records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from cosmos.schemas._fields import blank_to_none, blank_to_zero, strip_text

UNKNOWN_GALAXY_LABEL = "Not specified"


class PlanetForm(BaseModel):
    """
    Fields submitted when creating or editing a planet.

    Physical attributes are required and read as 0 when left blank;
    discovered_year and galaxy_id are optional and stay None when absent.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", max_length=255)
    type: str = Field(default="", max_length=255)
    description: str = ""
    diameter_km: float = 0.0
    mass_kg: float = 0.0
    orbital_period_days: float = 0.0
    discovered_year: int | None = None
    galaxy_id: int | None = None
    has_life: bool = False
    is_habitable: bool = False

    @field_validator("name", "type", "description", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        return strip_text(v)

    @field_validator("diameter_km", "mass_kg", "orbital_period_days", mode="before")
    @classmethod
    def _blank_is_zero(cls, v: object) -> object:
        return blank_to_zero(v)

    @field_validator("discovered_year", mode="before")
    @classmethod
    def _blank_is_absent(cls, v: object) -> object:
        return blank_to_none(v)

    @field_validator("galaxy_id", mode="before")
    @classmethod
    def _no_galaxy(cls, v: object) -> object:
        # The form's "no galaxy" option posts an empty value or 0.
        v = blank_to_none(v)
        if v is not None and int(v) <= 0:
            return None
        return v


class PlanetOut(BaseModel):
    """Planet as shown on public and admin pages."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    description: str
    diameter_km: float
    mass_kg: float
    orbital_period_days: float
    discovered_year: int | None = None
    galaxy_id: int | None = None
    galaxy_name: str | None = None
    has_life: bool
    is_habitable: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def galaxy_label(self) -> str:
        return self.galaxy_name or UNKNOWN_GALAXY_LABEL
