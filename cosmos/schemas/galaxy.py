"""Schemas for galaxy forms and galaxy records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cosmos.schemas._fields import blank_to_none, strip_text


class GalaxyForm(BaseModel):
    """Fields submitted when creating or editing a galaxy."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", max_length=255)
    type: str = Field(default="", max_length=255)
    description: str = ""
    diameter_ly: float | None = Field(default=None, description="Diameter in light years, absent when unknown.")
    mass_suns: float | None = Field(default=None, description="Mass in solar masses, absent when unknown.")
    distance_from_earth_ly: float | None = None
    discovered_year: int | None = None

    @field_validator("name", "type", "description", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        return strip_text(v)

    @field_validator(
        "diameter_ly", "mass_suns", "distance_from_earth_ly", "discovered_year", mode="before"
    )
    @classmethod
    def _blank_is_absent(cls, v: object) -> object:
        return blank_to_none(v)


class GalaxyOut(BaseModel):
    """Galaxy as shown on public and admin pages."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    description: str
    diameter_ly: float | None = None
    mass_suns: float | None = None
    distance_from_earth_ly: float | None = None
    discovered_year: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GalaxyChoice(BaseModel):
    """Option in the planet form's galaxy selector."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
