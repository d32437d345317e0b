"""Schemas for user forms and user records (password hashes never leave the server)."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cosmos.schemas._fields import strip_text


class UserForm(BaseModel):
    """
    Fields submitted when creating or editing a user.

    On edit, an empty password keeps the stored hash.
    """

    model_config = ConfigDict(extra="ignore")

    username: str = Field(default="", max_length=255)
    email: str = Field(default="", max_length=255)
    password: str = ""
    role: str = "user"

    @field_validator("username", "email", "role", mode="before")
    @classmethod
    def _strip(cls, v: object) -> object:
        return strip_text(v)


class UserOut(BaseModel):
    """User entry for admin pages (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str
    created_at: datetime | None = None
