"""View models handed to page rendering: the data each public or admin page shows."""

from pydantic import BaseModel, Field

from cosmos.schemas.galaxy import GalaxyChoice, GalaxyForm, GalaxyOut
from cosmos.schemas.planet import PlanetForm, PlanetOut
from cosmos.schemas.user import UserForm, UserOut


class Page(BaseModel):
    """Fields every page carries (title, navigation marker, flash messages)."""

    title: str
    current_page: str
    is_admin: bool = False
    error: str | None = None
    success: str | None = None


class HomePage(Page):
    planet_count: int = Field(..., ge=0)
    galaxy_count: int = Field(..., ge=0)


class PlanetListPage(Page):
    planets: list[PlanetOut] = Field(default_factory=list)
    planet_count: int = 0


class PlanetDetailPage(Page):
    planet: PlanetOut


class GalaxyListPage(Page):
    galaxies: list[GalaxyOut] = Field(default_factory=list)
    galaxy_count: int = 0


class GalaxyDetailPage(Page):
    galaxy: GalaxyOut
    planets: list[PlanetOut] = Field(default_factory=list)


class LoginPage(Page):
    username: str = ""


class DashboardPage(Page):
    username: str
    role: str
    planet_count: int
    galaxy_count: int
    admin_count: int


class PlanetFormPage(Page):
    planet_id: int | None = None
    planet: PlanetForm
    galaxies: list[GalaxyChoice] = Field(default_factory=list)


class GalaxyFormPage(Page):
    galaxy_id: int | None = None
    galaxy: GalaxyForm


class UserListPage(Page):
    users: list[UserOut] = Field(default_factory=list)


class UserDetailPage(Page):
    user: UserOut


class UserFormPage(Page):
    user_id: int | None = None
    user: UserForm


class ConfirmDeletePage(Page):
    """Confirmation step before a destructive action."""

    object_type: str
    object_name: str
    delete_url: str
    return_url: str
    blocked: bool = False
    dependent_count: int = 0
