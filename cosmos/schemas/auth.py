"""Request/response schemas for login and verified session claims."""

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials submitted on the login form."""

    username: str = Field(default="", max_length=255, description="Username")
    password: str = Field(default="", description="Password")


class TokenClaims(BaseModel):
    """Verified assertions carried by a session token."""

    username: str
    role: str
    user_id: int
    issued_at: datetime
    not_before: datetime
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
