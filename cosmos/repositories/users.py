"""User persistence, credential checks and bootstrap admin seeding."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from cosmos.core.errors import ConflictError, NotFoundError, ValidationError
from cosmos.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LEN,
    PASSWORD_TOO_LONG_MESSAGE,
    hash_password,
    verify_password,
)
from cosmos.models import User
from cosmos.repositories._common import commit, require_fields
from cosmos.schemas.user import UserForm

if TYPE_CHECKING:
    from cosmos.core.config import Settings

logger = logging.getLogger(__name__)

# The first account (bootstrap admin) can never be deleted.
PROTECTED_USER_ID = 1
VALID_ROLES = frozenset({"admin", "user"})
DUPLICATE_MESSAGE = "A user with this username or email already exists"

REQUIRED_FIELDS = (
    ("username", "Username is required"),
    ("email", "Email is required"),
    ("role", "Role is required"),
)


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.id.desc()).all()


def count_users(db: Session, role: str | None = None) -> int:
    query = db.query(func.count(User.id))
    if role is not None:
        query = query.filter(User.role == role)
    return query.scalar() or 0


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    return user


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def _validate(form: UserForm, password_required: bool) -> None:
    require_fields(form, REQUIRED_FIELDS)
    if form.role not in VALID_ROLES:
        raise ValidationError("Role must be 'admin' or 'user'")
    if password_required and not form.password:
        raise ValidationError("Password is required")
    if not form.password:
        return
    if len(form.password) < PASSWORD_MIN_LEN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LEN} characters")
    if len(form.password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(PASSWORD_TOO_LONG_MESSAGE)


def _ensure_unique(db: Session, form: UserForm, exclude_id: int | None = None) -> None:
    query = db.query(User.id).filter(
        or_(User.username == form.username, User.email == form.email)
    )
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    if query.first() is not None:
        raise ValidationError(DUPLICATE_MESSAGE)


def create_user(db: Session, form: UserForm) -> User:
    """Create a user with a hashed password; the store assigns id and created_at."""
    _validate(form, password_required=True)
    _ensure_unique(db, form)
    user = User(
        username=form.username,
        email=form.email,
        password_hash=hash_password(form.password),
        role=form.role,
    )
    db.add(user)
    commit(db, "create user", integrity_message=DUPLICATE_MESSAGE)
    db.refresh(user)
    logger.info("User created: %s (id=%s, role=%s)", user.username, user.id, user.role)
    return user


def update_user(db: Session, user_id: int, form: UserForm) -> User:
    """Update identity and role; a blank password keeps the stored hash."""
    user = get_user(db, user_id)
    _validate(form, password_required=False)
    _ensure_unique(db, form, exclude_id=user_id)
    user.username = form.username
    user.email = form.email
    user.role = form.role
    if form.password:
        user.password_hash = hash_password(form.password)
    commit(db, "update user", integrity_message=DUPLICATE_MESSAGE)
    db.refresh(user)
    logger.info("User updated: id=%s (password changed: %s)", user_id, bool(form.password))
    return user


def delete_user(db: Session, user_id: int) -> str:
    """Delete a user and return the username. The protected account is refused."""
    if user_id == PROTECTED_USER_ID:
        logger.warning("Refused to delete protected user id=%s", user_id)
        raise ConflictError("The main administrator account cannot be deleted")
    user = get_user(db, user_id)
    username = user.username
    db.delete(user)
    commit(db, "delete user")
    logger.info("User deleted: %s (id=%s)", username, user_id)
    return username


def authenticate(db: Session, username: str, password: str) -> User | None:
    """Return the user when the password matches the stored hash, else None."""
    user = get_user_by_username(db, username)
    if user is None:
        logger.info("Login failed: unknown user %r", username)
        return None
    if not verify_password(password, user.password_hash):
        logger.info("Login failed: wrong password for %r", username)
        return None
    return user


def bootstrap_admin(db: Session, settings: "Settings") -> User | None:
    """
    Create the configured admin account if no user has that username.

    Returns the created user, or None when it already existed. Idempotent.
    """
    if get_user_by_username(db, settings.ADMIN_USERNAME) is not None:
        return None
    password = settings.ADMIN_PASSWORD.get_secret_value()
    if password == "admin123":
        logger.warning(
            "Bootstrap admin %r is being created with the default password; change ADMIN_PASSWORD.",
            settings.ADMIN_USERNAME,
        )
    form = UserForm(
        username=settings.ADMIN_USERNAME,
        email=settings.ADMIN_EMAIL,
        password=password,
        role="admin",
    )
    return create_user(db, form)
