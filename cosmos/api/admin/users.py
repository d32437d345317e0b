"""Admin management of user accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from cosmos.api._forms import form_body
from cosmos.api._render import redirect_with_success, render
from cosmos.api.auth import require_admin
from cosmos.core.database import get_db
from cosmos.core.errors import ValidationError
from cosmos.repositories import users
from cosmos.schemas.auth import TokenClaims
from cosmos.schemas.pages import ConfirmDeletePage, UserDetailPage, UserFormPage, UserListPage
from cosmos.schemas.user import UserForm, UserOut

router = APIRouter()

UserFormBody = Annotated[UserForm, Depends(form_body(UserForm))]

LIST_URL = "/admin/users"


def _form_page(form: UserForm, user_id: int | None = None, error: str | None = None) -> UserFormPage:
    # Never echo a submitted password back to the client.
    return UserFormPage(
        title="Edit user" if user_id else "New user",
        current_page="admin_user_form",
        is_admin=True,
        user_id=user_id,
        user=form.model_copy(update={"password": ""}),
        error=error,
    )


@router.get("", response_model=UserListPage)
def admin_user_list(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    success: str | None = None,
) -> UserListPage:
    return UserListPage(
        title="Manage users",
        current_page="admin_users",
        is_admin=True,
        users=[UserOut.model_validate(u) for u in users.list_users(db)],
        success=success,
    )


@router.get("/new", response_model=UserFormPage)
def admin_new_user_form(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
) -> UserFormPage:
    return _form_page(UserForm())


@router.post("/new", response_model=None)
def admin_create_user(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    form: UserFormBody,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    try:
        user = users.create_user(db, form)
    except ValidationError as e:
        return render(_form_page(form, error=e.message), status.HTTP_422_UNPROCESSABLE_ENTITY)
    return redirect_with_success(LIST_URL, f"User {user.username} created")


@router.get("/{user_id}", response_model=UserDetailPage)
def admin_user_detail(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserDetailPage:
    user = UserOut.model_validate(users.get_user(db, user_id))
    return UserDetailPage(
        title=f"User {user.username}",
        current_page="admin_user_detail",
        is_admin=True,
        user=user,
    )


@router.get("/{user_id}/edit", response_model=UserFormPage)
def admin_edit_user_form(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserFormPage:
    user = users.get_user(db, user_id)
    form = UserForm(username=user.username, email=user.email, role=user.role)
    return _form_page(form, user_id)


@router.post("/{user_id}/edit", response_model=None)
def admin_update_user(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    form: UserFormBody,
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """Leave the password blank to keep the current one."""
    try:
        user = users.update_user(db, user_id, form)
    except ValidationError as e:
        return render(_form_page(form, user_id, error=e.message), status.HTTP_422_UNPROCESSABLE_ENTITY)
    return redirect_with_success(LIST_URL, f"User {user.username} updated")


@router.get("/{user_id}/delete", response_model=ConfirmDeletePage)
def admin_confirm_delete_user(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ConfirmDeletePage:
    user = users.get_user(db, user_id)
    return ConfirmDeletePage(
        title="Delete user",
        current_page="admin_confirm_delete",
        is_admin=True,
        object_type="User",
        object_name=user.username,
        delete_url=f"{LIST_URL}/{user_id}/delete",
        return_url=LIST_URL,
        blocked=user_id == users.PROTECTED_USER_ID,
    )


@router.post("/{user_id}/delete", response_model=None)
def admin_delete_user(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """The protected account (id 1) answers 409 for every caller."""
    username = users.delete_user(db, user_id)
    return redirect_with_success(LIST_URL, f"User {username} deleted")
