"""Admin login/logout and the auth gate dependencies (get_current_claims, require_admin)."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from cosmos.api._forms import form_body
from cosmos.api._render import render
from cosmos.core.database import get_db
from cosmos.core.errors import ForbiddenError, TokenError, UnauthenticatedError
from cosmos.core.security import create_access_token, decode_access_token
from cosmos.repositories.users import authenticate
from cosmos.schemas.auth import LoginRequest, TokenClaims
from cosmos.schemas.pages import LoginPage

logger = logging.getLogger(__name__)
router = APIRouter()

LOGIN_URL = "/admin/login"
DASHBOARD_URL = "/admin"
LOGIN_TITLE = "Admin login"


def extract_token(request: Request) -> str | None:
    """Return the session token from the auth cookie, else from an Authorization: Bearer header."""
    cookie_name = request.app.state.settings.AUTH_COOKIE_NAME
    token = request.cookies.get(cookie_name)
    if token:
        return token
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() == "bearer" and param:
        return param
    return None


def verify_request(request: Request) -> TokenClaims:
    """Verify the request's token. Raises UnauthenticatedError (redirect to login) on any failure."""
    token = extract_token(request)
    if token is None:
        raise UnauthenticatedError("Not authenticated", redirect_to=LOGIN_URL)
    settings = request.app.state.settings
    try:
        return decode_access_token(
            token,
            secret=request.app.state.jwt_secret,
            algorithm=settings.JWT_ALGORITHM,
        )
    except TokenError as e:
        logger.info("Rejected session token: %s", e.message)
        raise UnauthenticatedError(e.message, redirect_to=LOGIN_URL) from e


def get_current_claims(request: Request) -> TokenClaims:
    """Dependency: require a valid session token and return its claims."""
    return verify_request(request)


def require_admin(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> TokenClaims:
    """Dependency: require a verified token with role 'admin'. Raises 403 for other roles, no redirect."""
    if not claims.is_admin:
        logger.warning("Forbidden: %s (role=%s) requested an admin page", claims.username, claims.role)
        raise ForbiddenError("Admin access required")
    return claims


def _login_page(username: str = "", error: str | None = None) -> LoginPage:
    return LoginPage(
        title=LOGIN_TITLE,
        current_page="admin_login",
        username=username,
        error=error,
    )


@router.get(LOGIN_URL, response_model=None)
def login_page(request: Request) -> Response | LoginPage:
    """Show the login form; an already-authenticated admin goes straight to the dashboard."""
    try:
        claims = verify_request(request)
    except UnauthenticatedError:
        return _login_page()
    if claims.is_admin:
        return RedirectResponse(DASHBOARD_URL, status_code=status.HTTP_302_FOUND)
    return _login_page()


@router.post(LOGIN_URL, response_model=None)
def login(
    request: Request,
    body: Annotated[LoginRequest, Depends(form_body(LoginRequest))],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    """
    Check credentials and, for an admin, set the auth cookie and redirect to the dashboard.

    Failures re-render the login page with the reason; there is no lockout.
    """
    username = body.username.strip()
    logger.info("Login attempt: %r", username)
    if not username or not body.password:
        return render(
            _login_page(username, "Username and password are required"),
            status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    user = authenticate(db, username, body.password)
    if user is None:
        return render(
            _login_page(username, "Invalid username or password"),
            status.HTTP_401_UNAUTHORIZED,
        )
    if user.role != "admin":
        logger.info("Login refused: %r is not an admin (role=%s)", username, user.role)
        return render(
            _login_page(username, "Administrator rights required"),
            status.HTTP_403_FORBIDDEN,
        )

    settings = request.app.state.settings
    ttl = timedelta(hours=settings.JWT_EXPIRE_HOURS)
    token = create_access_token(
        user.username,
        user.role,
        user.id,
        secret=request.app.state.jwt_secret,
        algorithm=settings.JWT_ALGORITHM,
        ttl=ttl,
    )
    response = RedirectResponse(DASHBOARD_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(ttl.total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    logger.info("Login succeeded: %s (id=%s)", user.username, user.id)
    return response


@router.api_route("/admin/logout", methods=["GET", "POST"], response_model=None)
def logout(request: Request) -> Response:
    """Clear the auth cookie (max-age 0) and return to the login page. Tokens are not revoked server-side."""
    response = RedirectResponse(LOGIN_URL, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(
        key=request.app.state.settings.AUTH_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return response
