"""Response helpers shared by page handlers."""

from urllib.parse import urlencode

from fastapi import status
from fastapi.responses import JSONResponse, RedirectResponse

from cosmos.schemas.pages import Page


def render(page: Page, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Serialize a page view model with an explicit status (used for form errors)."""
    return JSONResponse(status_code=status_code, content=page.model_dump(mode="json"))


def redirect_with_success(url: str, message: str) -> RedirectResponse:
    """Post/redirect/get: send the browser back to a list page with a flash message."""
    return RedirectResponse(
        f"{url}?{urlencode({'success': message})}",
        status_code=status.HTTP_303_SEE_OTHER,
    )
