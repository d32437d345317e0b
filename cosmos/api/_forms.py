"""Read a form model from either a JSON body or a browser form post."""

import json
from collections.abc import Awaitable, Callable
from typing import TypeVar

import pydantic
from fastapi import HTTPException, Request, status
from pydantic import BaseModel

from cosmos.core.errors import ValidationError

FormT = TypeVar("FormT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _describe(exc: pydantic.ValidationError) -> str:
    # Field names and reasons only; submitted values (passwords) are never echoed.
    parts = []
    for err in exc.errors(include_input=False, include_url=False):
        field = ".".join(str(p) for p in err["loc"]) or "body"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def form_body(model: type[FormT]) -> Callable[[Request], Awaitable[FormT]]:
    """Dependency factory: validate the request body into `model`."""

    async def parse(request: Request) -> FormT:
        content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type == "application/json":
            try:
                data = await request.json()
            except json.JSONDecodeError as e:
                raise ValidationError("Request body is not valid JSON") from e
        elif content_type in FORM_CONTENT_TYPES:
            form = await request.form()
            data = {key: value for key, value in form.items() if isinstance(value, str)}
        else:
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail="Content-Type must be application/json or a form submission.",
            )
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(_describe(e)) from e

    return parse
