"""Helpers shared by the entity repositories."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from cosmos.core.errors import CosmosError, InternalError, ValidationError

logger = logging.getLogger(__name__)


def require_fields(form: BaseModel, required: Iterable[tuple[str, str]]) -> None:
    """Raise ValidationError with the first message whose field is empty."""
    for field_name, message in required:
        value = getattr(form, field_name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(message)


def commit(
    db: Session,
    action: str,
    integrity_message: str | None = None,
    integrity_error: type[CosmosError] = ValidationError,
) -> None:
    """
    Commit the pending write. Constraint violations become integrity_error
    (ValidationError unless given) when integrity_message is set; other
    database failures become InternalError.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if integrity_message is None:
            logger.exception("Integrity error while trying to %s", action)
            raise InternalError(cause=e) from e
        logger.warning("Rejected %s: %s", action, integrity_message)
        raise integrity_error(integrity_message) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise InternalError(cause=e) from e
