"""
Translation of domain, validation and storage failures into GraphQL errors
with a machine readable `extensions.code`.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from graphql import GraphQLError
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from booklibrary.core.config import settings
from booklibrary.core.exceptions import DomainError

logger = logging.getLogger(__name__)

INFRASTRUCTURE_ERROR = "INFRASTRUCTURE_ERROR"
VALIDATION_ERROR = "VALIDATION_ERROR"


def _validation_details(exc: ValidationError) -> list:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
        for error in exc.errors()
    ]


@contextmanager
def translate_errors() -> Iterator[None]:
    """
    Re-raises failures of the wrapped block as GraphQLError.

    DomainError keeps its message and extensions, pydantic ValidationError
    becomes VALIDATION_ERROR, and any SQLAlchemyError becomes a generic
    INFRASTRUCTURE_ERROR.
    """
    try:
        yield
    except DomainError as exc:
        logger.info(f"Request rejected: {exc.message}")
        raise GraphQLError(exc.message, extensions=exc.extensions) from exc
    except ValidationError as exc:
        raise GraphQLError(
            "Invalid input.",
            extensions={"code": VALIDATION_ERROR, "errors": _validation_details(exc)},
        ) from exc
    except SQLAlchemyError as exc:
        logger.exception("Storage failure while handling a GraphQL operation.")
        extensions: Dict[str, Any] = {"code": INFRASTRUCTURE_ERROR}
        if settings.include_exception_details:
            extensions["detail"] = str(exc)
        raise GraphQLError(
            "The operation could not be completed because of a storage error.",
            extensions=extensions,
        ) from exc
