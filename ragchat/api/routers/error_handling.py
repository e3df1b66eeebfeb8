"""
API error handling utilities.

Decorator mapping domain exceptions to ``{"error": ...}`` JSON responses
with consistent status codes and logging across endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from ragchat.core.exceptions import (
    EmbeddingProviderError,
    PersistenceError,
    RagChatException,
    ValidationError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def handle_api_errors(func: F) -> F:
    """
    Decorator translating domain errors into JSON error responses.

    - ValidationError (incl. EmptyInputError) -> 400
    - EmbeddingProviderError -> 502
    - PersistenceError -> 503
    - anything else -> 500, logged with traceback
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"field": e.field, "error": e.message})
            return error_response(status.HTTP_400_BAD_REQUEST, e.message)

        except EmbeddingProviderError as e:
            logger.error("Embedding provider failure", extra={"error": str(e)})
            return error_response(status.HTTP_502_BAD_GATEWAY, e.message)

        except PersistenceError as e:
            logger.error(
                "Persistence failure",
                extra={"operation": e.operation, "error": str(e)},
            )
            return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, e.message)

        except RagChatException as e:
            logger.exception("Unhandled application error", extra={"error": str(e)})
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message)

        except Exception as e:
            logger.exception("Unexpected failure", extra={"error": str(e)})
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return wrapper  # type: ignore
