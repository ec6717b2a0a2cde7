"""
API error handling utilities.

Provides a decorator that maps domain exceptions to HTTP errors
consistently across agent endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from agent_rag.core.exceptions import (
    AgentRAGException,
    ConfigError,
    ContentTooLargeError,
    EmptyQueryError,
    NotFoundError,
    ServiceError,
)
from agent_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def to_http_exception(exc: AgentRAGException) -> HTTPException:
    """Map a domain exception to an HTTPException."""
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (ConfigError, EmptyQueryError)):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, ContentTooLargeError):
        code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    elif isinstance(exc, ServiceError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=exc.message)


def handle_agent_errors(func: F) -> F:
    """
    Decorator to transform domain errors into HTTPExceptions.

    Not-found and invalid-request errors are logged at WARNING, provider
    failures at ERROR, anything unexpected with a traceback.
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except ServiceError as e:
            log_exception_with_context(logger, "Provider failure", e, provider=e.provider, operation=e.operation)
            raise to_http_exception(e)

        except AgentRAGException as e:
            logger.warning("Rejected request", extra={"error": str(e)})
            raise to_http_exception(e)

        except Exception as e:
            logger.exception("Unexpected failure in agent operation", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred: {str(e)}",
            )

    return wrapper  # type: ignore
