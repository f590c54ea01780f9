"""
Apollo FastAPI - Structured Error Handling

ERROR TIERS:
------------
1. Setup-time: raised synchronously by ``graphql_http`` when it is called
   with the wrong arguments. Never reaches request processing.
2. Request-level: wrong HTTP method or missing body. Answered with a fixed
   status code and a plain-text body, the executor is never invoked.
3. Item-level: anything that goes wrong while handling one entry of a
   (batched) request. Formatted with the configured ``format_error`` and
   returned in place of that entry's result.

ITEM ERROR FORMAT:
------------------
{
    "message": "Must provide query string.",
    "locations": [{"line": 1, "column": 3}],   # only for located errors
    "path": ["hero", "name"]                    # only for execution errors
}
"""

import logging
from typing import Optional, Dict, Any
from enum import Enum
from dataclasses import dataclass, field

from graphql import GraphQLError

logger = logging.getLogger(__name__)


# =============================================================================
# ERROR CODES
# =============================================================================

class ErrorCode(str, Enum):
    """Unique error codes for every error type."""

    # Setup (1xxx)
    ERR_OPTIONS_MISSING = "ERR_1001"
    ERR_TOO_MANY_ARGUMENTS = "ERR_1002"

    # Request (2xxx)
    ERR_METHOD_NOT_ALLOWED = "ERR_2001"
    ERR_BODY_MISSING = "ERR_2002"
    ERR_BODY_INVALID = "ERR_2003"

    # Request item (3xxx)
    ERR_QUERY_MISSING = "ERR_3001"
    ERR_ITEM_NOT_OBJECT = "ERR_3002"
    ERR_VARIABLES_INVALID = "ERR_3003"


# =============================================================================
# ERROR RESPONSE
# =============================================================================

@dataclass
class ApolloServerError(Exception):
    """
    Structured error carrying what is needed to answer or log a failure.

    Attributes:
        code: Unique error code for searching logs
        message: Human-readable error message
        status_code: HTTP status code used when answering a request
        details: Additional context (dict)
    """
    code: ErrorCode
    message: str
    status_code: int = 500
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self):
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a loggable / JSON-able dict."""
        error_dict = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            error_dict["details"] = self.details
        return {"error": error_dict}

    def log(self, level: str = "error"):
        """Log the error with context."""
        log_msg = f"[{self.code.value}] {self.message}"
        if self.details:
            log_msg += f" | details={self.details}"

        getattr(logger, level)(log_msg)


# =============================================================================
# ERROR FACTORY FUNCTIONS
# =============================================================================

def options_missing() -> ApolloServerError:
    return ApolloServerError(
        code=ErrorCode.ERR_OPTIONS_MISSING,
        message="Apollo Server requires options.",
    )


def too_many_arguments(count: int) -> ApolloServerError:
    return ApolloServerError(
        code=ErrorCode.ERR_TOO_MANY_ARGUMENTS,
        message=f"Apollo Server expects exactly one argument, got {count}",
        details={"count": count},
    )


def method_not_allowed(method: str) -> ApolloServerError:
    return ApolloServerError(
        code=ErrorCode.ERR_METHOD_NOT_ALLOWED,
        message="Apollo Server supports only POST requests.",
        status_code=405,
        details={"method": method},
    )


def body_missing() -> ApolloServerError:
    return ApolloServerError(
        code=ErrorCode.ERR_BODY_MISSING,
        message="POST body missing. Did you forget to add JSONBodyMiddleware?",
        status_code=500,
    )


def body_invalid(reason: Optional[str] = None) -> ApolloServerError:
    details = {"reason": reason} if reason else {}
    return ApolloServerError(
        code=ErrorCode.ERR_BODY_INVALID,
        message="Invalid JSON in request body.",
        status_code=400,
        details=details,
    )


def query_missing() -> ApolloServerError:
    return ApolloServerError(
        code=ErrorCode.ERR_QUERY_MISSING,
        message="Must provide query string.",
        status_code=400,
    )


def item_not_object(kind: str) -> ApolloServerError:
    return ApolloServerError(
        code=ErrorCode.ERR_ITEM_NOT_OBJECT,
        message="POST body must be a JSON object or an array of objects.",
        status_code=400,
        details={"type": kind},
    )


def variables_invalid(reason: Optional[str] = None) -> ApolloServerError:
    details = {"reason": reason} if reason else {}
    return ApolloServerError(
        code=ErrorCode.ERR_VARIABLES_INVALID,
        message="Variables are invalid JSON.",
        status_code=400,
        details=details,
    )


# =============================================================================
# DEFAULT FORMATTER
# =============================================================================

def default_format_error(error: Exception) -> Dict[str, Any]:
    """
    Format any exception the way graphql-core formats a GraphQLError.

    Non-GraphQL exceptions are wrapped so the response keeps the
    ``{"message": ...}`` shape and the original is kept on ``original_error``.
    """
    if not isinstance(error, GraphQLError):
        error = GraphQLError(str(error), original_error=error)
    return error.formatted
