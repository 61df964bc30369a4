"""
EmailBison Errors Module - Typed error hierarchy for API failures.

Every failure the EmailBison client surfaces is one of the classes below. Each
carries a stable ``ErrorCode`` so callers can branch on the failure category
without matching on message text.

Classification happens in ``http_error_from_response`` (HTTP status driven) or
in the client itself for transport failures (network, timeout).
"""

import math
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Machine-readable error codes for EmailBison failures."""

    # Transport
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"

    # Caller / request problems
    AUTH_ERROR = "AUTH_ERROR"
    FORBIDDEN_ERROR = "FORBIDDEN_ERROR"
    NOT_FOUND_ERROR = "NOT_FOUND_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Upstream pressure / failure
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"

    UNKNOWN_ERROR = "UNKNOWN_ERROR"


RETRYABLE_CODES: frozenset[ErrorCode] = frozenset(
    {
        ErrorCode.NETWORK_ERROR,
        ErrorCode.TIMEOUT_ERROR,
        ErrorCode.RATE_LIMIT_ERROR,
        ErrorCode.SERVER_ERROR,
    }
)

DEFAULT_ERROR_MESSAGE = "Request failed"


class ErrorPayload(BaseModel):
    """Serialized form of an EmailBisonError.

    Attributes:
        name: Concrete error class name (e.g. ``RateLimitError``).
        message: Human-readable description.
        code: Value of the ``ErrorCode``.
        status_code: HTTP status, when the failure came from a response.
        details: Field errors or the raw response body.
        timestamp: ISO-8601 capture time (UTC).
    """

    name: str
    message: str
    code: str = Field(..., examples=["RATE_LIMIT_ERROR", "SERVER_ERROR"])
    status_code: int | None = None
    details: Any | None = None
    timestamp: str


class EmailBisonError(Exception):
    """Base error for all EmailBison API failures.

    Attributes:
        message: Human-readable error description.
        code: ErrorCode for programmatic handling.
        status_code: HTTP status code, if any.
        details: Structured context (field errors, raw body).
        timestamp: When the error was created (UTC).

    Example:
        >>> try:
        ...     await client.get("/api/campaigns/42")
        ... except EmailBisonError as exc:
        ...     if exc.code is ErrorCode.NOT_FOUND_ERROR:
        ...         ...
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        status_code: int | None = None,
        details: Any | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.timestamp = datetime.now(UTC)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain, JSON-safe dictionary for logging or transport."""
        payload = ErrorPayload(
            name=self.name,
            message=self.message,
            code=self.code.value,
            status_code=self.status_code,
            details=self.details,
            timestamp=self.timestamp.isoformat(),
        )
        return payload.model_dump()

    def __repr__(self) -> str:
        return f"{self.name}(code={self.code.value}, status_code={self.status_code}, message={self.message!r})"


class NetworkError(EmailBisonError):
    """DNS failure, refused connection, dropped socket."""

    def __init__(self, message: str = "Network request failed"):
        super().__init__(message, ErrorCode.NETWORK_ERROR)


class RequestTimeoutError(EmailBisonError):
    """An attempt did not complete within its timeout."""

    def __init__(self, timeout_ms: int | float):
        super().__init__(f"Request timed out after {timeout_ms}ms", ErrorCode.TIMEOUT_ERROR)
        self.timeout_ms = timeout_ms


class AuthenticationError(EmailBisonError):
    """401 - invalid or missing API key."""

    def __init__(self, message: str = "Invalid or expired API key"):
        super().__init__(message, ErrorCode.AUTH_ERROR, 401)


class ForbiddenError(EmailBisonError):
    """403 - authenticated, but not allowed."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, ErrorCode.FORBIDDEN_ERROR, 403)


class NotFoundError(EmailBisonError):
    """404 - resource does not exist."""

    def __init__(
        self,
        resource: str | None = None,
        resource_id: str | int | None = None,
        message: str | None = None,
    ):
        if message is None:
            if resource:
                suffix = f" ({resource_id})" if resource_id is not None else ""
                message = f"{resource}{suffix} not found"
            else:
                message = "Resource not found"
        super().__init__(message, ErrorCode.NOT_FOUND_ERROR, 404)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(EmailBisonError):
    """400/422 - request payload rejected.

    ``field_errors`` maps field names to their messages when the upstream sent
    Laravel-style validation output.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: dict[str, list[str]] | None = None,
        status_code: int = 400,
    ):
        super().__init__(message, ErrorCode.VALIDATION_ERROR, status_code, field_errors)
        self.field_errors = field_errors


class RateLimitError(EmailBisonError):
    """429 - too many requests."""

    def __init__(self, retry_after_ms: int | float | None = None):
        if retry_after_ms:
            message = f"Rate limit exceeded. Retry after {math.ceil(retry_after_ms / 1000)}s"
        else:
            message = "Rate limit exceeded"
        super().__init__(message, ErrorCode.RATE_LIMIT_ERROR, 429)
        self.retry_after_ms = retry_after_ms


class ServerError(EmailBisonError):
    """5xx - failure on the EmailBison side."""

    def __init__(self, message: str = "Internal server error", status_code: int = 500):
        super().__init__(message, ErrorCode.SERVER_ERROR, status_code)


# =============================================================================
# Body sniffing
# =============================================================================
# The upstream is inconsistent about where it puts the error text. Each
# strategy inspects one known shape and returns the message or None.

MessageStrategy = Callable[[Mapping[str, Any]], str | None]


def _top_level(field: str) -> MessageStrategy:
    def strategy(body: Mapping[str, Any]) -> str | None:
        value = body.get(field)
        return value if isinstance(value, str) else None

    strategy.__name__ = f"top_level_{field}"
    return strategy


def _wrapped_data_message(body: Mapping[str, Any]) -> str | None:
    # {"data": {"success": false, "message": "..."}}
    data = body.get("data")
    if isinstance(data, Mapping) and isinstance(data.get("message"), str):
        return data["message"]
    return None


def _first_listed_error(body: Mapping[str, Any]) -> str | None:
    errors = body.get("errors")
    if not isinstance(errors, list) or not errors:
        return None
    first = errors[0]
    if isinstance(first, str):
        return first
    if isinstance(first, Mapping) and "message" in first:
        return str(first["message"])
    return None


MESSAGE_STRATEGIES: tuple[MessageStrategy, ...] = (
    _top_level("message"),
    _top_level("error"),
    _top_level("detail"),
    _wrapped_data_message,
    _first_listed_error,
)


def match_error_message(body: Any) -> str | None:
    """Return the first message any extraction strategy finds, else None."""
    if not isinstance(body, Mapping):
        return None
    for strategy in MESSAGE_STRATEGIES:
        message = strategy(body)
        if message is not None:
            return message
    return None


def extract_error_message(body: Any) -> str:
    """Best-effort human message from an error response body."""
    return match_error_message(body) or DEFAULT_ERROR_MESSAGE


def extract_field_errors(body: Any) -> dict[str, list[str]] | None:
    """Laravel-style ``{"errors": {"field": ["msg", ...]}}``."""
    if not isinstance(body, Mapping):
        return None
    errors = body.get("errors")
    if isinstance(errors, Mapping):
        return dict(errors)
    return None


def extract_retry_after_ms(body: Any) -> float | None:
    """``retry_after`` is sent in seconds; returned in milliseconds."""
    if not isinstance(body, Mapping):
        return None
    value = body.get("retry_after")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value * 1000
    return None


# =============================================================================
# Classification
# =============================================================================


def http_error_from_response(status_code: int, body: Any = None) -> EmailBisonError:
    """Convert an HTTP status and parsed body into the matching error type.

    Args:
        status_code: Non-2xx HTTP status.
        body: Parsed JSON body, or None if it could not be parsed.

    Returns:
        EmailBisonError: The most specific error for the status.
    """
    matched = match_error_message(body)
    message = matched or DEFAULT_ERROR_MESSAGE

    if status_code in (400, 422):
        return ValidationError(message, extract_field_errors(body), status_code=status_code)
    if status_code == 401:
        return AuthenticationError(message)
    if status_code == 403:
        return ForbiddenError(message)
    if status_code == 404:
        return NotFoundError(message=matched or None)
    if status_code == 429:
        return RateLimitError(extract_retry_after_ms(body))
    if status_code >= 500:
        return ServerError(message, status_code)
    return EmailBisonError(
        message,
        ErrorCode.UNKNOWN_ERROR,
        status_code,
        body,
    )


def is_emailbison_error(error: object) -> bool:
    return isinstance(error, EmailBisonError)


def is_retryable_error(error: object) -> bool:
    """True for network, timeout, rate-limit and server errors only."""
    return isinstance(error, EmailBisonError) and error.code in RETRYABLE_CODES
