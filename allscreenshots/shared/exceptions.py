"""Allscreenshots SDK exception system.

Every failure the SDK surfaces is an :class:`AllscreenshotsError`. Each error is
classified once, when it is created, and carries:

- ``retryable``: whether repeating the identical request may succeed
- ``hints``: structured guidance for the user (see :mod:`allscreenshots.shared.hints`)

Raw ``httpx`` exceptions and non-2xx responses are turned into typed errors by
:func:`classify_transport_error` and :func:`classify_response`.

Example:
    try:
        image = await client.screenshot(request)
    except AllscreenshotsRetriesExhaustedError as e:
        print(e.attempts, e.last_error)
    except AllscreenshotsApiError as e:
        print(e.status_code, e.code, e.message)
"""

from __future__ import annotations

import logging
import ssl
from enum import Enum
from typing import Any, ClassVar

import httpx

from allscreenshots.shared.hints import (
    API_KEY_MISSING,
    INVALID_REQUEST,
    QUOTA_EXCEEDED,
    RATE_LIMIT_HIT,
    SERVICE_UNAVAILABLE,
    Hint,
)

logger = logging.getLogger(__name__)

# Alternative keys the service uses for the human-readable message, in priority order.
ERROR_MESSAGE_KEYS = ("errorMessage", "message", "error")
ERROR_CODE_KEY = "errorCode"
UNKNOWN_ERROR_MESSAGE = "Unknown error"


class ErrorCode(str, Enum):
    """Error codes returned by the Allscreenshots API."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CANCELLED = "CANCELLED"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, raw: str | None) -> ErrorCode:
        """Map a raw code from a response body, falling back to ``UNKNOWN``."""
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN


RETRYABLE_ERROR_CODES = frozenset({ErrorCode.RATE_LIMIT_EXCEEDED, ErrorCode.INTERNAL_ERROR})


def is_retryable_status(status_code: int, code: ErrorCode = ErrorCode.UNKNOWN) -> bool:
    """Whether an HTTP failure may succeed when repeated verbatim."""
    return status_code >= 500 or status_code == 429 or code in RETRYABLE_ERROR_CODES


class AllscreenshotsError(Exception):
    """Base exception class for all Allscreenshots SDK errors."""

    # Subclasses can override these class attributes
    default_hints: ClassVar[list[Hint]] = []
    default_retryable: ClassVar[bool] = False

    def __init__(
        self,
        message: str = "",
        *,
        retryable: bool | None = None,
        hints: list[Hint] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.retryable = self.default_retryable if retryable is None else retryable
        # If hints not provided, use defaults defined by subclass
        self.hints: list[Hint] = hints if hints is not None else list(self.default_hints)

    def __str__(self) -> str:
        return self.message


class AllscreenshotsValidationError(AllscreenshotsError):
    """A request was rejected client-side, before anything was sent."""

    default_hints: ClassVar[list[Hint]] = [INVALID_REQUEST]

    def __str__(self) -> str:
        return f"Validation error: {self.message}"


class AllscreenshotsConfigError(AllscreenshotsError):
    """Invalid or missing client configuration."""

    def __str__(self) -> str:
        return f"Configuration error: {self.message}"


class AllscreenshotsEnvVarError(AllscreenshotsConfigError):
    """A required environment variable is not set."""

    default_hints: ClassVar[list[Hint]] = [API_KEY_MISSING]

    def __init__(self, var_name: str) -> None:
        self.var_name = var_name
        super().__init__(f"Environment variable '{var_name}' not set")


class AllscreenshotsTransportError(AllscreenshotsError):
    """The request never produced an HTTP response (connection, TLS, protocol)."""

    default_retryable: ClassVar[bool] = True


class AllscreenshotsTimeoutError(AllscreenshotsTransportError):
    """Request timed out."""


class AllscreenshotsApiError(AllscreenshotsError):
    """The service answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: str | None = None,
        response_text: str | None = None,
        response_json: dict[str, Any] | None = None,
        *,
        retryable: bool | None = None,
        hints: list[Hint] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.code = ErrorCode.parse(error_code)
        self.response_text = response_text
        self.response_json = response_json
        if retryable is None:
            retryable = is_retryable_status(status_code, self.code)
        if hints is None and status_code == 402:
            hints = [QUOTA_EXCEEDED]
        super().__init__(message, retryable=retryable, hints=hints)

    def __str__(self) -> str:
        parts = [f"API error ({self.error_code or self.code.value}): {self.message}"]
        parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)

    @classmethod
    def from_response(cls, response: httpx.Response) -> AllscreenshotsApiError:
        """Create an API error from a failed HTTP response.

        Called on the base class, the concrete subclass is picked from the status
        and the service error code (authentication, rate limit or generic).

        Args:
            response: The non-2xx response.

        Returns:
            An error carrying the status, the service error code and the best
            available human-readable message.
        """
        status_code = response.status_code
        response_text = response.text
        error_code, message, response_json = parse_error_body(response)

        error_cls: type[AllscreenshotsApiError] = cls
        if cls is AllscreenshotsApiError:
            error_cls = _error_class_for(status_code, ErrorCode.parse(error_code))

        logger.debug(
            "HTTP error from Allscreenshots API: %s | Status: %s | Response: %s%s",
            message,
            status_code,
            response_text[:500],
            "..." if len(response_text) > 500 else "",
        )
        return error_cls(
            message=message,
            status_code=status_code,
            error_code=error_code,
            response_text=response_text,
            response_json=response_json,
        )


class AllscreenshotsAuthenticationError(AllscreenshotsApiError):
    """Missing, invalid or unauthorized API key."""

    default_hints: ClassVar[list[Hint]] = [API_KEY_MISSING]


class AllscreenshotsRateLimitError(AllscreenshotsApiError):
    """Too many requests to the API."""

    default_hints: ClassVar[list[Hint]] = [RATE_LIMIT_HIT]


class AllscreenshotsResponseError(AllscreenshotsError):
    """Raised when a successful response cannot be decoded into the expected shape.

    A 2xx status with a malformed body is a contract violation rather than a
    transient fault, so this error is never retried.

    Attributes:
        message: A human-readable error message
        response_text: The body that failed to decode
    """

    def __init__(self, message: str, response_text: str | None = None) -> None:
        self.response_text = response_text
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.response_text:
            parts.append(f"Response: {self.response_text[:200]}")
        return " | ".join(parts)


class AllscreenshotsRetriesExhaustedError(AllscreenshotsError):
    """Every attempt failed with a retryable error.

    Distinct from the individual attempt errors: it means repeated transient
    failures, not one deterministic failure, ended the operation.
    """

    default_hints: ClassVar[list[Hint]] = [SERVICE_UNAVAILABLE]

    def __init__(self, last_error: AllscreenshotsError, attempts: int) -> None:
        self.last_error = last_error
        self.attempts = attempts
        hints = [hint for hint in last_error.hints if hint is not SERVICE_UNAVAILABLE]
        hints.extend(self.default_hints)
        super().__init__(
            f"All retries exhausted after {attempts} attempts: {last_error}",
            retryable=False,
            hints=hints,
        )


def parse_error_body(response: httpx.Response) -> tuple[str | None, str, dict[str, Any] | None]:
    """Extract ``(error_code, message, json_body)`` from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if not isinstance(body, dict):
        return None, f"HTTP {response.status_code} error", None

    raw_code = body.get(ERROR_CODE_KEY)
    error_code = raw_code if isinstance(raw_code, str) and raw_code else None
    message = next(
        (body[key] for key in ERROR_MESSAGE_KEYS if isinstance(body.get(key), str) and body[key]),
        UNKNOWN_ERROR_MESSAGE,
    )
    return error_code, message, body


def _error_class_for(status_code: int, code: ErrorCode) -> type[AllscreenshotsApiError]:
    if status_code in (401, 403) or code is ErrorCode.UNAUTHORIZED:
        return AllscreenshotsAuthenticationError
    if status_code == 429 or code is ErrorCode.RATE_LIMIT_EXCEEDED:
        return AllscreenshotsRateLimitError
    return AllscreenshotsApiError


def classify_response(response: httpx.Response) -> AllscreenshotsApiError:
    """Turn a non-2xx response into the matching typed error."""
    return AllscreenshotsApiError.from_response(response)


def classify_transport_error(error: Exception) -> AllscreenshotsTransportError:
    """Turn an exception raised while sending a request into a typed error.

    Timeouts and network-level failures are retryable. Anything else raised by
    the transport (unsupported scheme, proxy misconfiguration, local protocol
    misuse, unexpected exceptions) will fail the same way again and is not.
    """
    if isinstance(error, httpx.TimeoutException):
        return AllscreenshotsTimeoutError(f"Request timed out: {error!s}")
    if isinstance(error, (httpx.NetworkError, httpx.RemoteProtocolError)):
        return AllscreenshotsTransportError(f"Network error: {error!s}")
    if isinstance(error, ssl.SSLError):
        return AllscreenshotsTransportError(f"SSL error: {error!s}")
    if isinstance(error, httpx.HTTPError):
        return AllscreenshotsTransportError(f"Request error: {error!s}", retryable=False)
    return AllscreenshotsTransportError(f"Unexpected error: {error!s}", retryable=False)
