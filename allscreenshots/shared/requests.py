"""
HTTP request dispatch for the Allscreenshots API.

Every endpoint goes through :meth:`RequestDispatcher.dispatch`: an
:class:`Operation` names the method, the path, the already-serialized body and
how a successful response is decoded. The dispatcher runs the attempt loop
under a :class:`~allscreenshots.shared.retry.RetryPolicy` and only ever raises
:class:`~allscreenshots.shared.exceptions.AllscreenshotsError` subclasses.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from allscreenshots.shared.exceptions import (
    AllscreenshotsConfigError,
    AllscreenshotsError,
    AllscreenshotsResponseError,
    AllscreenshotsRetriesExhaustedError,
    classify_response,
    classify_transport_error,
)
from allscreenshots.shared.retry import RetryPolicy
from allscreenshots.version import __version__

if TYPE_CHECKING:
    from collections.abc import Mapping

# Set up logger
logger = logging.getLogger("allscreenshots.http")

API_KEY_HEADER = "X-API-Key"
JSON_CONTENT_TYPE = "application/json"
USER_AGENT = f"allscreenshots-python/{__version__}"
SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

# Captures of long pages can take close to the service-side 60s limit.
_DEFAULT_TIMEOUT = 60.0
_DEFAULT_LIMITS = httpx.Limits(
    max_connections=100,
    max_keepalive_connections=20,
    keepalive_expiry=10.0,
)

T = TypeVar("T")


class ResponseKind(Generic[T]):
    """Turns a successful (2xx) response into the value returned to the caller."""

    def decode(self, response: httpx.Response) -> T:
        raise NotImplementedError


class BinaryResponse(ResponseKind[bytes]):
    """Raw response bytes, unmodified (images, PDFs)."""

    def decode(self, response: httpx.Response) -> bytes:
        return response.content

    def __repr__(self) -> str:
        return "BinaryResponse()"


class EmptyResponse(ResponseKind[None]):
    """Success carries no payload; any body is ignored."""

    def decode(self, response: httpx.Response) -> None:
        return None

    def __repr__(self) -> str:
        return "EmptyResponse()"


@lru_cache(maxsize=128)
def _type_adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def _adapter_for(shape: Any) -> TypeAdapter[Any]:
    try:
        return _type_adapter(shape)
    except TypeError:
        # unhashable shape, e.g. Annotated with list or dict metadata
        return TypeAdapter(shape)


class JsonResponse(ResponseKind[T]):
    """A UTF-8 JSON body validated into ``shape``.

    ``shape`` is anything pydantic can validate: a model class or a generic
    such as ``list[JobResponse]``.
    """

    def __init__(self, shape: type[T] | Any) -> None:
        self.shape = shape

    def decode(self, response: httpx.Response) -> T:
        try:
            return _adapter_for(self.shape).validate_json(response.content)
        except ValidationError as e:
            first = e.errors()[0] if e.error_count() else {}
            location = ".".join(str(part) for part in first.get("loc", ())) or "body"
            raise AllscreenshotsResponseError(
                f"Failed to decode {self._shape_name()} response: {location}: "
                f"{first.get('msg', 'invalid')}",
                response_text=response.text,
            ) from e

    def _shape_name(self) -> str:
        name = getattr(self.shape, "__name__", None)
        return name if isinstance(self.shape, type) and name else str(self.shape)

    def __repr__(self) -> str:
        return f"JsonResponse({self._shape_name()})"


BINARY = BinaryResponse()
EMPTY = EmptyResponse()


def serialize_body(body: BaseModel | Mapping[str, Any]) -> bytes:
    """Serialize a request body the way the API expects it.

    Models are dumped with their camelCase aliases and ``None`` fields omitted.
    """
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    return json.dumps(dict(body), separators=(",", ":")).encode("utf-8")


@dataclass(frozen=True)
class Operation(Generic[T]):
    """One logical API call.

    The body is serialized once, when the operation is created, and the same
    bytes are sent on every attempt.
    """

    method: str
    path: str
    response: ResponseKind[T]
    body: bytes | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.method not in SUPPORTED_METHODS:
            raise AllscreenshotsConfigError(f"Unsupported HTTP method: {self.method}")
        if not self.path.startswith("/"):
            raise AllscreenshotsConfigError(f"Operation path must start with '/': {self.path}")

    @classmethod
    def get(cls, path: str, response: ResponseKind[T]) -> Operation[T]:
        return cls("GET", path, response)

    @classmethod
    def post(
        cls,
        path: str,
        response: ResponseKind[T],
        body: BaseModel | Mapping[str, Any] | None = None,
    ) -> Operation[T]:
        return cls("POST", path, response, None if body is None else serialize_body(body))

    @classmethod
    def put(
        cls,
        path: str,
        response: ResponseKind[T],
        body: BaseModel | Mapping[str, Any],
    ) -> Operation[T]:
        return cls("PUT", path, response, serialize_body(body))

    @classmethod
    def delete(cls, path: str, response: ResponseKind[Any] = EMPTY) -> Operation[Any]:
        return cls("DELETE", path, response)


@dataclass(frozen=True)
class ClientCredentials:
    """Base URL and API key used for every request of one client."""

    api_key: str = field(repr=False)
    base_url: str

    def __post_init__(self) -> None:
        if not self.api_key:
            raise AllscreenshotsConfigError("API key cannot be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise AllscreenshotsConfigError(
                f"Base URL must start with http:// or https://: {self.base_url}"
            )
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"


def create_default_async_client(timeout: float = _DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create a default httpx AsyncClient with standard configuration."""
    return httpx.AsyncClient(
        timeout=timeout,
        limits=_DEFAULT_LIMITS,
        headers={"User-Agent": USER_AGENT},
    )


async def _handle_retry(
    attempt: int, max_retries: int, delay: float, url: str, error_msg: str
) -> None:
    """Log the upcoming retry and wait out its backoff delay."""
    logger.debug(
        "%s from %s, retrying in %.2f seconds (attempt %d/%d)",
        error_msg,
        url,
        delay,
        attempt,
        max_retries,
    )
    await asyncio.sleep(delay)


class RequestDispatcher:
    """Executes operations against the API under a retry policy.

    The dispatcher holds only immutable configuration and a shared connection
    pool, so any number of operations may be dispatched concurrently.
    """

    def __init__(
        self,
        credentials: ClientCredentials,
        http_client: httpx.AsyncClient,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.credentials = credentials
        self.http_client = http_client
        self.retry_policy = retry_policy or RetryPolicy()

    async def dispatch(self, operation: Operation[T]) -> T:
        """
        Run ``operation`` until it succeeds, fails permanently, or runs out of attempts.

        Args:
            operation: The call to perform

        Returns:
            The decoded payload: bytes, a validated model, or None

        Raises:
            AllscreenshotsApiError: The service rejected the request permanently.
            AllscreenshotsTransportError: A non-retryable transport failure.
            AllscreenshotsResponseError: A 2xx response could not be decoded.
            AllscreenshotsRetriesExhaustedError: Every attempt failed transiently.
        """
        policy = self.retry_policy
        url = self.credentials.url_for(operation.path)
        last_error: AllscreenshotsError | None = None

        for attempt in range(policy.max_attempts):
            if last_error is not None:
                await _handle_retry(
                    attempt,
                    policy.max_retries,
                    policy.delay_for_attempt(attempt),
                    url,
                    str(last_error),
                )
            try:
                return await self._attempt(operation, url)
            except AllscreenshotsError as e:
                if not e.retryable:
                    raise
                last_error = e

        if last_error is None:
            raise AllscreenshotsConfigError("Retry policy allows no attempts")
        logger.warning(
            "%s %s failed after %d attempts: %s",
            operation.method,
            url,
            policy.max_attempts,
            last_error,
        )
        raise AllscreenshotsRetriesExhaustedError(last_error, policy.max_attempts) from last_error

    async def _attempt(self, operation: Operation[T], url: str) -> T:
        """Send the request once and decode or classify the outcome."""
        try:
            response = await self.http_client.request(
                method=operation.method,
                url=url,
                content=operation.body,
                headers=self._headers(operation),
            )
        except Exception as e:
            raise classify_transport_error(e) from e

        if not response.is_success:
            raise classify_response(response)
        return operation.response.decode(response)

    def _headers(self, operation: Operation[Any]) -> dict[str, str]:
        headers = {API_KEY_HEADER: self.credentials.api_key}
        if operation.body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers
