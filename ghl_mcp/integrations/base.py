"""
Base classes for ghl-mcp integrations.

This module defines the foundational abstractions shared by integration
clients: configuration, the error taxonomy, the result envelope handed to
tool modules, and an async HTTP client with central error translation.

Design Principles:
1. Async-first: All I/O operations are async
2. One round trip per call: no retries, no backoff, no circuit breaking
3. Observable: Every request and response is logged
4. Central error translation: HTTP and transport failures are converted
   once, in the request path, into IntegrationError subtypes
5. Explicit failure policy: each call declares whether it raises or
   returns a failed ApiResult

Error Translation:
    - Non-2xx: status from the response, message from the body's
      ``message`` field (lists joined with ", ")
    - Transport failures (timeout, connect, network): no HTTP status,
      message from the transport error text
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import httpx

logger = logging.getLogger(__name__)


# =============================================================================
# Exceptions
# =============================================================================


class IntegrationError(Exception):
    """
    Base exception for integration errors.

    The message is fully formatted by the client that raised it, so
    ``str(error)`` is what callers and tool modules propagate.
    """

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        status_code: int | None = None,
        response_body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.integration = integration
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        return self.message


class AuthenticationError(IntegrationError):
    """Raised when authentication fails (401/403)."""


class RateLimitError(IntegrationError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, integration, **kwargs)
        self.retry_after = retry_after


class NotFoundError(IntegrationError):
    """Raised when a resource is not found (404)."""


class ValidationError(IntegrationError):
    """Raised when request validation fails (400/422)."""

    def __init__(
        self,
        message: str,
        integration: str,
        *,
        validation_errors: list[Any] | None = None,
        **kwargs,
    ):
        super().__init__(message, integration, **kwargs)
        self.validation_errors = validation_errors or []


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class IntegrationConfig:
    """Configuration for an integration client."""

    # Authentication
    access_token: str = ""

    # Connection (one timeout for every request, no per-call override)
    base_url: str = ""
    timeout: float = 30.0


# =============================================================================
# Result Types
# =============================================================================

T = TypeVar("T")


class ErrorPolicy(str, Enum):
    """
    What a client call or tool does when the remote call fails.

    THROW_ON_ERROR: raise the translated IntegrationError
    RETURN_RESULT: return a failed ApiResult (or soft tool result)
    """

    THROW_ON_ERROR = "throw_on_error"
    RETURN_RESULT = "return_result"


@dataclass(frozen=True, slots=True)
class ApiError:
    """Failure details carried by a failed ApiResult."""

    message: str
    status_code: int | None = None
    details: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "statusCode": self.status_code,
            "details": self.details,
        }


@dataclass(frozen=True, slots=True)
class ApiResult(Generic[T]):
    """
    Standard result wrapper for client calls.

    Either ``success=True`` with ``data`` or ``success=False`` with
    ``error``. Produced by every client method and consumed immediately
    by the calling tool.
    """

    success: bool
    data: T | None = None
    error: ApiError | None = None

    @classmethod
    def ok(cls, data: T) -> ApiResult[T]:
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ) -> ApiResult[T]:
        """Create a failed result."""
        return cls(
            success=False,
            error=ApiError(message=message, status_code=status_code, details=details),
        )

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape ``{success, data}`` / ``{success, error}``."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error.to_dict() if self.error else None}


# =============================================================================
# Helpers
# =============================================================================


def compact(mapping: dict[str, Any] | None) -> dict[str, Any]:
    """
    Drop unset optional fields from a payload or query mapping.

    ``None``, empty strings and empty collections are removed. ``0`` and
    ``False`` are kept since pagination offsets and boolean flags are
    meaningful values for the remote API.
    """
    if not mapping:
        return {}
    return {
        key: value
        for key, value in mapping.items()
        if value is not None and not (isinstance(value, (str, list, tuple, dict)) and not value)
    }


def extract_error_message(body: Any) -> str | None:
    """Pull the human-readable message out of an error response body."""
    if not isinstance(body, dict):
        return None
    message = body.get("message")
    if isinstance(message, list):
        return ", ".join(str(part) for part in message)
    if message:
        return str(message)
    return None


def _message_list(body: Any) -> list[Any] | None:
    if isinstance(body, dict) and isinstance(body.get("message"), list):
        return body["message"]
    return None


# =============================================================================
# Base Client
# =============================================================================


class IntegrationClient(ABC):
    """
    Abstract base class for integration clients.

    Provides common functionality:
    - HTTP client management
    - Authentication header injection
    - Error translation (once, centrally)
    - Request/response logging
    - Envelope unwrapping and per-call error policy via _call()

    Subclasses must implement:
    - name: Integration identifier
    - _get_auth_headers(): Return authentication headers
    """

    def __init__(self, config: IntegrationConfig):
        """
        Initialize the integration client.

        Args:
            config: Integration configuration
        """
        self.config = config
        self._client: httpx.AsyncClient | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this integration."""
        ...

    @abstractmethod
    def _get_auth_headers(self) -> dict[str, str]:
        """Return authentication headers for requests."""
        ...

    def _get_default_headers(self) -> dict[str, str]:
        """Headers sent with every request, on top of authentication."""
        return {"Accept": "application/json"}

    def _format_error(self, status_code: int, message: str) -> str:
        """Render the message carried by translated errors."""
        return f"[{self.name}] {message} (status={status_code})"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers={
                    **self._get_default_headers(),
                    **self._get_auth_headers(),
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
        files: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make a single HTTP request.

        JSON requests carry ``Content-Type: application/json``; multipart
        requests (``files``) let httpx set the boundary content type.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: URL path (appended to base_url)
            params: Query parameters (lists become repeated params)
            json: JSON body
            files: Multipart fields
            headers: Additional headers, merged over the defaults

        Returns:
            httpx.Response with a 2xx status

        Raises:
            IntegrationError: On transport failure or non-2xx status
        """
        client = await self._get_client()

        request_headers = {} if files is not None else {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        logger.info(f"[{self.name}] {method} {path}")

        try:
            response = await client.request(
                method=method,
                url=path,
                params=params,
                json=json,
                files=files,
                headers=request_headers,
            )
        except httpx.TransportError as e:
            logger.error(f"[{self.name}] Request error: {method} {path}: {e!r}")
            raise IntegrationError(
                self._format_error(500, str(e) or type(e).__name__),
                self.name,
            ) from e

        logger.info(f"[{self.name}] Response {response.status_code}: {path}")

        self._check_response(response)
        return response

    def _check_response(self, response: httpx.Response) -> None:
        """
        Check response for errors and raise appropriate exceptions.

        Args:
            response: HTTP response to check

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            NotFoundError: For 404
            ValidationError: For 400/422
            IntegrationError: For other errors
        """
        if response.is_success:
            return

        status = response.status_code
        try:
            body: Any = response.json()
        except ValueError:
            body = response.text

        message = extract_error_message(body) or f"Request failed with status code {status}"
        formatted = self._format_error(status, message)

        logger.warning(f"[{self.name}] Response error: status={status} message={message!r}")

        if status in (401, 403):
            raise AuthenticationError(
                formatted, self.name, status_code=status, response_body=body
            )

        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                formatted,
                self.name,
                status_code=status,
                response_body=body,
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        if status == 404:
            raise NotFoundError(formatted, self.name, status_code=status, response_body=body)

        if status in (400, 422):
            raise ValidationError(
                formatted,
                self.name,
                status_code=status,
                response_body=body,
                validation_errors=_message_list(body),
            )

        raise IntegrationError(formatted, self.name, status_code=status, response_body=body)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a successful response body (JSON, else text, else empty dict)."""
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text

    async def _call(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
        files: Any = None,
        headers: dict[str, str] | None = None,
        unwrap: str | None = None,
        policy: ErrorPolicy = ErrorPolicy.THROW_ON_ERROR,
    ) -> ApiResult[Any]:
        """
        Perform one request and wrap the decoded body in an ApiResult.

        Args:
            method: HTTP method
            path: URL path
            params: Query parameters
            json: JSON body
            files: Multipart fields
            headers: Additional headers
            unwrap: Envelope field to extract from the body (e.g. "contact")
            policy: THROW_ON_ERROR raises, RETURN_RESULT returns ApiResult.fail

        Returns:
            ApiResult with the (unwrapped) body

        Raises:
            IntegrationError: When policy is THROW_ON_ERROR and the call fails
        """
        try:
            response = await self._request(
                method, path, params=params, json=json, files=files, headers=headers
            )
        except IntegrationError as e:
            if policy is ErrorPolicy.RETURN_RESULT:
                return ApiResult.fail(str(e), e.status_code or 500, e.response_body)
            raise

        data = self._decode(response)
        if unwrap is not None:
            data = data.get(unwrap) if isinstance(data, dict) else None
        return ApiResult.ok(data)

    async def health_check(self) -> bool:
        """
        Check if the integration is healthy/reachable.

        Returns:
            True if healthy, False otherwise
        """
        return True

    async def __aenter__(self) -> IntegrationClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
