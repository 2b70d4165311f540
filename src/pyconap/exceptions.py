"""Custom exception hierarchy for pyconap."""

from __future__ import annotations

from collections.abc import Iterable


class ConapError(Exception):
    """Base exception for all pyconap errors."""


class ConapConfigError(ConapError):
    """Invalid or missing configuration."""


class ConapValidationError(ConapError):
    """Form data rejected before any mutation took place.

    ``missing_fields`` lists the required fields that were empty, when
    the failure was caused by missing input.
    """

    def __init__(self, message: str, *, missing_fields: Iterable[str] = ()) -> None:
        self.missing_fields = tuple(missing_fields)
        super().__init__(message)


class InvalidTransitionError(ConapError, ValueError):
    """A status change that the entity's transition table does not allow."""

    def __init__(self, entity: str, current: str, requested: str) -> None:
        self.entity = entity
        self.current = str(current)
        self.requested = str(requested)
        super().__init__(f"{entity}: transition {self.current!r} -> {self.requested!r} is not allowed")


class ConapTransportError(ConapError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ConapApiError(ConapError):
    """Backend answered with ``success: false``.

    The message is the backend's ``error`` string so callers can show it
    to the user unchanged.
    """

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
        status_code: int | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(message)


class ConapAuthenticationError(ConapApiError):
    """Bearer token missing, invalid or expired (HTTP 401)."""
