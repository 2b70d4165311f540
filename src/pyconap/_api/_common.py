"""Shared helpers for CONAP backend endpoint modules.

This module centralizes the most repeated patterns:
- sending an authenticated request through the transport
- unwrapping the ``{success, data|error}`` envelope
- serializing form models to request bodies

It is internal to pyconap and may change at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import ValidationError

from pyconap._transport import Transport
from pyconap.exceptions import ConapApiError, ConapAuthenticationError
from pyconap.models._base import ConapBaseModel
from pyconap.session import Session

_logger = logging.getLogger(__name__)

M = TypeVar("M")


def unwrap_envelope(response: dict[str, Any], *, endpoint: str, key: str | None = None) -> Any:
    """Return the payload of a successful envelope.

    The payload is read from *key* when the backend uses a named field
    (``{"success": true, "actividades": [...]}``) and from ``data``
    otherwise. A ``success: false`` envelope raises :class:`ConapApiError`
    carrying the backend's ``error`` string unchanged.
    """
    if not response.get("success", False):
        error = response.get("error") or response.get("message") or f"{endpoint} failed"
        raise ConapApiError(str(error), endpoint=endpoint)
    if key is not None and key in response:
        return response[key]
    return response.get("data")


def form_body(form: ConapBaseModel) -> dict[str, Any]:
    """camelCase JSON body for *form*, without unset optional values."""
    return form.model_dump(mode="json", by_alias=True, exclude_none=True)


async def send_checked(
    *,
    method: str,
    endpoint: str,
    session: Session,
    transport: Transport,
    payload: Any = None,
) -> dict[str, Any]:
    """Send an authenticated request and return the full successful envelope."""
    if session.is_expired:
        raise ConapAuthenticationError("La sesión ha expirado", endpoint=endpoint)
    response = await transport.request(method, endpoint, token=session.access_token, payload=payload)
    unwrap_envelope(response, endpoint=endpoint)
    return response


async def request_json(
    *,
    method: str,
    endpoint: str,
    session: Session,
    transport: Transport,
    payload: Any = None,
    key: str | None = None,
) -> Any:
    """Send an authenticated request and return the unwrapped payload."""
    response = await send_checked(
        method=method,
        endpoint=endpoint,
        session=session,
        transport=transport,
        payload=payload,
    )
    return unwrap_envelope(response, endpoint=endpoint, key=key)


def as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    _logger.debug("Expected a list payload, got %s", type(value).__name__)
    return []


def as_dict(value: Any, *, endpoint: str) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    raise ConapApiError(f"{endpoint} returned no record", endpoint=endpoint)


def parse_rows(rows: Any, parse: Callable[[dict[str, Any]], M], *, endpoint: str) -> list[M]:
    """Map a list payload with *parse*, skipping rows that do not validate.

    Invalid rows are logged at WARNING and dropped.
    """
    parsed: list[M] = []
    for row in as_list(rows):
        if not isinstance(row, dict):
            continue
        try:
            parsed.append(parse(row))
        except ValidationError as exc:
            _logger.warning(
                "Skipping record %s from %s: %d invalid field(s)",
                row.get("id", row.get("act_id")),
                endpoint,
                exc.error_count(),
            )
    return parsed


def parse_record(row: Any, parse: Callable[[dict[str, Any]], M], *, endpoint: str) -> M:
    """Map a single-record payload; a record that does not validate raises :class:`ConapApiError`."""
    try:
        return parse(as_dict(row, endpoint=endpoint))
    except ValidationError as exc:
        raise ConapApiError(f"{endpoint} returned an invalid record", endpoint=endpoint) from exc
