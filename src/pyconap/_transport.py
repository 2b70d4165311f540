"""HTTP transport for the CONAP backend."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp

from pyconap._constants import USER_AGENT
from pyconap._redact import redact_for_log
from pyconap.config import ConapConfig
from pyconap.exceptions import ConapAuthenticationError, ConapTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None,
        payload: Any = None,
    ) -> dict[str, Any]:
        ...


class HttpTransport:
    """JSON-over-HTTP transport with bearer authentication."""

    def __init__(self, config: ConapConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None,
        payload: Any = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Raises :class:`ConapAuthenticationError` on HTTP 401 and
        :class:`ConapTransportError` for network failures, timeouts
        (reported as status 408), other non-2xx answers and bodies that
        are not a JSON object.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        if token:
            headers["authorization"] = f"Bearer {token}"

        url = f"{self._config.base_url}{endpoint}"
        body = None if payload is None else json.dumps(payload, separators=(",", ":"), default=str)

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled and payload is not None:
            _logger.debug("%s %s payload=%s", method, endpoint, redact_for_log(payload))

        try:
            async with self._http.request(
                method, url, data=body, headers=headers, timeout=self._timeout
            ) as resp:
                text = await resp.text()
                status = resp.status
        except TimeoutError as exc:
            raise ConapTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                status_code=408,
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise ConapTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        if status == 401:
            raise ConapAuthenticationError(
                "Sesión expirada o token inválido",
                endpoint=endpoint,
                status_code=status,
            )

        try:
            result = json.loads(text) if text else {}
        except json.JSONDecodeError as exc:
            raise ConapTransportError(
                f"Invalid JSON from {endpoint} (HTTP {status}): {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if not 200 <= status < 300:
            detail = result.get("error") if isinstance(result, dict) else None
            raise ConapTransportError(
                f"HTTP {status} from {endpoint}: {detail or text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )

        if not isinstance(result, dict):
            raise ConapTransportError(
                f"Expected a JSON object from {endpoint}, got {type(result).__name__}",
                status_code=status,
                endpoint=endpoint,
            )

        if self._config.api_trace_enabled:
            _logger.debug("%s %s response=%s", method, endpoint, redact_for_log(result))
        return result
