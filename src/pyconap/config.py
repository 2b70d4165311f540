"""Client configuration for pyconap."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyconap._constants import DEFAULT_BASE_URL, DEFAULT_CACHE_TTL, DEFAULT_REQUEST_TIMEOUT, MIN_PASSWORD_LENGTH
from pyconap.exceptions import ConapConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[float] | type[int]) -> float | int:
    try:
        return cast(value)
    except ValueError as exc:
        raise ConapConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ConapConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Base URL of the remote function backend, without trailing slash.
    request_timeout : float
        Total timeout in seconds for a single backend request.
    cache_ttl : float
        Seconds a fetched activity list stays valid in the local cache.
    cache_enabled : bool
        Disable to always hit the backend when fetching activities.
    min_password_length : int
        Minimum accepted password length for new accounts and changes.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    cache_ttl: float = DEFAULT_CACHE_TTL
    cache_enabled: bool = True
    min_password_length: int = MIN_PASSWORD_LENGTH
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ConapConfigError("base_url must be non-empty")
        if self.request_timeout <= 0:
            raise ConapConfigError("request_timeout must be positive")
        if self.cache_ttl < 0:
            raise ConapConfigError("cache_ttl must not be negative")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> ConapConfig:
        """Create configuration from ``CONAP_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("CONAP_API_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[float] | type[int]]] = {
            "CONAP_REQUEST_TIMEOUT": ("request_timeout", float),
            "CONAP_CACHE_TTL": ("cache_ttl", float),
            "CONAP_MIN_PASSWORD_LENGTH": ("min_password_length", int),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        if "cache_enabled" not in overrides:
            config_kwargs["cache_enabled"] = _env_bool(env.get("CONAP_CACHE_ENABLED"), True)

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(env.get("CONAP_API_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
