from __future__ import annotations

import pytest

from pyconap._cache import TtlCache
from pyconap.config import ConapConfig
from pyconap.exceptions import ConapConfigError


def test_defaults() -> None:
    config = ConapConfig()
    assert config.base_url == "http://localhost:3000/api"
    assert config.request_timeout == 30.0
    assert config.cache_ttl == 30.0
    assert config.min_password_length == 6


def test_trailing_slash_is_stripped() -> None:
    assert ConapConfig(base_url="https://api.conap.gob.gt/v1/").base_url == "https://api.conap.gob.gt/v1"


def test_from_env_reads_variables_and_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONAP_API_BASE_URL", "https://api.conap.gob.gt")
    monkeypatch.setenv("CONAP_CACHE_TTL", "5")
    monkeypatch.setenv("CONAP_CACHE_ENABLED", "no")
    monkeypatch.setenv("CONAP_API_TRACE_ENABLED", "1")

    config = ConapConfig.from_env(cache_ttl=10.0)

    assert config.base_url == "https://api.conap.gob.gt"
    assert config.cache_ttl == 10.0
    assert config.cache_enabled is False
    assert config.api_trace_enabled is True


def test_from_env_rejects_non_numeric(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONAP_REQUEST_TIMEOUT", "soon")
    with pytest.raises(ConapConfigError, match="CONAP_REQUEST_TIMEOUT"):
        ConapConfig.from_env()


@pytest.mark.parametrize("kwargs", [{"base_url": ""}, {"request_timeout": 0}, {"cache_ttl": -1}])
def test_invalid_values_raise(kwargs: dict[str, object]) -> None:
    with pytest.raises(ConapConfigError):
        ConapConfig(**kwargs)  # type: ignore[arg-type]


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_ttl_cache_expires_on_read() -> None:
    clock = _Clock()
    cache: TtlCache[list[int]] = TtlCache(30.0, clock=clock)
    assert cache.get() is None

    cache.set([1, 2])
    clock.now += 29
    assert cache.get() == [1, 2]

    clock.now += 1
    assert cache.is_valid() is False
    assert cache.get() is None


def test_ttl_cache_returns_copies_and_clears() -> None:
    cache: TtlCache[list[int]] = TtlCache(30.0)
    cache.set([1])
    cached = cache.get()
    assert cached is not None
    cached.append(2)

    assert cache.get() == [1]
    cache.clear()
    assert cache.get() is None


def test_ttl_zero_disables_cache() -> None:
    cache: TtlCache[list[int]] = TtlCache(0)
    cache.set([1])
    assert cache.get() is None
