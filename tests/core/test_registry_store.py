"""Tests for registry fetching, caching and lookup."""

import json
from pathlib import Path

import pytest

from tests.fakes.http import FakeHttpClient
from tests.helpers import MAPPING_URL, registry_bytes
from wpm.core.errors import (
    RegistryCorruptError,
    RegistryDecodeError,
    RegistryFetchError,
    RegistryMissingError,
)
from wpm.core.http import HttpResponse, TransportError
from wpm.core.registry_store import Registry, RegistryStore


def test_get_package_nested_shape() -> None:
    registry = Registry(
        data={"packages": {"mathlib": {"url": "https://x/m.zip", "version": "1.0"}}}
    )

    record = registry.get_package("mathlib")

    assert record is not None
    assert record.url == "https://x/m.zip"
    assert record.version == "1.0"


def test_get_package_flat_shape() -> None:
    registry = Registry(data={"mathlib": {"url": "https://x/m.zip"}})

    record = registry.get_package("mathlib")

    assert record is not None
    assert record.url == "https://x/m.zip"
    assert record.version is None


def test_get_package_prefers_nested_over_flat() -> None:
    registry = Registry(
        data={
            "packages": {"gfx": {"url": "https://nested/gfx.zip"}},
            "gfx": {"url": "https://flat/gfx.zip"},
        }
    )

    record = registry.get_package("gfx")

    assert record is not None
    assert record.url == "https://nested/gfx.zip"


def test_get_package_missing_returns_none() -> None:
    registry = Registry(data={"packages": {"mathlib": {"url": "u"}}})

    assert registry.get_package("nope") is None
    # "packages" itself is a section, not a package
    assert registry.get_package("packages") is None


def test_get_package_ignores_non_object_entries() -> None:
    registry = Registry(data={"broken": "https://x/broken.zip", "typed": {"url": 42}})

    assert registry.get_package("broken") is None
    assert registry.get_package("typed") is None


def test_package_names_merges_both_shapes() -> None:
    registry = Registry(
        data={"packages": {"b": {"url": "u"}, "a": {"url": "u"}}, "c": {"url": "u"}}
    )

    assert registry.package_names() == ["a", "b", "c"]


def test_refresh_writes_cache_and_returns_registry(tmp_path: Path) -> None:
    raw = registry_bytes({"mathlib": {"url": "https://x/m.zip"}})
    http = FakeHttpClient(routes={MAPPING_URL: raw})
    cache = tmp_path / "ws_packages" / "mapping.json"
    store = RegistryStore(http, cache)

    registry = store.refresh(MAPPING_URL)

    assert registry.get_package("mathlib") is not None
    assert cache.read_bytes() == raw
    assert http.requested_urls == [MAPPING_URL]


def test_refresh_bad_status_raises_fetch_error(tmp_path: Path) -> None:
    http = FakeHttpClient(routes={MAPPING_URL: HttpResponse(status_code=500, content=b"")})
    cache = tmp_path / "mapping.json"
    store = RegistryStore(http, cache)

    with pytest.raises(RegistryFetchError, match="HTTP 500"):
        store.refresh(MAPPING_URL)
    assert not cache.exists()


def test_refresh_transport_error_raises_fetch_error(tmp_path: Path) -> None:
    http = FakeHttpClient(routes={MAPPING_URL: TransportError("connection refused")})
    store = RegistryStore(http, tmp_path / "mapping.json")

    with pytest.raises(RegistryFetchError, match="connection refused"):
        store.refresh(MAPPING_URL)


def test_refresh_invalid_json_raises_decode_error(tmp_path: Path) -> None:
    http = FakeHttpClient(routes={MAPPING_URL: b"<html>oops</html>"})
    cache = tmp_path / "mapping.json"
    cache.write_text('{"old": {"url": "u"}}')
    store = RegistryStore(http, cache)

    with pytest.raises(RegistryDecodeError):
        store.refresh(MAPPING_URL)
    # Previous cache survives a bad fetch
    assert json.loads(cache.read_text()) == {"old": {"url": "u"}}


def test_refresh_json_array_raises_decode_error(tmp_path: Path) -> None:
    http = FakeHttpClient(routes={MAPPING_URL: b"[1, 2, 3]"})
    store = RegistryStore(http, tmp_path / "mapping.json")

    with pytest.raises(RegistryDecodeError):
        store.refresh(MAPPING_URL)


def test_load_cached_missing_raises(tmp_path: Path) -> None:
    http = FakeHttpClient()
    store = RegistryStore(http, tmp_path / "mapping.json")

    with pytest.raises(RegistryMissingError):
        store.load_cached()
    assert http.requested_urls == []


def test_load_cached_corrupt_raises(tmp_path: Path) -> None:
    cache = tmp_path / "mapping.json"
    cache.write_text("{not json")
    store = RegistryStore(FakeHttpClient(), cache)

    with pytest.raises(RegistryCorruptError):
        store.load_cached()


def test_ensure_uses_cache_without_network(tmp_path: Path) -> None:
    cache = tmp_path / "mapping.json"
    cache.write_bytes(registry_bytes({"gfx": {"url": "u"}}))
    http = FakeHttpClient()
    store = RegistryStore(http, cache)

    def fail_resolver() -> str:
        raise AssertionError("URL should not be resolved when a cache exists")

    registry = store.ensure(fail_resolver)

    assert registry.get_package("gfx") is not None
    assert http.requested_urls == []


def test_ensure_fetches_when_no_cache(tmp_path: Path) -> None:
    http = FakeHttpClient(routes={MAPPING_URL: registry_bytes({"gfx": {"url": "u"}})})
    cache = tmp_path / "ws_packages" / "mapping.json"
    store = RegistryStore(http, cache)

    registry = store.ensure(lambda: MAPPING_URL)

    assert registry.get_package("gfx") is not None
    assert cache.exists()
