"""Registry fetch, cache and lookup.

The registry maps package names to download metadata. Two document shapes are
accepted:

    {"packages": {"mathlib": {"url": "...", "version": "1.0.0"}}}   # nested
    {"mathlib": {"url": "...", "version": "1.0.0"}}                 # flat

The raw bytes of the last successful fetch are cached under
ws_packages/mapping.json so later commands can run offline.
"""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wpm.core.errors import (
    RegistryCorruptError,
    RegistryDecodeError,
    RegistryFetchError,
    RegistryMissingError,
)
from wpm.core.http import HttpClient, TransportError
from wpm.core.models import RegistryRecord, parse_model

logger = logging.getLogger(__name__)

NESTED_KEY = "packages"


@dataclass(frozen=True)
class Registry:
    """Immutable view over a parsed registry document."""

    data: Mapping[str, Any]

    def _nested(self) -> Mapping[str, Any]:
        packages = self.data.get(NESTED_KEY)
        if isinstance(packages, dict):
            return packages
        return {}

    def _flat(self) -> Mapping[str, Any]:
        return {name: entry for name, entry in self.data.items() if name != NESTED_KEY}

    def get_package(self, name: str) -> RegistryRecord | None:
        """Look up name in the nested shape, then the flat shape."""
        for section in (self._nested(), self._flat()):
            entry = section.get(name)
            if isinstance(entry, dict):
                record = parse_model(RegistryRecord, entry)
                if record is not None:
                    return record
        return None

    def package_names(self) -> list[str]:
        """All names that resolve through get_package(), sorted."""
        names: set[str] = set()
        for section in (self._nested(), self._flat()):
            for name, entry in section.items():
                if isinstance(entry, dict) and self.get_package(name) is not None:
                    names.add(name)
        return sorted(names)


def parse_registry(raw: bytes) -> Registry | None:
    """Parse raw registry bytes; None if the body is not a JSON object."""
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return Registry(data=data)


class RegistryStore:
    """Fetches the registry over HTTP and manages its local cache."""

    def __init__(self, http: HttpClient, cache_path: Path) -> None:
        self._http = http
        self._cache_path = cache_path

    @property
    def cache_path(self) -> Path:
        return self._cache_path

    def refresh(self, mapping_url: str) -> Registry:
        """Fetch the registry and overwrite the cache.

        Raises:
            RegistryFetchError: On transport failure or a non-success status
            RegistryDecodeError: If the body is not a JSON object
        """
        logger.debug("Refreshing registry from %s", mapping_url)
        try:
            response = self._http.get(mapping_url)
        except TransportError as e:
            raise RegistryFetchError(f"Failed to fetch registry from {mapping_url}: {e}") from e

        if not response.ok:
            raise RegistryFetchError(
                f"Failed to fetch registry from {mapping_url}: HTTP {response.status_code}"
            )

        registry = parse_registry(response.content)
        if registry is None:
            raise RegistryDecodeError(f"Registry at {mapping_url} is not a valid JSON object")

        self._cache_path.parent.mkdir(parents=True, exist_ok=True)
        self._cache_path.write_bytes(response.content)
        logger.debug("Cached registry at %s", self._cache_path)
        return registry

    def load_cached(self) -> Registry:
        """Read the cached registry without touching the network.

        Raises:
            RegistryMissingError: If no cache exists
            RegistryCorruptError: If the cache cannot be parsed
        """
        if not self._cache_path.exists():
            raise RegistryMissingError(
                f"No cached registry at {self._cache_path}. Run 'wpm refresh' first"
            )

        registry = parse_registry(self._cache_path.read_bytes())
        if registry is None:
            raise RegistryCorruptError(
                f"Cached registry at {self._cache_path} is corrupt. Run 'wpm refresh'"
            )
        return registry

    def ensure(self, mapping_url: Callable[[], str]) -> Registry:
        """Load the cache, refreshing first if there is none yet.

        Args:
            mapping_url: Resolves the registry URL; only called when a fetch
                is needed, so configuration errors surface only then.
        """
        if self._cache_path.exists():
            return self.load_cached()
        logger.debug("No registry cache, fetching")
        return self.refresh(mapping_url())
