"""Data models for registry entries, installation records and package files.

JSON documents that come from outside (registry, package.json, assignment.json,
wpackage.json) are validated with pydantic. The installation record that wpm
owns and persists is a plain frozen dataclass.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

VERSION_SENTINEL = "unknown"


class RegistryRecord(BaseModel):
    """One package entry in the registry.

    Uses extra="allow" so registries can carry fields wpm does not know about.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    url: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | None = None
    license: str | None = None


class PackageDescriptor(BaseModel):
    """A package's own package.json, read after extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str | None = None
    description: str | None = None
    author: str | None = None
    license: str | None = None
    assignments: list[str] | None = None


class ModuleDescriptor(BaseModel):
    """assignment.json: logical module name to package-relative source path."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    modules: dict[str, str] = Field(default_factory=dict)


class ProjectManifest(BaseModel):
    """wpackage.json: the packages a project depends on."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    packages: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class InstalledPackage:
    """Represents an installed package in ws_packages.json."""

    name: str
    path: str
    url: str
    version: str = VERSION_SENTINEL
    description: str = ""
    author: str = ""
    license: str = ""
    installed_at: str = ""
    assignments: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(name: str, data: dict[str, Any]) -> "InstalledPackage":
        """Build a record from its persisted form.

        Missing optional fields fall back to their defaults.

        Raises:
            ValueError: If a field has the wrong type or path is missing
        """
        path = data.get("path")
        if not isinstance(path, str) or not path:
            raise ValueError(f"record for '{name}' has no path")

        assignments = data.get("assignments", [])
        if not isinstance(assignments, list) or not all(isinstance(a, str) for a in assignments):
            raise ValueError(f"record for '{name}' has invalid assignments")

        return InstalledPackage(
            name=name,
            path=path,
            url=_str_field(data, "url", ""),
            version=_str_field(data, "version", VERSION_SENTINEL) or VERSION_SENTINEL,
            description=_str_field(data, "description", ""),
            author=_str_field(data, "author", ""),
            license=_str_field(data, "license", ""),
            installed_at=_str_field(data, "installed_at", ""),
            assignments=list(assignments),
        )


def _str_field(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


def parse_model[M: BaseModel](model: type[M], data: object) -> M | None:
    """Validate data against model, returning None instead of raising."""
    try:
        return model.model_validate(data)
    except ValidationError:
        return None
