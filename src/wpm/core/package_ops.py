"""Install, update, uninstall, list, sync and search operations.

Package lifecycle:

    absent --install--> installed --update--> installed --uninstall--> absent

A metadata record is written only after the archive has been downloaded,
extracted and normalized. A failed install writes no record; for a reinstall
the previous record is left untouched.
"""

import logging
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from wpm.core.context import WpmContext
from wpm.core.errors import (
    InvalidPackageNameError,
    PackageMissingUrlError,
    PackageNotFoundError,
    PackageNotInstalledError,
    WpmError,
)
from wpm.core.http import ProgressCallback
from wpm.core.models import VERSION_SENTINEL, InstalledPackage
from wpm.core.package_files import load_package_descriptor, load_project_manifest
from wpm.core.registry_store import Registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallOutcome:
    """Result of install_package.

    Attributes:
        name: Requested package name
        success: True if the package directory and its record were written
        record: The record written on success
        error: Human-readable failure reason
        warnings: Non-fatal problems, e.g. a stale directory that could not be deleted
    """

    name: str
    success: bool
    record: InstalledPackage | None = None
    error: str | None = None
    warnings: list[str] = field(default_factory=list)


class UpdateStatus(Enum):
    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdateOutcome:
    name: str
    status: UpdateStatus
    previous_version: str
    install: InstallOutcome | None = None

    @property
    def success(self) -> bool:
        return self.status != UpdateStatus.FAILED


@dataclass(frozen=True)
class SyncEntry:
    name: str
    action: str  # "install" or "update"
    success: bool
    message: str


@dataclass(frozen=True)
class SyncSummary:
    entries: list[SyncEntry]

    @property
    def failed(self) -> list[SyncEntry]:
        return [e for e in self.entries if not e.success]

    @property
    def success(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class SearchHit:
    name: str
    version: str
    description: str
    url: str
    installed: bool


def validate_package_name(name: str) -> None:
    """Reject names that are not a single plain path component.

    Raises:
        InvalidPackageNameError: For empty names, separators, or dot names
    """
    if not name or name in (".", "..") or "/" in name or "\\" in name or "\x00" in name:
        raise InvalidPackageNameError(name)


def _remove_stale_directory(package_dir: Path, warnings: list[str]) -> None:
    """Best-effort removal before reinstall; failures become warnings."""
    if not package_dir.exists() and not package_dir.is_symlink():
        return
    logger.debug("Removing existing directory %s", package_dir)
    try:
        if package_dir.is_dir() and not package_dir.is_symlink():
            shutil.rmtree(package_dir)
        else:
            package_dir.unlink()
    except OSError as e:
        message = f"Could not remove existing directory {package_dir}: {e}"
        logger.warning(message)
        warnings.append(message)


def _install(
    ctx: WpmContext,
    name: str,
    registry: Registry,
    warnings: list[str],
    on_progress: ProgressCallback | None,
) -> InstalledPackage:
    validate_package_name(name)

    entry = registry.get_package(name)
    if entry is None:
        raise PackageNotFoundError(name)
    if not entry.url:
        raise PackageMissingUrlError(name)

    package_dir = ctx.config.package_dir(name)
    _remove_stale_directory(package_dir, warnings)
    package_dir.mkdir(parents=True, exist_ok=True)

    logger.debug("Installing %s from %s into %s", name, entry.url, package_dir)
    report = ctx.archive_installer.install_into(entry.url, package_dir, on_progress=on_progress)
    for skipped in report.skipped:
        warnings.append(f"Skipped unsafe archive entry: {skipped}")

    # Local package.json wins over registry fields
    descriptor = load_package_descriptor(package_dir)
    local_version = descriptor.version if descriptor is not None else None
    local_description = descriptor.description if descriptor is not None else None
    local_author = descriptor.author if descriptor is not None else None
    local_license = descriptor.license if descriptor is not None else None
    local_assignments = descriptor.assignments if descriptor is not None else None

    record = InstalledPackage(
        name=name,
        path=ctx.config.relative_package_path(name),
        url=entry.url,
        version=local_version or entry.version or VERSION_SENTINEL,
        description=local_description or entry.description or "",
        author=local_author or entry.author or "",
        license=local_license or entry.license or "",
        installed_at=ctx.clock.now().isoformat(),
        assignments=list(local_assignments) if local_assignments else [],
    )
    ctx.metadata_store.put(record)
    return record


def install_package(
    ctx: WpmContext,
    name: str,
    registry: Registry,
    on_progress: ProgressCallback | None = None,
) -> InstallOutcome:
    """Install (or reinstall) a package from the registry.

    Never raises for expected failures; they are reported through the outcome.
    On failure no record is written, and the package directory is left in
    whatever state the failing step produced so a retry can overwrite it.
    """
    warnings: list[str] = []
    try:
        record = _install(ctx, name, registry, warnings, on_progress)
    except (WpmError, OSError) as e:
        logger.debug("Install of %s failed: %s", name, e, exc_info=True)
        return InstallOutcome(name=name, success=False, error=str(e), warnings=warnings)

    logger.debug("Installed %s v%s", name, record.version)
    return InstallOutcome(name=name, success=True, record=record, warnings=warnings)


def update_package(
    ctx: WpmContext,
    name: str,
    registry: Registry,
    on_progress: ProgressCallback | None = None,
) -> UpdateOutcome:
    """Reinstall a package unless its version string matches the registry.

    Versions are compared by plain string equality: any difference, including
    a downgrade, triggers a full reinstall.

    Raises:
        PackageNotInstalledError: If there is no record for name
        PackageNotFoundError: If the registry has no entry for name
    """
    installed = ctx.metadata_store.get(name)
    if installed is None:
        raise PackageNotInstalledError(name)

    entry = registry.get_package(name)
    if entry is None:
        raise PackageNotFoundError(name)

    remote_version = entry.version or ""
    if installed.version and remote_version and installed.version == remote_version:
        logger.debug("%s is up to date (v%s)", name, installed.version)
        return UpdateOutcome(
            name=name, status=UpdateStatus.UP_TO_DATE, previous_version=installed.version
        )

    logger.debug("Updating %s: %s -> %s", name, installed.version, remote_version or "?")
    outcome = install_package(ctx, name, registry, on_progress=on_progress)
    return UpdateOutcome(
        name=name,
        status=UpdateStatus.UPDATED if outcome.success else UpdateStatus.FAILED,
        previous_version=installed.version,
        install=outcome,
    )


def uninstall_package(ctx: WpmContext, name: str) -> InstalledPackage:
    """Delete a package directory and its record.

    A missing directory is not an error; the record is still removed.

    Returns:
        The record that was removed

    Raises:
        PackageNotInstalledError: If there is no record (the metadata file is
            not touched)
    """
    store = ctx.metadata_store
    record = store.get(name)
    if record is None:
        raise PackageNotInstalledError(name)

    package_dir = ctx.config.root / record.path
    packages_root = ctx.config.packages_dir.resolve()
    if not package_dir.resolve().is_relative_to(packages_root):
        logger.warning(
            "Not deleting %s: recorded path is outside %s", package_dir, ctx.config.packages_dir
        )
    elif package_dir.is_dir():
        shutil.rmtree(package_dir)
        logger.debug("Removed package directory %s", package_dir)

    store.remove(name)
    return record


def list_installed(ctx: WpmContext) -> list[InstalledPackage]:
    """All installed records, sorted by name."""
    packages = ctx.metadata_store.load()
    return [packages[name] for name in sorted(packages)]


def format_installed_packages(packages: list[InstalledPackage]) -> list[str]:
    """Render the listing shown by `wpm list`."""
    if not packages:
        return [
            "No packages installed.",
            "",
            "To install a package, run:",
            "  wpm install <package-name>",
        ]

    rule = "═" * 60
    lines = ["Installed packages:", rule]
    for record in packages:
        lines.append("")
        lines.append(f"Package: {record.name}")
        lines.append(f"  Version:     {record.version}")
        lines.append(f"  Path:        {record.path}")
        if record.description:
            lines.append(f"  Description: {record.description}")
    lines.append("")
    lines.append(rule)
    lines.append(f"Total packages: {len(packages)}")
    return lines


def sync_from_manifest(
    ctx: WpmContext,
    manifest_path: Path,
    on_progress: ProgressCallback | None = None,
) -> SyncSummary:
    """Install or update every package listed in wpackage.json.

    The registry is loaded from cache, fetching it if no cache exists yet.
    A failure on one package does not stop the others.

    Raises:
        ManifestMissingError: If the manifest does not exist
        ManifestInvalidError: If the manifest cannot be parsed
        RegistryFetchError, RegistryDecodeError, RegistryCorruptError,
        ConfigurationError: If the registry cannot be loaded
    """
    manifest = load_project_manifest(manifest_path)
    registry = ctx.registry_store.ensure(ctx.mapping_url)
    installed = ctx.metadata_store.load()

    entries: list[SyncEntry] = []
    for name in manifest.packages:
        if name in installed:
            entries.append(_sync_update(ctx, name, registry, on_progress))
        else:
            outcome = install_package(ctx, name, registry, on_progress=on_progress)
            message = (
                f"installed v{outcome.record.version}"
                if outcome.record is not None
                else outcome.error or "install failed"
            )
            entries.append(SyncEntry(name, "install", outcome.success, message))
    return SyncSummary(entries=entries)


def _sync_update(
    ctx: WpmContext,
    name: str,
    registry: Registry,
    on_progress: ProgressCallback | None,
) -> SyncEntry:
    try:
        outcome = update_package(ctx, name, registry, on_progress=on_progress)
    except WpmError as e:
        return SyncEntry(name, "update", False, str(e))

    if outcome.status == UpdateStatus.UP_TO_DATE:
        return SyncEntry(name, "update", True, f"up to date (v{outcome.previous_version})")
    if outcome.install is not None and outcome.install.record is not None:
        return SyncEntry(
            name,
            "update",
            True,
            f"updated {outcome.previous_version} → {outcome.install.record.version}",
        )
    error = outcome.install.error if outcome.install is not None else None
    return SyncEntry(name, "update", False, error or "update failed")


def search_packages(ctx: WpmContext, query: str, registry: Registry | None) -> list[SearchHit]:
    """Case-insensitive substring search over registry and installed packages.

    Registry entries match on name, description or URL; installed packages
    not present in the registry match on name or URL.
    """
    needle = query.lower()
    installed = ctx.metadata_store.load()
    hits: dict[str, SearchHit] = {}

    if registry is not None:
        for name in registry.package_names():
            entry = registry.get_package(name)
            if entry is None:
                continue
            haystack = [name, entry.description or "", entry.url or ""]
            if any(needle in text.lower() for text in haystack):
                hits[name] = SearchHit(
                    name=name,
                    version=entry.version or "",
                    description=entry.description or "",
                    url=entry.url or "",
                    installed=name in installed,
                )

    for name, record in installed.items():
        if name in hits:
            continue
        if needle in name.lower() or needle in record.url.lower():
            hits[name] = SearchHit(
                name=name,
                version=record.version,
                description=record.description,
                url=record.url,
                installed=True,
            )

    return [hits[name] for name in sorted(hits)]
