"""Readers for the JSON files that packages and projects ship.

package.json and assignment.json belong to the package author, so a missing or
broken file is treated as absent. wpackage.json is explicit user input, so
problems with it are reported.
"""

import json
import logging
from pathlib import Path

from wpm.core.errors import ManifestInvalidError, ManifestMissingError
from wpm.core.models import ModuleDescriptor, PackageDescriptor, ProjectManifest, parse_model

logger = logging.getLogger(__name__)

PACKAGE_DESCRIPTOR_NAME = "package.json"
MODULE_DESCRIPTOR_NAME = "assignment.json"


def _read_json(path: Path) -> object | None:
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.debug("Unreadable JSON file %s: %s", path, e)
        return None


def load_package_descriptor(package_dir: Path) -> PackageDescriptor | None:
    """Read <package_dir>/package.json, or None if missing or malformed."""
    data = _read_json(package_dir / PACKAGE_DESCRIPTOR_NAME)
    if data is None:
        return None
    descriptor = parse_model(PackageDescriptor, data)
    if descriptor is None:
        logger.debug("Ignoring malformed %s in %s", PACKAGE_DESCRIPTOR_NAME, package_dir)
    return descriptor


def load_module_descriptor(path: Path) -> ModuleDescriptor | None:
    """Read an assignment.json file, or None if missing or malformed."""
    data = _read_json(path)
    if data is None:
        return None
    return parse_model(ModuleDescriptor, data)


def load_project_manifest(path: Path) -> ProjectManifest:
    """Read wpackage.json.

    Raises:
        ManifestMissingError: If the file does not exist
        ManifestInvalidError: If it is not valid JSON or lacks a list of names
    """
    if not path.exists():
        raise ManifestMissingError(f"Project manifest not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestInvalidError(f"Invalid JSON in {path}: {e}") from e

    manifest = parse_model(ProjectManifest, data)
    if manifest is None:
        raise ManifestInvalidError(
            f'{path} must be an object of the form {{"packages": ["name", ...]}}'
        )
    return manifest
