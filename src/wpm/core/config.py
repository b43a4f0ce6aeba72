"""Project paths and registry URL resolution.

Provides immutable configuration derived from the project root. The registry
URL is resolved lazily, only by commands that actually need to fetch it.
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

from wpm.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

PACKAGES_DIR_NAME = "ws_packages"
METADATA_FILE_NAME = "ws_packages.json"
REGISTRY_CACHE_NAME = "mapping.json"
PROJECT_MANIFEST_NAME = "wpackage.json"
CONFIG_FILE_NAME = "wpm.toml"

MAPPING_URL_ENV_VAR = "WPM_MAPPING_URL"
DEFAULT_MAPPING_URL = (
    "https://raw.githubusercontent.com/well-simple/wpm-registry/main/mapping.json"
)


@dataclass(frozen=True)
class WpmConfig:
    """Immutable filesystem layout for one project.

    All paths hang off `root`, the directory wpm was invoked from.
    """

    root: Path

    @property
    def packages_dir(self) -> Path:
        return self.root / PACKAGES_DIR_NAME

    @property
    def metadata_path(self) -> Path:
        return self.root / METADATA_FILE_NAME

    @property
    def registry_cache_path(self) -> Path:
        return self.packages_dir / REGISTRY_CACHE_NAME

    @property
    def manifest_path(self) -> Path:
        return self.root / PROJECT_MANIFEST_NAME

    @property
    def config_file_path(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    def package_dir(self, name: str) -> Path:
        return self.packages_dir / name

    def relative_package_path(self, name: str) -> str:
        """Path recorded in metadata, relative to the project root."""
        return f"{PACKAGES_DIR_NAME}/{name}"


def read_config_file_mapping_url(config_file: Path) -> str | None:
    """Read `mapping_url` from wpm.toml.

    Returns None when the file is missing or has no usable value.

    Raises:
        ConfigurationError: If the file exists but is not valid UTF-8 TOML
    """
    if not config_file.exists():
        return None

    try:
        data = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Invalid TOML in {config_file}: {e}") from e

    value = data.get("mapping_url")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def resolve_mapping_url(
    *,
    override: str | None,
    env: dict[str, str],
    config_file: Path,
    default: str | None = DEFAULT_MAPPING_URL,
) -> str:
    """Resolve the registry URL.

    Order: explicit override, WPM_MAPPING_URL, wpm.toml `mapping_url`, the
    built-in default.

    Raises:
        ConfigurationError: If every source is empty
    """
    if override:
        logger.debug("Registry URL from override: %s", override)
        return override

    env_value = env.get(MAPPING_URL_ENV_VAR, "").strip()
    if env_value:
        logger.debug("Registry URL from %s: %s", MAPPING_URL_ENV_VAR, env_value)
        return env_value

    file_value = read_config_file_mapping_url(config_file)
    if file_value is not None:
        logger.debug("Registry URL from %s: %s", config_file, file_value)
        return file_value

    if default:
        logger.debug("Registry URL from built-in default: %s", default)
        return default

    raise ConfigurationError(
        f"No registry URL configured. Pass --mapping-url, set {MAPPING_URL_ENV_VAR}, "
        f"or add mapping_url to {CONFIG_FILE_NAME}"
    )
