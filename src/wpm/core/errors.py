"""Error taxonomy for wpm operations.

Every failure a user can trigger is a subclass of WpmError. The CLI error
boundary turns these into a single "Error: ..." line and a non-zero exit code;
anything else is a bug and keeps its stack trace.
"""


class WpmError(Exception):
    """Base class for all expected wpm failures."""


class ConfigurationError(WpmError):
    """No registry URL could be resolved from any configuration source."""


class RegistryFetchError(WpmError):
    """The registry could not be fetched (bad status or transport failure)."""


class RegistryDecodeError(WpmError):
    """The fetched registry body is not a JSON object."""


class RegistryMissingError(WpmError):
    """No cached registry exists yet."""


class RegistryCorruptError(WpmError):
    """The cached registry exists but cannot be parsed."""


class PackageNotFoundError(WpmError):
    """The registry has no entry for the requested package."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package '{name}' not found in registry")
        self.name = name


class PackageMissingUrlError(WpmError):
    """The registry entry has no download URL."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package '{name}' has no download URL in registry")
        self.name = name


class DownloadError(WpmError):
    """Archive download failed."""


class ExtractError(WpmError):
    """Archive could not be parsed or extracted."""


class PackageNotInstalledError(WpmError):
    """No installation record exists for the package."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package '{name}' is not installed")
        self.name = name


class ManifestMissingError(WpmError):
    """The project manifest (wpackage.json) does not exist."""


class ManifestInvalidError(WpmError):
    """The project manifest is not valid JSON or has the wrong shape."""


class PackageModuleNotFoundError(WpmError):
    """No installed package declares the requested module."""

    def __init__(self, module_name: str) -> None:
        super().__init__(f"Module '{module_name}' not found in any installed package")
        self.module_name = module_name


class InterpreterNotFoundError(WpmError):
    """No Well.. Simple interpreter could be located."""


class InvalidPackageNameError(WpmError):
    """The package name cannot be used as a directory name under ws_packages/."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid package name: '{name}'")
        self.name = name
