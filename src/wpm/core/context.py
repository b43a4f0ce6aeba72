"""Application context with dependency injection."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from wpm.core.clock import Clock, RealClock
from wpm.core.config import DEFAULT_MAPPING_URL, WpmConfig, resolve_mapping_url
from wpm.core.http import HttpClient, RealHttpClient
from wpm.core.installer import ArchiveInstaller
from wpm.core.interpreter import Interpreter, RealInterpreter
from wpm.core.metadata_store import MetadataStore
from wpm.core.registry_store import RegistryStore


@dataclass(frozen=True)
class WpmContext:
    """Immutable context holding all dependencies for wpm operations.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    http: HttpClient
    interpreter: Interpreter
    clock: Clock
    config: WpmConfig
    env: dict[str, str] = field(default_factory=dict)
    mapping_url_override: str | None = None
    default_mapping_url: str | None = DEFAULT_MAPPING_URL
    debug: bool = False

    @property
    def registry_store(self) -> RegistryStore:
        return RegistryStore(self.http, self.config.registry_cache_path)

    @property
    def metadata_store(self) -> MetadataStore:
        return MetadataStore(self.config.metadata_path)

    @property
    def archive_installer(self) -> ArchiveInstaller:
        return ArchiveInstaller(self.http)

    def mapping_url(self) -> str:
        """Resolve the registry URL from override, env, wpm.toml, default.

        Raises:
            ConfigurationError: If no source provides a URL
        """
        return resolve_mapping_url(
            override=self.mapping_url_override,
            env=self.env,
            config_file=self.config.config_file_path,
            default=self.default_mapping_url,
        )

    @staticmethod
    def for_test(
        http: HttpClient | None = None,
        interpreter: Interpreter | None = None,
        clock: Clock | None = None,
        root: Path | None = None,
        env: dict[str, str] | None = None,
        mapping_url_override: str | None = None,
        default_mapping_url: str | None = DEFAULT_MAPPING_URL,
        debug: bool = False,
    ) -> "WpmContext":
        """Create test context with fakes for any unspecified integration.

        Args:
            http: Optional HttpClient. If None, creates FakeHttpClient with no routes.
            interpreter: Optional Interpreter. If None, creates FakeInterpreter
                with no executable.
            clock: Optional Clock. If None, creates FakeClock at a fixed instant.
            root: Project root. If None, uses Path("/test/default/root") so tests
                never touch the real working directory by accident.
            env: Environment mapping (default empty)

        Example:
            >>> http = FakeHttpClient(routes={MAPPING_URL: registry_bytes})
            >>> ctx = WpmContext.for_test(http=http, root=tmp_path)
        """
        from tests.fakes.clock import FakeClock
        from tests.fakes.http import FakeHttpClient
        from tests.fakes.interpreter import FakeInterpreter

        return WpmContext(
            http=http if http is not None else FakeHttpClient(),
            interpreter=interpreter if interpreter is not None else FakeInterpreter(),
            clock=clock if clock is not None else FakeClock(),
            config=WpmConfig(root=root if root is not None else Path("/test/default/root")),
            env=env if env is not None else {},
            mapping_url_override=mapping_url_override,
            default_mapping_url=default_mapping_url,
            debug=debug,
        )


def create_context(*, debug: bool, mapping_url_override: str | None = None) -> WpmContext:
    """Create production context with real implementations.

    Called once at CLI entry point; the project root is the current directory.
    """
    env = dict(os.environ)
    return WpmContext(
        http=RealHttpClient(),
        interpreter=RealInterpreter(env=env),
        clock=RealClock(),
        config=WpmConfig(root=Path.cwd()),
        env=env,
        mapping_url_override=mapping_url_override,
        debug=debug,
    )
