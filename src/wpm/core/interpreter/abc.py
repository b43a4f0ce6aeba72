"""Interpreter process abstraction.

`wpm run` hands a resolved source file to the Well.. Simple interpreter. This
interface enables testing the resolver without spawning processes.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class Interpreter(ABC):
    """Abstract interface for locating and invoking the interpreter."""

    @abstractmethod
    def locate(self) -> str | None:
        """Find an interpreter executable.

        Returns:
            Executable name or path, or None if no interpreter is available
        """
        ...

    @abstractmethod
    def run(self, executable: str, source_file: Path) -> int:
        """Run `<executable> <source_file>` with inherited standard streams.

        Args:
            executable: Value previously returned by locate()
            source_file: File to execute

        Returns:
            Exit code of the child process
        """
        ...
