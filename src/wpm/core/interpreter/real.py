"""Real interpreter implementation using subprocess."""

import logging
import os
import subprocess
from pathlib import Path

from wpm.core.interpreter.abc import Interpreter

logger = logging.getLogger(__name__)

INTERPRETER_ENV_VAR = "WPM_INTERPRETER"
INTERPRETER_CANDIDATES = ("ws", "wellsimple")


class RealInterpreter(Interpreter):
    """Locates the interpreter via environment override or PATH probing."""

    def __init__(
        self,
        env: dict[str, str] | None = None,
        candidates: tuple[str, ...] = INTERPRETER_CANDIDATES,
    ) -> None:
        self._env = env if env is not None else dict(os.environ)
        self._candidates = candidates

    def locate(self) -> str | None:
        override = self._env.get(INTERPRETER_ENV_VAR, "").strip()
        if override:
            logger.debug("Using interpreter from %s: %s", INTERPRETER_ENV_VAR, override)
            return override

        for candidate in self._candidates:
            if _responds_to_version_query(candidate):
                logger.debug("Found interpreter on PATH: %s", candidate)
                return candidate
            logger.debug("Interpreter candidate not usable: %s", candidate)
        return None

    def run(self, executable: str, source_file: Path) -> int:
        logger.debug("Running %s %s", executable, source_file)
        result = subprocess.run([executable, str(source_file)], check=False)
        return result.returncode


def _responds_to_version_query(executable: str) -> bool:
    try:
        subprocess.run(
            [executable, "--version"],
            capture_output=True,
            check=False,
            timeout=10,
        )
    except (OSError, subprocess.TimeoutExpired):
        return False
    return True
