from wpm.core.interpreter.abc import Interpreter
from wpm.core.interpreter.real import (
    INTERPRETER_CANDIDATES,
    INTERPRETER_ENV_VAR,
    RealInterpreter,
)

__all__ = [
    "INTERPRETER_CANDIDATES",
    "INTERPRETER_ENV_VAR",
    "Interpreter",
    "RealInterpreter",
]
