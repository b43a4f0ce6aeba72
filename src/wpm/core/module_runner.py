"""Resolve a module name to a source file and run it with the interpreter.

Each installed package may declare modules in assignment.json at its root and
in any extra descriptor files listed in its record's `assignments`:

    {"modules": {"draw": "shapes/draw.wsx"}}

Mapped paths are relative to the package's `src/` directory (or the package
root when it has no `src/`). Packages are searched in lexicographic name order
and the first hit wins, so a module name defined by two packages always
resolves to the alphabetically first one.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from wpm.core.context import WpmContext
from wpm.core.errors import InterpreterNotFoundError, PackageModuleNotFoundError
from wpm.core.interpreter import INTERPRETER_CANDIDATES, INTERPRETER_ENV_VAR
from wpm.core.models import InstalledPackage
from wpm.core.package_files import MODULE_DESCRIPTOR_NAME, load_module_descriptor

logger = logging.getLogger(__name__)

SOURCE_DIR_NAME = "src"
MAIN_FILE_NAME = "main.wsx"


@dataclass(frozen=True)
class ResolvedModule:
    module_name: str
    package_name: str
    descriptor: Path
    source_file: Path


def descriptor_paths(package_dir: Path, record: InstalledPackage) -> list[Path]:
    """Default descriptor first, then the record's extra descriptors, deduplicated."""
    paths = [package_dir / MODULE_DESCRIPTOR_NAME]
    for relative in record.assignments:
        candidate = package_dir / relative
        if candidate not in paths:
            paths.append(candidate)
    return paths


def source_root(package_dir: Path) -> Path:
    src = package_dir / SOURCE_DIR_NAME
    if src.is_dir():
        return src
    return package_dir


def resolve_entry_file(target: Path) -> Path | None:
    """Apply the main-file convention to a mapped path.

    A file resolves to a sibling main.wsx when one exists, otherwise to
    itself. A directory resolves to the main.wsx inside it.
    """
    if target.is_file():
        sibling_main = target.parent / MAIN_FILE_NAME
        if sibling_main.is_file():
            return sibling_main
        return target
    if target.is_dir():
        inner_main = target / MAIN_FILE_NAME
        if inner_main.is_file():
            return inner_main
    return None


def resolve_module(ctx: WpmContext, module_name: str) -> ResolvedModule:
    """Find the source file for module_name across installed packages.

    Raises:
        PackageModuleNotFoundError: If no installed package maps module_name
            to an existing file
    """
    packages = ctx.metadata_store.load()
    for package_name in sorted(packages):
        record = packages[package_name]
        package_dir = ctx.config.root / record.path
        if not package_dir.is_dir():
            logger.debug("Skipping %s: directory %s missing", package_name, package_dir)
            continue

        for descriptor_path in descriptor_paths(package_dir, record):
            descriptor = load_module_descriptor(descriptor_path)
            if descriptor is None:
                continue
            mapped = descriptor.modules.get(module_name)
            if mapped is None:
                continue

            target = source_root(package_dir) / mapped
            source_file = resolve_entry_file(target)
            logger.debug(
                "Module %s mapped by %s to %s -> %s",
                module_name,
                descriptor_path,
                target,
                source_file,
            )
            if source_file is not None:
                return ResolvedModule(
                    module_name=module_name,
                    package_name=package_name,
                    descriptor=descriptor_path,
                    source_file=source_file,
                )

    raise PackageModuleNotFoundError(module_name)


def resolve_and_run(ctx: WpmContext, module_name: str) -> int:
    """Run module_name with the interpreter and return its exit code.

    The interpreter is located before any package is searched.

    Raises:
        InterpreterNotFoundError: If no interpreter is available
        PackageModuleNotFoundError: If the module cannot be resolved
    """
    executable = ctx.interpreter.locate()
    if executable is None:
        raise InterpreterNotFoundError(
            f"Well.. Simple interpreter not found. Set {INTERPRETER_ENV_VAR} or put one of "
            f"{', '.join(INTERPRETER_CANDIDATES)} on PATH"
        )

    resolved = resolve_module(ctx, module_name)
    logger.debug("Running %s from package %s", resolved.source_file, resolved.package_name)
    return ctx.interpreter.run(executable, resolved.source_file)
