"""Zip extraction with path-traversal protection, and wrapper-folder flattening."""

import io
import logging
import shutil
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path

from wpm.core.errors import ExtractError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractReport:
    """Outcome of one extraction.

    Attributes:
        written: Files written, relative to the destination
        skipped: Entry names rejected because they resolve outside the destination
    """

    written: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def _safe_target(dest_root: Path, entry_name: str) -> Path | None:
    """Resolve an entry name under dest_root, or None if it escapes."""
    normalized = entry_name.replace("\\", "/")
    target = (dest_root / normalized).resolve()
    if target == dest_root or not target.is_relative_to(dest_root):
        return None
    return target


def extract_archive(archive_bytes: bytes, dest_dir: Path) -> ExtractReport:
    """Extract every safe entry of a zip archive into dest_dir.

    Entries whose resolved path falls outside dest_dir (absolute paths, `..`
    segments) are never written; the rest of the archive still extracts.

    Raises:
        ExtractError: If the bytes are not a readable zip archive
    """
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest_root = dest_dir.resolve()
    written: list[str] = []
    skipped: list[str] = []

    try:
        with zipfile.ZipFile(io.BytesIO(archive_bytes)) as zf:
            for info in zf.infolist():
                if not info.filename:
                    continue

                target = _safe_target(dest_root, info.filename)
                if target is None:
                    if info.filename.strip("/\\.") != "":
                        logger.warning("Skipping unsafe archive entry: %s", info.filename)
                        skipped.append(info.filename)
                    continue

                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, open(target, "wb") as dst:
                    shutil.copyfileobj(src, dst)
                written.append(target.relative_to(dest_root).as_posix())
    except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        raise ExtractError(f"Invalid zip archive: {e}") from e
    except RuntimeError as e:
        # zipfile raises RuntimeError for encrypted entries
        raise ExtractError(f"Cannot extract archive: {e}") from e
    except (zlib.error, EOFError, NotImplementedError) as e:
        # Damaged or truncated entry data, or an unsupported compression method
        raise ExtractError(f"Corrupt zip archive: {e}") from e

    logger.debug("Extracted %d file(s) into %s", len(written), dest_dir)
    return ExtractReport(written=written, skipped=skipped)


def flatten_single_top_level_folder(dest_dir: Path) -> bool:
    """Hoist the contents of a lone wrapper directory into dest_dir.

    Archives commonly wrap everything in `<package-name>/`. If dest_dir holds
    exactly one entry and it is a directory, its children move up one level
    and the wrapper is removed. Not recursive.

    Returns:
        True if a wrapper folder was flattened
    """
    entries = list(dest_dir.iterdir())
    if len(entries) != 1 or not entries[0].is_dir() or entries[0].is_symlink():
        return False

    wrapper = entries[0]
    # A child may share the wrapper's name, so move the wrapper aside first.
    staging = dest_dir / f".{wrapper.name}.flatten"
    wrapper.rename(staging)
    for child in list(staging.iterdir()):
        shutil.move(str(child), str(dest_dir / child.name))
    staging.rmdir()

    logger.debug("Flattened wrapper folder %s", wrapper.name)
    return True
