"""State file I/O for ws_packages.json.

Loading is fail-open: a missing or corrupt metadata file reads as "no packages"
so a damaged file never blocks new installs. Each call reads or writes the
file; nothing is cached between calls.

put() and remove() edit the JSON object entry by entry, so records that
load() skips as malformed are written back unchanged.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from wpm.core.models import InstalledPackage

logger = logging.getLogger(__name__)


class MetadataStore:
    """Load/save access to the installed-package records."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read_raw(self) -> dict[str, Any]:
        """The file's top-level object, or {} if missing, unreadable or not an object."""
        if not self._path.exists():
            return {}

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable metadata file %s: %s", self._path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring metadata file %s: not a JSON object", self._path)
            return {}
        return data

    def _write_raw(self, data: dict[str, Any]) -> None:
        """Replace the file via a temp file + rename."""
        content = json.dumps(data, indent=2) + "\n"

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    def load(self) -> dict[str, InstalledPackage]:
        """Read all records.

        Returns an empty mapping if the file is missing, unreadable or not a
        JSON object. Individual malformed records are skipped.
        """
        packages: dict[str, InstalledPackage] = {}
        for name, entry in self._read_raw().items():
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed metadata record for '%s'", name)
                continue
            try:
                packages[name] = InstalledPackage.from_dict(name, entry)
            except ValueError as e:
                logger.warning("Skipping malformed metadata record for '%s': %s", name, e)
        return packages

    def save(self, packages: dict[str, InstalledPackage]) -> None:
        """Write exactly these records, replacing the whole file."""
        self._write_raw({name: record.to_dict() for name, record in packages.items()})

    def get(self, name: str) -> InstalledPackage | None:
        return self.load().get(name)

    def put(self, record: InstalledPackage) -> None:
        """Insert or overwrite one record, leaving every other entry as found."""
        data = self._read_raw()
        data[record.name] = record.to_dict()
        self._write_raw(data)

    def remove(self, name: str) -> bool:
        """Delete one entry. Returns False (and writes nothing) if absent."""
        data = self._read_raw()
        if name not in data:
            return False
        del data[name]
        self._write_raw(data)
        return True
