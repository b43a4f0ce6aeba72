"""Builders for registry documents and zip archives used across tests."""

import io
import json
import zipfile

MAPPING_URL = "https://registry.test/mapping.json"

ArchiveFiles = dict[str, bytes | str | None]


def make_zip(files: ArchiveFiles) -> bytes:
    """Build a zip archive in memory.

    Keys are entry names; a None value (or a name ending in "/") creates a
    directory entry.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            if content is None or name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name if name.endswith("/") else name + "/"), b"")
            elif isinstance(content, str):
                zf.writestr(name, content.encode("utf-8"))
            else:
                zf.writestr(name, content)
    return buffer.getvalue()


def registry_bytes(packages: dict[str, dict[str, str]], nested: bool = True) -> bytes:
    document: dict[str, object] = {"packages": packages} if nested else dict(packages)
    return json.dumps(document).encode("utf-8")


def archive_url(name: str, version: str) -> str:
    return f"https://downloads.test/{name}-{version}.zip"


def registry_routes(packages: dict[str, tuple[str, ArchiveFiles]]) -> dict[str, bytes]:
    """Routes for a registry plus one archive per package.

    packages maps name -> (version, archive entries).
    """
    routes: dict[str, bytes] = {}
    entries: dict[str, dict[str, str]] = {}
    for name, (version, files) in packages.items():
        url = archive_url(name, version)
        routes[url] = make_zip(files)
        entries[name] = {"url": url, "version": version, "description": f"The {name} package"}
    routes[MAPPING_URL] = registry_bytes(entries)
    return routes


def damaged_deflate_zip(name: str = "src/main.wsx") -> bytes:
    """A deflated zip whose central directory is intact but whose entry data is garbage."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(name, "print 1\n" * 200)
    data = bytearray(buffer.getvalue())
    # First local header: 30 fixed bytes + name, no extra field
    start = 30 + len(name.encode("utf-8"))
    data[start : start + 20] = b"\xff" * 20
    return bytes(data)
