"""Download a package archive and unpack it into its package directory."""

import logging
from pathlib import Path

from wpm.core.archive import ExtractReport, extract_archive, flatten_single_top_level_folder
from wpm.core.errors import DownloadError
from wpm.core.http import HttpClient, ProgressCallback, TransportError

logger = logging.getLogger(__name__)


def download(http: HttpClient, url: str, on_progress: ProgressCallback | None = None) -> bytes:
    """Fetch an archive into memory.

    Raises:
        DownloadError: On transport failure or a non-success status
    """
    try:
        response = http.get(url, on_progress=on_progress)
    except TransportError as e:
        raise DownloadError(f"Failed to download {url}: {e}") from e

    if not response.ok:
        raise DownloadError(f"Failed to download {url}: HTTP {response.status_code}")

    logger.debug("Downloaded %d bytes from %s", len(response.content), url)
    return response.content


class ArchiveInstaller:
    """Download, extract and normalize one package archive."""

    def __init__(self, http: HttpClient) -> None:
        self._http = http

    def install_into(
        self,
        url: str,
        dest_dir: Path,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractReport:
        """Populate dest_dir with the archive at url.

        dest_dir must already exist. On failure it is left as-is (empty or
        partially extracted) for the caller to retry over.

        Raises:
            DownloadError: If the download fails
            ExtractError: If the archive cannot be read
        """
        archive_bytes = download(self._http, url, on_progress=on_progress)
        report = extract_archive(archive_bytes, dest_dir)
        flatten_single_top_level_folder(dest_dir)
        return report
