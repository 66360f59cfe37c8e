"""
Source archive download.

A single blocking GET per archive: the response body is streamed to disk
as-is. There is no resume, retry or checksum verification, so a failed
download may leave a partial file behind.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import requests
from requests.exceptions import RequestException

from pyver.core.config import PyverConfig
from pyver.core.exceptions import DownloadError, NotFoundError
from pyver.core.filesystem import find_archive

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def download_file(url: str, destination: Path, timeout: int = 60) -> Path:
    """
    Download ``url`` to ``destination``, overwriting any existing file.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: On connection failure, DNS failure, timeout or non-2xx status
        OSError: If the file cannot be written
        ValueError: If URL or destination is empty

    Example:
        >>> download_file(
        ...     "https://www.python.org/ftp/python/3.11.4/Python-3.11.4.tgz",
        ...     Path("sources/3.11.4/Python-3.11.4.tgz"),
        ... )
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    logger.info(f"Downloading from {url}")

    try:
        response = requests.get(url, stream=True, timeout=timeout)
        response.raise_for_status()

        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
    except RequestException as e:
        raise DownloadError(url, str(e)) from e

    logger.info(f"Download complete: {destination}")
    return destination


def fetch_archive(
    directory: Union[str, Path],
    version: str,
    config: Optional[PyverConfig] = None,
) -> Path:
    """
    Download the source archive for ``version`` into ``directory``.

    Args:
        directory: Version source directory (created with parents)
        version: Version string, used verbatim
        config: Download settings (defaults to python.org)

    Returns:
        Path to the written archive
    """
    config = config or PyverConfig()
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)

    destination = directory / config.archive_name(version)
    url = config.archive_url(version)
    logger.info(f"url is {url}, full_name is {destination}")

    return download_file(url, destination, timeout=config.timeout)


def find_archive_or_download(
    directory: Union[str, Path],
    version: str,
    config: Optional[PyverConfig] = None,
) -> Path:
    """
    Return the cached archive in ``directory``, downloading it on a miss.
    """
    try:
        archive = find_archive(directory)
    except NotFoundError:
        logger.debug(f"No cached archive in {directory}")
        return fetch_archive(directory, version, config)

    logger.info(f"Using cached archive {archive}")
    return archive
