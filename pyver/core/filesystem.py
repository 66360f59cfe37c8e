"""
Filesystem scans and archive extraction.

Every lookup here is a "first match" scan over a single directory. Entries
are sorted by name before scanning so results do not depend on the order
the operating system happens to return them in.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Union

from pyver.core.exceptions import NotFoundError, SubprocessError

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSIONS = (".tgz", ".xz")


def list_entries(directory: Union[str, Path]) -> List[Path]:
    """
    List the entries of a directory, sorted by name.

    Args:
        directory: Directory to enumerate (non-recursive)

    Returns:
        Sorted list of entry paths

    Raises:
        OSError: If the directory cannot be read
    """
    return sorted(Path(directory).iterdir(), key=lambda p: p.name)


def find_archive(directory: Union[str, Path]) -> Path:
    """
    Find a cached source archive in ``directory``.

    An archive is identified by extension only (``.tgz`` or ``.xz``).

    Raises:
        NotFoundError: If the directory is missing or holds no archive
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotFoundError("tarball")

    for entry in list_entries(directory):
        if entry.name.endswith(ARCHIVE_EXTENSIONS):
            logger.debug(f"Found archive: {entry}")
            return entry

    raise NotFoundError("tarball")


def find_unpacked(directory: Union[str, Path]) -> Path:
    """
    Find the extracted source tree in ``directory``.

    Raises:
        NotFoundError: If no subdirectory exists
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotFoundError("unpacked")

    for entry in list_entries(directory):
        if entry.is_dir():
            logger.debug(f"Found unpacked source: {entry}")
            return entry

    raise NotFoundError("unpacked")


def find_installed(versions_dir: Union[str, Path], version_prefix: str) -> Path:
    """
    Find the first installed version whose name starts with ``version_prefix``.

    Matching is a literal string prefix, so "3.11" matches "3.11.4".

    Raises:
        NotFoundError: If no installed version matches
    """
    for entry in list_entries(versions_dir):
        if entry.name.startswith(version_prefix):
            return entry

    raise NotFoundError("installed version")


def extract_archive(directory: Union[str, Path], archive: Union[str, Path]) -> int:
    """
    Unpack ``archive`` into ``directory`` using the system ``tar``.

    The exit status of tar is returned but not treated as an error; a failed
    extraction shows up as a missing directory afterwards.

    Args:
        directory: Working directory for tar
        archive: Archive file to extract

    Returns:
        tar exit status

    Raises:
        SubprocessError: If tar cannot be launched
    """
    cmd = ["tar", "--extract", "--file", str(Path(archive).absolute())]
    logger.info(f"Running tar unpack {archive}")

    try:
        result = subprocess.run(cmd, cwd=str(directory))
    except OSError as e:
        raise SubprocessError(cmd, str(e)) from e

    if result.returncode != 0:
        logger.warning(f"tar exited with status {result.returncode} for {archive}")

    return result.returncode


def extract_and_locate(directory: Union[str, Path], archive: Union[str, Path]) -> Path:
    """
    Extract ``archive`` into ``directory`` and return the extracted source tree.

    Raises:
        SubprocessError: If tar cannot be launched
        NotFoundError: If no directory exists after extraction
    """
    extract_archive(directory, archive)
    return find_unpacked(directory)
