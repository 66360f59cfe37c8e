"""
Root directory management for pyver.

All state lives under a single root directory:

    <root>/
        sources/<version>/   : Cached archive and the extracted source tree
        versions/<version>/  : Install prefix populated by ``make install``

Directories are created on demand, one level at a time. A path that
already exists as something other than a directory is an error.
"""

import logging
from pathlib import Path, PurePosixPath
from typing import Mapping, Optional, Union

from pyver.core.config import RootConfig, resolve_root
from pyver.core.exceptions import RootNotDirectoryError

logger = logging.getLogger(__name__)

SOURCES_DIR = "sources"
VERSIONS_DIR = "versions"


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure ``path`` exists as a directory.

    Only the final component is created; missing ancestors are an error.

    Args:
        path: Directory path

    Returns:
        The directory path

    Raises:
        RootNotDirectoryError: If path exists but is not a directory
        OSError: Any other filesystem failure, unchanged
    """
    path = Path(path)
    try:
        path.mkdir()
        logger.debug(f"Created directory: {path}")
    except FileExistsError:
        if not path.is_dir():
            raise RootNotDirectoryError(path)
    return path


def get_relative_to_root(
    root: Optional[str],
    child: str,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Resolve ``child`` below the pyver root, creating directories as needed.

    Args:
        root: Explicit root, or None to fall back to PYVER_ROOT / ~/.pyver
        child: Relative path below the root (e.g. "sources/3.11.4")
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Absolute path of the child directory

    Raises:
        EnvironmentLookupError: If the root cannot be determined
        RootNotDirectoryError: If the root or any child level is not a directory

    Example:
        >>> get_relative_to_root("/tmp/pyver", "versions")
        PosixPath('/tmp/pyver/versions')
    """
    base = resolve_root(RootConfig(explicit_root=root, environ=environ)).absolute()
    ensure_directory(base)

    current = base
    for part in PurePosixPath(child).parts:
        current = current / part
        ensure_directory(current)

    return current


# Alias
resolve_and_ensure = get_relative_to_root


def get_sources_dir(root: Optional[str], version: str, environ=None) -> Path:
    """Return ``<root>/sources/<version>``, creating it if needed."""
    return get_relative_to_root(root, f"{SOURCES_DIR}/{version}", environ)


def get_prefix_dir(root: Optional[str], version: str, environ=None) -> Path:
    """Return ``<root>/versions/<version>``, creating it if needed."""
    return get_relative_to_root(root, f"{VERSIONS_DIR}/{version}", environ)
