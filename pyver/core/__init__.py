"""
Core functionality for pyver.

This package contains the foundational modules that the build pipeline and
the CLI depend on.
"""

from .config import (
    RootConfig,
    PyverConfig,
    resolve_root,
    load_config,
)

from .directory import (
    ensure_directory,
    get_relative_to_root,
    resolve_and_ensure,
    get_sources_dir,
    get_prefix_dir,
)

from .filesystem import (
    list_entries,
    find_archive,
    find_unpacked,
    find_installed,
    extract_archive,
    extract_and_locate,
)

from .download import (
    download_file,
    fetch_archive,
    find_archive_or_download,
)

from .exceptions import (
    PyverError,
    ConfigError,
    NotFoundError,
    RootNotDirectoryError,
    EnvironmentLookupError,
    DownloadError,
    SubprocessError,
    BuildError,
)

__all__ = [
    "RootConfig",
    "PyverConfig",
    "resolve_root",
    "load_config",
    "ensure_directory",
    "get_relative_to_root",
    "resolve_and_ensure",
    "get_sources_dir",
    "get_prefix_dir",
    "list_entries",
    "find_archive",
    "find_unpacked",
    "find_installed",
    "extract_archive",
    "extract_and_locate",
    "download_file",
    "fetch_archive",
    "find_archive_or_download",
    "PyverError",
    "ConfigError",
    "NotFoundError",
    "RootNotDirectoryError",
    "EnvironmentLookupError",
    "DownloadError",
    "SubprocessError",
    "BuildError",
]
