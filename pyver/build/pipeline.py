"""
End-to-end "ensure this version is installed" pipeline.

Stages, each skipped when its output already exists on disk:

1. Look for an extracted source tree in ``<root>/sources/<version>``
2. Locate the cached archive, downloading it on a miss
3. Extract the archive
4. Configure and install into ``<root>/versions/<version>``

Stages are idempotent by inspection only: an existing directory is taken
as complete, and nothing is rolled back when a stage fails.
"""

import logging
from pathlib import Path
from typing import Optional

from pyver.build.executor import BuildExecutor
from pyver.core.config import PyverConfig
from pyver.core.directory import get_prefix_dir, get_sources_dir
from pyver.core.download import find_archive_or_download
from pyver.core.exceptions import NotFoundError
from pyver.core.filesystem import extract_and_locate, find_unpacked

logger = logging.getLogger(__name__)


class BuildPipeline:
    """
    Acquires, extracts and builds Python versions under one root.

    Example:
        >>> pipeline = BuildPipeline(root="/opt/pyver")
        >>> prefix = pipeline.ensure_installed("3.11.4", dry_run=False)
        >>> print(prefix / "bin" / "python3")
    """

    def __init__(
        self,
        root: Optional[str] = None,
        config: Optional[PyverConfig] = None,
        executor: Optional[BuildExecutor] = None,
    ):
        """
        Initialize pipeline.

        Args:
            root: Explicit root; falls back to config.root, PYVER_ROOT, ~/.pyver
            config: Download and build settings
            executor: Build executor (built from config if None)
        """
        self.config = config or PyverConfig()
        self.root = root or self.config.root
        self.executor = executor or BuildExecutor(
            configure_args=self.config.configure_args, jobs=self.config.jobs
        )

    def find_or_extract(self, version: str) -> Path:
        """
        Ensure the source tree for ``version`` is unpacked.

        Returns:
            Path to the extracted source tree

        Raises:
            DownloadError: If the archive has to be fetched and the fetch fails
            SubprocessError: If tar cannot be launched
            NotFoundError: If extraction produced no directory
        """
        sources = get_sources_dir(self.root, version)

        try:
            unpacked = find_unpacked(sources)
        except NotFoundError:
            pass
        else:
            logger.debug(f"Source already unpacked: {unpacked}")
            return unpacked

        archive = find_archive_or_download(sources, version, self.config)
        return extract_and_locate(sources, archive)

    def ensure_installed(self, version: str, dry_run: bool = True) -> Path:
        """
        Make sure ``version`` is fetched, extracted and (unless dry run) built.

        Args:
            version: Version string, used verbatim
            dry_run: Skip configure/make when True

        Returns:
            Install prefix for ``version``
        """
        unpacked = self.find_or_extract(version)
        logger.info(f"Unpacked {unpacked}")

        prefix = get_prefix_dir(self.root, version)
        logger.info(f"Prefix {prefix}")

        self.executor.build_and_install(unpacked, prefix, dry_run=dry_run)
        return prefix


def ensure_installed(
    root: Optional[str],
    version: str,
    dry_run: bool = True,
    config: Optional[PyverConfig] = None,
) -> Path:
    """
    Convenience function to run the full pipeline once.

    Example:
        >>> from pyver.build.pipeline import ensure_installed
        >>> ensure_installed(None, "3.12.1", dry_run=False)
    """
    pipeline = BuildPipeline(root=root, config=config)
    return pipeline.ensure_installed(version, dry_run=dry_run)
