"""
Configure/make invocation for an extracted CPython source tree.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pyver.core.exceptions import BuildError, SubprocessError

logger = logging.getLogger(__name__)


class BuildExecutor:
    """
    Runs ``./configure --prefix <prefix>`` followed by ``make install``.

    Both steps run with the source tree as working directory and inherit
    stdio, so compiler output goes straight to the terminal.

    Example:
        >>> executor = BuildExecutor(jobs=8)
        >>> executor.build_and_install(
        ...     Path("~/.pyver/sources/3.11.4/Python-3.11.4"),
        ...     Path("~/.pyver/versions/3.11.4"),
        ...     dry_run=False,
        ... )
    """

    def __init__(
        self,
        configure_args: Optional[Sequence[str]] = None,
        jobs: Optional[int] = None,
    ):
        """
        Initialize build executor.

        Args:
            configure_args: Extra arguments appended to ./configure
            jobs: Parallel make jobs (None leaves make's default)
        """
        self.configure_args = list(configure_args or [])
        self.jobs = jobs

    def configure_command(self, prefix: Union[str, Path]) -> List[str]:
        return ["./configure", "--prefix", str(prefix), *self.configure_args]

    def install_command(self) -> List[str]:
        cmd = ["make"]
        if self.jobs:
            cmd.append(f"-j{self.jobs}")
        cmd.append("install")
        return cmd

    def build_and_install(
        self,
        source_dir: Union[str, Path],
        prefix: Union[str, Path],
        dry_run: bool = True,
    ) -> None:
        """
        Build the source tree and install it under ``prefix``.

        Args:
            source_dir: Extracted source tree
            prefix: Install prefix
            dry_run: If True, only report what would be done

        Raises:
            SubprocessError: If configure or make cannot be launched
            BuildError: If configure or make exits with a non-zero status
        """
        if dry_run:
            logger.info("Dry run only, not building")
            return

        self._run(self.configure_command(prefix), source_dir)
        self._run(self.install_command(), source_dir)
        logger.info(f"Installed into {prefix}")

    def _run(self, cmd: List[str], cwd: Union[str, Path]) -> None:
        logger.info(f"Running {' '.join(cmd)} in {cwd}")
        try:
            result = subprocess.run(cmd, cwd=str(cwd))
        except OSError as e:
            raise SubprocessError(cmd, str(e)) from e

        if result.returncode != 0:
            raise BuildError(cmd, result.returncode)
