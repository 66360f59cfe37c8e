"""
Centralized exception hierarchy for pyver.

Every error raised by the acquisition-and-build pipeline derives from
PyverError so the CLI dispatcher can render it as a single line.
"""

from typing import List, Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class PyverError(Exception):
    """Base exception for all pyver errors."""

    pass


class ConfigError(PyverError):
    """Raised when a configuration file cannot be parsed or is invalid."""

    pass


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class NotFoundError(PyverError):
    """Raised when a required file or directory entry cannot be located."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Could not find {kind}")


class RootNotDirectoryError(PyverError):
    """Raised when a path expected to be a directory exists as something else."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"{path} is not a directory")


class EnvironmentLookupError(PyverError):
    """Raised when a required environment variable is not set."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(
            f"{variable} environment variable is not set. "
            "Cannot determine pyver root directory."
        )


# ============================================================================
# Network Exceptions
# ============================================================================


class DownloadError(PyverError):
    """Raised when fetching a source archive fails."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Download of {url} failed: {reason}")


# ============================================================================
# Subprocess Exceptions
# ============================================================================


class SubprocessError(PyverError):
    """Raised when an external tool (tar, configure, make) cannot be launched."""

    def __init__(self, command: List[str], reason: Optional[str] = None):
        self.command = list(command)
        msg = f"Failed to execute {' '.join(self.command)}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class BuildError(SubprocessError):
    """Raised when a build step exits with a non-zero status."""

    def __init__(self, command: List[str], returncode: int):
        self.returncode = returncode
        super().__init__(command, f"exit code {returncode}")
