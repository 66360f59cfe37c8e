"""
Configuration for pyver.

Two layers are kept apart:

- RootConfig: the ordered root resolution (explicit value, then
  ``PYVER_ROOT``, then ``<HOME>/.pyver``). The environment is injected so
  the chain can be exercised without touching ``os.environ``.
- PyverConfig: optional settings loaded from a YAML file (download
  location, product name, build flags).

Example config file::

    root: ~/pythons
    download_url: https://www.python.org/ftp/python/{version}/{filename}
    product: Python
    timeout: 120
    configure_args:
      - --enable-optimizations
    jobs: 8
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from pyver.core.exceptions import ConfigError, EnvironmentLookupError

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "PYVER_ROOT"
HOME_ENV_VAR = "HOME"
DEFAULT_ROOT_NAME = ".pyver"

DEFAULT_DOWNLOAD_URL = "https://www.python.org/ftp/python/{version}/{filename}"
DEFAULT_PRODUCT = "Python"
DEFAULT_TIMEOUT = 60


@dataclass
class RootConfig:
    """Inputs to root directory resolution."""

    explicit_root: Optional[str] = None
    environ: Optional[Mapping[str, str]] = None

    def resolve(self) -> Path:
        """
        Resolve the base root directory.

        Returns:
            Root path (not yet created)

        Raises:
            EnvironmentLookupError: If no explicit root, no PYVER_ROOT and no HOME
        """
        environ = os.environ if self.environ is None else self.environ

        if self.explicit_root:
            root = self.explicit_root
            logger.debug(f"Using explicit root: {root}")
        elif environ.get(ROOT_ENV_VAR):
            root = environ[ROOT_ENV_VAR]
            logger.debug(f"Using root from {ROOT_ENV_VAR}: {root}")
        else:
            home = environ.get(HOME_ENV_VAR)
            if not home:
                raise EnvironmentLookupError(HOME_ENV_VAR)
            root = os.path.join(home, DEFAULT_ROOT_NAME)
            logger.debug(f"Using default root: {root}")

        return Path(os.path.expanduser(root))


def resolve_root(config: RootConfig) -> Path:
    """Resolve the base root directory described by ``config``."""
    return config.resolve()


def _is_positive_int(value: Any) -> bool:
    # YAML booleans load as bool, which is an int subclass
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass
class PyverConfig:
    """Settings for fetching and building Python versions."""

    root: Optional[str] = None
    download_url: str = DEFAULT_DOWNLOAD_URL
    product: str = DEFAULT_PRODUCT
    timeout: int = DEFAULT_TIMEOUT
    configure_args: List[str] = field(default_factory=list)
    jobs: Optional[int] = None

    def archive_name(self, version: str) -> str:
        """Deterministic archive file name for ``version``."""
        return f"{self.product}-{version}.tgz"

    def archive_url(self, version: str) -> str:
        """Remote location of the source archive for ``version``."""
        return self.download_url.format(
            version=version, filename=self.archive_name(version)
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PyverConfig":
        """
        Build configuration from a parsed YAML mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong type
        """
        known = {"root", "download_url", "product", "timeout", "configure_args", "jobs"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        config = cls()

        for key in ("root", "download_url", "product"):
            if key in data and data[key] is not None:
                if not isinstance(data[key], str):
                    raise ConfigError(f"'{key}' must be a string")
                setattr(config, key, data[key])

        try:
            config.archive_url("0.0.0")
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigError(
                f"'download_url' may only use {{version}} and {{filename}}: {e}"
            ) from e

        for key in ("timeout", "jobs"):
            if key in data and data[key] is not None:
                if not _is_positive_int(data[key]):
                    raise ConfigError(f"'{key}' must be a positive integer")
                setattr(config, key, data[key])

        if "configure_args" in data and data["configure_args"] is not None:
            args = data["configure_args"]
            if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
                raise ConfigError("'configure_args' must be a list of strings")
            config.configure_args = list(args)

        return config


def load_config(config_file: Optional[Path], required: bool = False) -> PyverConfig:
    """
    Load pyver configuration from a YAML file.

    Args:
        config_file: Path to YAML file, or None for defaults
        required: If True, raise error if file doesn't exist

    Returns:
        PyverConfig (defaults when no file is given or an optional file is missing)

    Raises:
        ConfigError: If the file is required but missing, or is not valid
    """
    if config_file is None:
        return PyverConfig()

    config_file = Path(config_file)
    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return PyverConfig()

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {config_file} must be a mapping")

    return PyverConfig.from_dict(data)
