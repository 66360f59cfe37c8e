"""
Shared utilities for CLI commands.
"""

import logging
from pathlib import Path
from typing import Optional

from pyver.core.config import PyverConfig, load_config

logger = logging.getLogger(__name__)


def load_cli_config(args) -> PyverConfig:
    """
    Load configuration selected by ``--config``.

    A file named explicitly on the command line must exist.

    Args:
        args: Parsed arguments (``config`` may be missing or None)

    Returns:
        PyverConfig
    """
    config_file: Optional[Path] = getattr(args, "config", None)
    return load_config(config_file, required=config_file is not None)


def resolve_cli_root(args, config: PyverConfig) -> Optional[str]:
    """
    Pick the explicit root for a command.

    ``--root`` wins over the config file's ``root``; None defers to
    PYVER_ROOT and then ~/.pyver.
    """
    root = getattr(args, "root", None)
    if root:
        return root
    if config.root:
        logger.debug(f"Using root from configuration: {config.root}")
    return config.root
