"""
Build command implementation.

Fetches, extracts and (with --no-dry-run) builds a Python version.
"""

import logging

from pyver.build.pipeline import BuildPipeline
from pyver.cli.utils import load_cli_config, resolve_cli_root

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = load_cli_config(args)
    pipeline = BuildPipeline(root=resolve_cli_root(args, config), config=config)

    logger.debug(f"Building {args.version} (no_dry_run={args.no_dry_run})")
    pipeline.ensure_installed(args.version, dry_run=not args.no_dry_run)

    return 0
