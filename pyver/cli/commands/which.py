"""
Which command implementation.

Prints the interpreter path of the first installed version matching a prefix.
"""

import logging

from pyver.cli.utils import load_cli_config, resolve_cli_root
from pyver.core.directory import VERSIONS_DIR, get_relative_to_root
from pyver.core.filesystem import find_installed

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the which command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)

    Raises:
        NotFoundError: If no installed version starts with ``args.version``
    """
    config = load_cli_config(args)
    versions = get_relative_to_root(resolve_cli_root(args, config), VERSIONS_DIR)

    match = find_installed(versions, args.version)
    logger.debug(f"Matched {args.version} to {match.name}")

    print(match / "bin" / "python3")
    return 0
