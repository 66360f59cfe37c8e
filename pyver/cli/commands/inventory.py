"""
Inventory commands: ``list`` and ``cached``.

Both print one entry name per line from a directory under the root.
"""

import logging

from pyver.cli.utils import load_cli_config, resolve_cli_root
from pyver.core.directory import SOURCES_DIR, VERSIONS_DIR, get_relative_to_root
from pyver.core.filesystem import list_entries

logger = logging.getLogger(__name__)


def _print_contents(args, child: str) -> int:
    config = load_cli_config(args)
    directory = get_relative_to_root(resolve_cli_root(args, config), child)
    logger.debug(f"Listing {directory}")

    for entry in list_entries(directory):
        print(entry.name)

    return 0


def run_list(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    return _print_contents(args, VERSIONS_DIR)


def run_cached(args) -> int:
    """
    Run the cached command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    return _print_contents(args, SOURCES_DIR)
