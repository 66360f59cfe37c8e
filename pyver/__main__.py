"""
Entry point for running pyver as a module.

Usage: python -m pyver [command] [options]
"""

from pyver.cli.parser import main

if __name__ == "__main__":
    main()
