"""
Entry point for running pyver CLI as a module.

Usage: python -m pyver.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
