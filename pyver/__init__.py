"""
pyver - A Python version manager.

Fetches CPython source archives, builds them and installs each version under
its own prefix in a single root directory.
"""

__version__ = "0.1.0"
