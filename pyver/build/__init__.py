"""
Build pipeline for pyver.
"""

from .executor import BuildExecutor
from .pipeline import BuildPipeline, ensure_installed

__all__ = ["BuildExecutor", "BuildPipeline", "ensure_installed"]
