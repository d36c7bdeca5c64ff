"""
Catalog Tree
Hierarchy tree model and interactive selection engine for the product catalog console.
"""

from .system.version import __version__

__all__ = ["__version__"]
