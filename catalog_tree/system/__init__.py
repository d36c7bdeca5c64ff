"""
System utilities for the catalog hierarchy console
Provides error handling, session state and debugging functionality
"""

from .debug_logger import get_debug_logger, render_debug_controls
from .error_handling import CatalogTreeError, HierarchyCycleError, RecordValidationError

__all__ = [
    # Debug and logging
    'get_debug_logger',
    'render_debug_controls',

    # Errors
    'CatalogTreeError',
    'HierarchyCycleError',
    'RecordValidationError',
]
