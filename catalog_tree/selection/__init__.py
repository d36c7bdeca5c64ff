"""
Interactive selection over a hierarchy forest
"""

from .state import SelectionMode, SelectionState, TreeSelectConfig
from .summary import SelectionSummary, build_selection_summary
from .controller import TreeSelectController

__all__ = [
    'SelectionMode',
    'SelectionState',
    'TreeSelectConfig',
    'SelectionSummary',
    'build_selection_summary',
    'TreeSelectController',
]
