"""
Streamlit components for the catalog hierarchy console
"""

from .tree_select import render_tree_select, flatten_visible_rows, get_tree_select_controller
from .hierarchy_view import render_hierarchy_tree_view, build_hierarchy_lines

__all__ = [
    'render_tree_select',
    'flatten_visible_rows',
    'get_tree_select_controller',
    'render_hierarchy_tree_view',
    'build_hierarchy_lines',
]
