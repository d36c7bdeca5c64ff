"""
Hierarchy building blocks: forest construction, lookups, search filtering
and cycle prevention.
"""

from .models import TreeNode, HierarchyAccessors, FilterResult
from .tree_builder import build_hierarchy_tree, resolve_parent_map, sort_forest
from .node_index import (
    iter_nodes,
    index_all,
    index_selected,
    find_path_to_node,
    collect_descendant_values,
    build_parent_map,
    collect_initial_expanded,
)
from .tree_filter import filter_tree, node_matches_search
from .cycle_guard import invalid_parent_ids, ancestor_path, hierarchy_highlight_ids, assert_no_cycle
from .records import (
    CatalogRecord,
    catalog_accessors,
    records_from_dataframe,
    with_current_record,
    forest_to_dataframe,
)

__all__ = [
    'TreeNode',
    'HierarchyAccessors',
    'FilterResult',
    'build_hierarchy_tree',
    'resolve_parent_map',
    'sort_forest',
    'iter_nodes',
    'index_all',
    'index_selected',
    'find_path_to_node',
    'collect_descendant_values',
    'build_parent_map',
    'collect_initial_expanded',
    'filter_tree',
    'node_matches_search',
    'invalid_parent_ids',
    'ancestor_path',
    'hierarchy_highlight_ids',
    'assert_no_cycle',
    'CatalogRecord',
    'catalog_accessors',
    'records_from_dataframe',
    'with_current_record',
    'forest_to_dataframe',
]
