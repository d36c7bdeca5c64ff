"""
Search filtering that keeps matches in place inside their ancestor chain.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Set, Tuple

from .models import FilterResult, TreeNode


def node_matches_search(node: TreeNode, search: str) -> bool:
    """True when the lowercased ``search`` occurs in the node's label or description."""
    if search in (node.label or "").lower():
        return True
    return bool(node.description) and search in node.description.lower()


def filter_tree(nodes: List[TreeNode], term: Optional[str]) -> FilterResult:
    """
    Prune a forest down to the nodes matching ``term`` and their ancestors.

    A blank term returns the forest itself. Otherwise every surviving node is
    a copy whose children are only its surviving children; the input forest
    is left untouched.

    Args:
        nodes: Forest to search
        term: Free-text search, matched case-insensitively

    Returns:
        FilterResult with the pruned forest and the ids of nodes kept only
        because something below them matched
    """
    search = (term or "").strip().lower()
    if not search:
        return FilterResult(nodes=nodes, auto_expand_ids=set())

    auto_expand: Set[str] = set()
    # Filtered copy (or None) per input node, keyed by object identity.
    kept: Dict[int, Optional[TreeNode]] = {}

    def _surviving(siblings: List[TreeNode]) -> List[TreeNode]:
        return [kept[id(node)] for node in siblings if kept[id(node)] is not None]

    # Post-order: a node is decided only after all of its children.
    stack: List[Tuple[TreeNode, bool]] = [(node, False) for node in nodes]
    while stack:
        node, children_done = stack.pop()
        if not children_done:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue

        filtered_children = _surviving(node.children)
        matches_self = node_matches_search(node, search)

        if not matches_self and not filtered_children:
            kept[id(node)] = None
            continue
        if not matches_self:
            auto_expand.add(node.id)
        kept[id(node)] = replace(node, children=filtered_children)

    return FilterResult(nodes=_surviving(nodes), auto_expand_ids=auto_expand)
