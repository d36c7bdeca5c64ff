"""
Builds a rooted forest from flat records that reference their parent by id.
Pure business logic with no Streamlit dependencies.
"""

from __future__ import annotations

import logging
import unicodedata
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional

from .models import HierarchyAccessors, NodeComparator, T, TreeNode

logger = logging.getLogger(__name__)

_VISITING = 1
_DONE = 2


def _label_sort_key(label: Optional[str]) -> str:
    """Case- and accent-insensitive form of a label."""
    normalized = unicodedata.normalize("NFKD", label or "")
    return "".join(c for c in normalized if not unicodedata.combining(c)).casefold()


def _compare_ids(a: TreeNode, b: TreeNode) -> int:
    return (a.id > b.id) - (a.id < b.id)


def _break_parent_cycles(parent_map: Dict[str, Optional[str]]) -> None:
    """
    Demote one member of every parent loop to a root.

    Each record has at most one parent, so every loop is reached by walking up
    from any of its members. The member with the smallest id is demoted, which
    keeps the result independent of input order.
    """
    state: Dict[str, int] = {}

    for start in sorted(parent_map):
        if start in state:
            continue

        trail: List[str] = []
        current: Optional[str] = start
        while current is not None and current not in state:
            state[current] = _VISITING
            trail.append(current)
            current = parent_map[current]

        if current is not None and state[current] == _VISITING:
            loop = trail[trail.index(current):]
            demoted = min(loop)
            parent_map[demoted] = None
            logger.debug(f"Parent loop {' -> '.join(loop)} broken; {demoted} becomes a root")

        for node_id in trail:
            state[node_id] = _DONE


def resolve_parent_map(
    records: Iterable[T],
    accessors: HierarchyAccessors[T],
) -> Dict[str, Optional[str]]:
    """
    Decide the parent of every record exactly as the tree builder links it.

    A declared parent is kept only when it names another record in the input.
    Missing parents and self references make the record a root.

    Returns:
        Mapping record id -> resolved parent id (None for roots)
    """
    declared: Dict[str, Optional[str]] = {}
    for record in records:
        declared[accessors.get_id(record)] = accessors.get_parent_id(record) or None

    parent_map: Dict[str, Optional[str]] = {}
    for record_id, parent_id in declared.items():
        if parent_id is not None and parent_id != record_id and parent_id in declared:
            parent_map[record_id] = parent_id
        else:
            if parent_id is not None:
                logger.debug(f"Record {record_id} references unknown parent {parent_id}; treated as root")
            parent_map[record_id] = None

    _break_parent_cycles(parent_map)
    return parent_map


def sort_forest(nodes: List[TreeNode], comparator: Optional[NodeComparator] = None) -> None:
    """Sort every sibling list in place, at any depth."""
    if comparator is None:
        def sort_key(node: TreeNode):
            return (_label_sort_key(node.label), node.id)
    else:
        sort_key = cmp_to_key(lambda a, b: comparator(a, b) or _compare_ids(a, b))

    pending = [nodes]
    while pending:
        siblings = pending.pop()
        siblings.sort(key=sort_key)
        pending.extend(node.children for node in siblings if node.children)


def build_hierarchy_tree(
    records: Iterable[T],
    accessors: HierarchyAccessors[T],
) -> List[TreeNode]:
    """
    Build a sorted forest from parent-referencing records.

    Every record yields exactly one node. Malformed parent references never
    raise; the affected record becomes a root instead.

    Args:
        records: Flat records in any order
        accessors: How to read id, parent, label and friends from a record

    Returns:
        Root nodes, sorted, each carrying its sorted subtree
    """
    records = list(records)
    nodes: Dict[str, TreeNode] = {}

    for record in records:
        node_id = accessors.get_id(record)
        nodes[node_id] = TreeNode(
            id=node_id,
            value=accessors.get_value(record) if accessors.get_value else node_id,
            label=accessors.get_label(record) or "",
            description=accessors.get_description(record) if accessors.get_description else None,
            disabled=bool(accessors.get_disabled(record)) if accessors.get_disabled else False,
        )

    parent_map = resolve_parent_map(records, accessors)

    roots: List[TreeNode] = []
    for node_id, node in nodes.items():
        parent_id = parent_map[node_id]
        if parent_id is None:
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)

    sort_forest(roots, accessors.comparator)
    return roots
