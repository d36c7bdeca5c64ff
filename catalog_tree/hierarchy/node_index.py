"""
Lookups over a built forest: value indexes, root-to-node paths and descendants.

Walks use an explicit stack; parent chains can be deeper than the
interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .models import TreeNode


def iter_nodes(nodes: Iterable[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node of a forest in pre-order."""
    stack = list(nodes)
    stack.reverse()
    while stack:
        node = stack.pop()
        yield node
        if node.children:
            stack.extend(reversed(node.children))


def index_all(nodes: Iterable[TreeNode]) -> Dict[str, TreeNode]:
    """Map value -> node for the whole forest."""
    return {node.value: node for node in iter_nodes(nodes)}


def index_selected(nodes: Iterable[TreeNode], selected_values: Iterable[str]) -> Dict[str, TreeNode]:
    """Map value -> node for selected values only; the first node seen for a value wins."""
    wanted = set(selected_values)
    selected: Dict[str, TreeNode] = {}
    if not wanted:
        return selected

    for node in iter_nodes(nodes):
        if node.value in wanted and node.value not in selected:
            selected[node.value] = node
    return selected


def find_path_to_node(nodes: Iterable[TreeNode], target_value: str) -> Optional[List[str]]:
    """
    Depth-first search for ``target_value``.

    Returns:
        Node ids from the root down to and including the first match in
        pre-order, or None
    """
    # visited[i] = (node id, index of its parent in visited)
    visited: List[Tuple[str, int]] = []
    stack: List[Tuple[TreeNode, int]] = [(node, -1) for node in reversed(list(nodes))]

    while stack:
        node, parent_index = stack.pop()
        visited.append((node.id, parent_index))
        if node.value == target_value:
            path: List[str] = []
            index = len(visited) - 1
            while index >= 0:
                node_id, index = visited[index]
                path.append(node_id)
            path.reverse()
            return path

        own_index = len(visited) - 1
        stack.extend((child, own_index) for child in reversed(node.children))
    return None


def collect_descendant_values(node: Optional[TreeNode]) -> List[str]:
    """Values strictly below ``node``, in pre-order."""
    if node is None or not node.children:
        return []
    return [child.value for child in iter_nodes(node.children)]


def build_parent_map(nodes: Iterable[TreeNode]) -> Dict[str, Optional[str]]:
    """Map node id -> parent node id (None for roots)."""
    parent_map: Dict[str, Optional[str]] = {}
    stack: List[Tuple[TreeNode, Optional[str]]] = [(node, None) for node in nodes]
    while stack:
        node, parent_id = stack.pop()
        parent_map[node.id] = parent_id
        stack.extend((child, node.id) for child in node.children)
    return parent_map


def collect_initial_expanded(nodes: Iterable[TreeNode], expand_all: bool = False) -> Set[str]:
    """Ids expanded when a view first opens: roots with children, or every parent node."""
    if not expand_all:
        return {node.id for node in nodes if node.children}
    return {node.id for node in iter_nodes(nodes) if node.children}
