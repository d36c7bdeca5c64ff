"""
Read-only hierarchy view used on category and family detail pages.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import streamlit as st

from ..hierarchy.models import TreeNode
from ..hierarchy.node_index import iter_nodes

CURRENT_MARKER = "[Current]"
HIGHLIGHT_MARKER = "*"


def _node_text(node: TreeNode, active_id: Optional[str], highlight: set) -> str:
    text = node.label
    if node.description:
        text += f" ({node.description})"
    if active_id is not None and node.value == active_id:
        text += f" {CURRENT_MARKER}"
    elif node.value in highlight or node.id in highlight:
        text += f" {HIGHLIGHT_MARKER}"
    return text


def build_hierarchy_lines(
    nodes: List[TreeNode],
    active_id: Optional[str] = None,
    highlight_ids: Optional[Iterable[str]] = None,
) -> List[str]:
    """Build ASCII tree lines for a forest in file-browser style."""
    highlight = set(highlight_ids or [])
    lines: List[str] = []
    # (node, prefix, is_last); a None prefix marks a root
    stack: List[Tuple[TreeNode, Optional[str], bool]] = [(root, None, True) for root in reversed(nodes)]

    while stack:
        node, prefix, is_last = stack.pop()
        node_text = _node_text(node, active_id, highlight)
        if prefix is None:
            lines.append(f"🌲 {node_text}")
            child_prefix = "    "
        else:
            connector = "+--" if is_last else "|--"
            lines.append(f"{prefix}{connector} {node_text}")
            child_prefix = prefix + ("      " if is_last else "|     ")

        last = len(node.children) - 1
        stack.extend(
            (child, child_prefix, idx == last)
            for idx, child in reversed(list(enumerate(node.children)))
        )
    return lines


def render_hierarchy_tree_view(
    nodes: List[TreeNode],
    active_id: Optional[str] = None,
    highlight_ids: Optional[Iterable[str]] = None,
    empty_state: str = "No hierarchy data available.",
    title: str = "🌲 Hierarchy",
) -> None:
    """Render the forest read-only, marking the current record and its chain."""
    if not nodes:
        st.info(empty_state)
        return

    lines = build_hierarchy_lines(nodes, active_id, highlight_ids)
    with st.expander(title, expanded=True):
        st.code("\n".join(lines))
        st.caption(
            f"Roots: {len(nodes)}  |  "
            f"Total nodes: {sum(1 for _ in iter_nodes(nodes))}"
            + (f"  |  {CURRENT_MARKER} current record, {HIGHLIGHT_MARKER} its ancestors" if active_id else "")
        )
