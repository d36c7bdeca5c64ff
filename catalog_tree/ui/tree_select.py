"""
Streamlit tree select widget.

One ``TreeSelectController`` per widget key lives in ``st.session_state``;
widget callbacks call its actions, and every rerun renders its current
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import streamlit as st

from ..hierarchy.models import TreeNode
from ..hierarchy.node_index import build_parent_map, iter_nodes
from ..selection.controller import TreeSelectController
from ..selection.state import SelectionMode, TreeSelectConfig
from ..system.debug_logger import get_debug_logger
from ..system.session_state import (
    SessionStateKeys,
    get_picker_controller,
    store_picker_controller,
    tree_select_key,
)
from .theme import ComponentThemes, create_info_box_style


@dataclass(frozen=True)
class TreeRow:
    """One rendered line of the picker."""
    node: TreeNode
    depth: int
    has_children: bool
    expanded: bool
    selected: bool


def flatten_visible_rows(controller: TreeSelectController) -> List[TreeRow]:
    """Rows the picker shows: visible nodes in order, skipping children of collapsed nodes."""
    rows: List[TreeRow] = []
    stack: List[Tuple[TreeNode, int]] = [(node, 0) for node in reversed(controller.visible_nodes)]

    while stack:
        node, depth = stack.pop()
        expanded = controller.is_expanded(node.id)
        rows.append(TreeRow(
            node=node,
            depth=depth,
            has_children=node.has_children,
            expanded=expanded,
            selected=controller.is_selected(node),
        ))
        if node.has_children and expanded:
            stack.extend((child, depth + 1) for child in reversed(node.children))
    return rows


def _forest_signature(options: Sequence[TreeNode]) -> List[tuple]:
    """Flat pre-order description of a forest, comparable without recursion."""
    parents = build_parent_map(options)
    return [
        (node.id, parents[node.id], node.value, node.label, node.description, node.disabled)
        for node in iter_nodes(options)
    ]


def _reconfigure(controller: TreeSelectController, config: TreeSelectConfig) -> TreeSelectController:
    """New controller for ``config`` carrying over selection, search and visibility."""
    previous = controller.state
    if config.mode == controller.mode:
        rebuilt = TreeSelectController(
            controller.options,
            config,
            value=previous.value,
            selected_values=previous.selected_values,
        )
    else:
        rebuilt = TreeSelectController(controller.options, config)

    if previous.search_term:
        rebuilt.set_search_term(previous.search_term)
    if previous.is_open:
        rebuilt.open()
    return rebuilt


def get_tree_select_controller(
    key: str,
    options: List[TreeNode],
    config: Optional[TreeSelectConfig] = None,
    value: Optional[str] = None,
    selected_values: Optional[List[str]] = None,
) -> TreeSelectController:
    """
    Fetch or create the controller for ``key`` and bring it up to date.

    ``value`` and ``selected_values`` seed a new controller only; callers that
    own the selection push changes with ``sync_value`` /
    ``sync_selected_values``. A different ``config`` replaces the controller,
    keeping the selection when the mode is unchanged. A changed options list
    is treated as a rebuilt forest.
    """
    controller = get_picker_controller(key)
    if controller is None:
        controller = TreeSelectController(options, config, value=value, selected_values=selected_values)
        store_picker_controller(key, controller)
        return controller

    if config is not None and config != controller.config:
        controller = _reconfigure(controller, config)
        store_picker_controller(key, controller)

    if controller.options is not options and _forest_signature(controller.options) != _forest_signature(options):
        controller.set_options(options)
    return controller


def _search_key(key: str) -> str:
    return tree_select_key(key, SessionStateKeys.TREE_SELECT_SEARCH_SUFFIX)


def _on_search(controller: TreeSelectController, search_key: str) -> None:
    term = st.session_state.get(search_key, "")
    controller.set_search_term(term)
    logger = get_debug_logger()
    logger.log_filter_result(term, len(controller.visible_nodes), len(controller.auto_expand_ids))


def _on_select(controller: TreeSelectController, value: str, search_key: str) -> None:
    controller.select_node(value)
    # Single selection clears the search; keep the text box in step.
    st.session_state[search_key] = controller.state.search_term
    get_debug_logger().log_user_action("select_node", {"value": value, "selection": controller.selected_values})


def _on_clear(controller: TreeSelectController) -> None:
    controller.clear()
    get_debug_logger().log_user_action("clear_selection")


def _on_toggle_open(controller: TreeSelectController) -> None:
    if controller.state.is_open:
        controller.close()
    else:
        controller.open()


def _render_row(controller: TreeSelectController, row: TreeRow, key: str, container) -> None:
    node = row.node
    toggle_col, select_col = container.columns([1, 12])

    if row.has_children:
        toggle_col.button(
            "▾" if row.expanded else "▸",
            key=f"{tree_select_key(key)}_expand_{node.id}",
            on_click=controller.toggle_expand,
            args=(node.id,),
        )

    indent = "\u2003" * row.depth
    label = f"{indent}{node.label}"
    if node.description:
        label += f"  \n{indent}:gray[{node.description}]"

    if controller.mode == SelectionMode.MULTIPLE:
        checkbox_key = f"{tree_select_key(key)}_check_{node.id}"
        # Cascades change many nodes at once; reset each checkbox from the controller.
        st.session_state[checkbox_key] = row.selected
        select_col.checkbox(
            label,
            key=checkbox_key,
            disabled=node.disabled,
            on_change=_on_select,
            args=(controller, node.value, _search_key(key)),
        )
    else:
        select_col.button(
            label,
            key=f"{tree_select_key(key)}_select_{node.id}",
            disabled=node.disabled,
            type="primary" if row.selected else "secondary",
            on_click=_on_select,
            args=(controller, node.value, _search_key(key)),
        )


def render_tree_select(
    key: str,
    options: List[TreeNode],
    config: Optional[TreeSelectConfig] = None,
    label: Optional[str] = None,
    value: Optional[str] = None,
    selected_values: Optional[List[str]] = None,
    help_text: Optional[str] = None,
    container=None,
) -> Union[Optional[str], List[str]]:
    """
    Render a tree select picker and return its current selection.

    Returns:
        The selected value in single mode, the list of selected values in
        multiple mode
    """
    if container is None:
        container = st

    controller = get_tree_select_controller(key, options, config, value, selected_values)
    summary = controller.summary()

    if label:
        container.markdown(f"**{label}**")

    header_col, clear_col = container.columns([6, 1])
    header_col.button(
        f"{summary.text}  {'▴' if controller.state.is_open else '▾'}",
        key=f"{tree_select_key(key)}_trigger",
        on_click=_on_toggle_open,
        args=(controller,),
        use_container_width=True,
    )
    clear_col.button(
        "✕",
        key=f"{tree_select_key(key)}_clear",
        disabled=not controller.has_selection,
        on_click=_on_clear,
        args=(controller,),
        help="Clear selection",
    )
    if help_text:
        container.caption(help_text)

    if controller.state.is_open:
        with container.container(border=True):
            if controller.config.searchable:
                search_key = _search_key(key)
                if search_key not in st.session_state:
                    st.session_state[search_key] = controller.state.search_term
                st.text_input(
                    "🔎 Search",
                    key=search_key,
                    on_change=_on_search,
                    args=(controller, search_key),
                )

            rows = flatten_visible_rows(controller)
            if not rows:
                st.markdown(
                    create_info_box_style(ComponentThemes.PICKER_SELECTION_SUMMARY, controller.config.empty_state),
                    unsafe_allow_html=True,
                )
            for row in rows:
                _render_row(controller, row, key, st)

    if controller.mode == SelectionMode.MULTIPLE:
        return controller.selected_values
    return controller.value
