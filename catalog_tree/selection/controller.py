"""
Tree select state machine.

Every action returns the new ``SelectionState`` snapshot. Actions that name a
node missing from the current forest, or a disabled node, leave the state
unchanged: the forest may lag behind asynchronously loaded records.
Pure business logic with no Streamlit dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple, Union

from ..hierarchy.models import FilterResult, TreeNode
from ..hierarchy.node_index import (
    collect_descendant_values,
    collect_initial_expanded,
    find_path_to_node,
    index_all,
    index_selected,
    iter_nodes,
)
from ..hierarchy.tree_filter import filter_tree
from .state import SelectionMode, SelectionState, TreeSelectConfig
from .summary import SelectionSummary, build_selection_summary

logger = logging.getLogger(__name__)

NodeRef = Union[TreeNode, str]


class TreeSelectController:
    """Owns selection, expansion and search state for one picker."""

    def __init__(
        self,
        options: Iterable[TreeNode],
        config: Optional[TreeSelectConfig] = None,
        value: Optional[str] = None,
        selected_values: Optional[Iterable[str]] = None,
        on_change: Optional[Callable[[Optional[str]], None]] = None,
        on_selection_change: Optional[Callable[[List[str]], None]] = None,
    ):
        self.config = config or TreeSelectConfig()
        self._on_change = on_change
        self._on_selection_change = on_selection_change
        self._filter_cache: Optional[Tuple[str, FilterResult]] = None
        self._load_options(options)

        expanded: Set[str] = set()
        if self.config.default_expand_all:
            expanded = collect_initial_expanded(self._options, expand_all=True)

        if self.mode == SelectionMode.MULTIPLE:
            state = SelectionState(
                selected_values=tuple(dict.fromkeys(selected_values or ())),
                expanded_ids=frozenset(expanded),
            )
        else:
            state = SelectionState(value=value, expanded_ids=frozenset(expanded))

        self._state = self._expand_selected_ancestors(state)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def mode(self) -> SelectionMode:
        return self.config.mode

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def options(self) -> List[TreeNode]:
        return self._options

    @property
    def value(self) -> Optional[str]:
        return self._state.value

    @property
    def selected_values(self) -> List[str]:
        return list(self._state.selection(self.mode))

    @property
    def has_selection(self) -> bool:
        return bool(self._state.selection(self.mode))

    @property
    def visible_nodes(self) -> List[TreeNode]:
        """Forest to render: the search-filtered forest, or every option."""
        return self._current_filter().nodes

    @property
    def auto_expand_ids(self) -> Set[str]:
        return set(self._current_filter().auto_expand_ids)

    @property
    def selected_nodes(self) -> List[TreeNode]:
        """Selected nodes in selection order; values missing from the forest are skipped."""
        selection = self._state.selection(self.mode)
        found = index_selected(self._options, selection)
        return [found[v] for v in selection if v in found]

    @property
    def selected_option(self) -> Optional[TreeNode]:
        if self.mode == SelectionMode.MULTIPLE:
            return None
        nodes = self.selected_nodes
        return nodes[0] if nodes else None

    def is_selected(self, node: NodeRef) -> bool:
        value = node.value if isinstance(node, TreeNode) else node
        return value in self._state.selection(self.mode)

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._state.expanded_ids

    def summary(self) -> SelectionSummary:
        return build_selection_summary(
            self.selected_nodes,
            multiple=self.mode == SelectionMode.MULTIPLE,
            max_tag_count=self.config.max_tag_count,
            placeholder=self.config.placeholder,
        )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def open(self) -> SelectionState:
        if self._state.is_open:
            return self._state
        return self._commit(replace(self._state, is_open=True))

    def close(self) -> SelectionState:
        if not self._state.is_open:
            return self._state
        return self._commit(replace(self._state, is_open=False))

    def toggle_expand(self, node_id: str) -> SelectionState:
        if node_id not in self._node_ids:
            logger.debug(f"toggle_expand ignored for unknown node {node_id}")
            return self._state

        expanded = set(self._state.expanded_ids)
        if node_id in expanded:
            expanded.discard(node_id)
        else:
            expanded.add(node_id)
        return self._commit(replace(self._state, expanded_ids=frozenset(expanded)))

    def select_node(self, node: NodeRef) -> SelectionState:
        """Apply the click on a node the way the current mode handles it."""
        if self.mode == SelectionMode.MULTIPLE:
            return self.toggle_multi_select(node)
        return self.select_single(node)

    def select_single(self, node: NodeRef) -> SelectionState:
        if self.mode != SelectionMode.SINGLE:
            logger.debug("select_single ignored in multiple mode")
            return self._state

        target = self._selectable(node)
        if target is None:
            return self._state

        state = replace(self._state, value=target.value, is_open=False, search_term="")
        self._commit(self._expand_selected_ancestors(state))
        self._emit()
        return self._state

    def toggle_multi_select(self, node: NodeRef) -> SelectionState:
        """Select or deselect a node together with its whole subtree."""
        if self.mode != SelectionMode.MULTIPLE:
            logger.debug("toggle_multi_select ignored in single mode")
            return self._state

        target = self._selectable(node)
        if target is None:
            return self._state

        cascade = [target.value] + collect_descendant_values(target)
        current = dict.fromkeys(self._state.selected_values)

        if target.value in current:
            for value in cascade:
                current.pop(value, None)
        else:
            for value in cascade:
                current.setdefault(value, None)

        state = replace(self._state, selected_values=tuple(current))
        self._commit(self._expand_selected_ancestors(state))
        self._emit()
        return self._state

    def clear(self) -> SelectionState:
        """Empty the selection; expansion and search are left as they are."""
        if self.mode == SelectionMode.MULTIPLE:
            state = replace(self._state, selected_values=())
        else:
            state = replace(self._state, value=None)
        self._commit(state)
        self._emit()
        return self._state

    def set_search_term(self, term: Optional[str]) -> SelectionState:
        if not self.config.searchable:
            logger.debug("set_search_term ignored on a non-searchable picker")
            return self._state

        state = replace(self._state, search_term=term or "")
        return self._commit(self._expand_search_matches(state))

    def sync_value(self, value: Optional[str]) -> SelectionState:
        """Adopt a single value supplied by the caller."""
        if self.mode != SelectionMode.SINGLE or value == self._state.value:
            return self._state
        return self._commit(self._expand_selected_ancestors(replace(self._state, value=value)))

    def sync_selected_values(self, values: Iterable[str]) -> SelectionState:
        """Adopt a multiple selection supplied by the caller."""
        if self.mode != SelectionMode.MULTIPLE:
            return self._state
        selected = tuple(dict.fromkeys(values))
        if set(selected) == set(self._state.selected_values):
            return self._state
        return self._commit(self._expand_selected_ancestors(replace(self._state, selected_values=selected)))

    def set_options(self, options: Iterable[TreeNode]) -> SelectionState:
        """
        Swap in a rebuilt forest.

        Selected values that existed in the previous forest but are gone from
        the new one are dropped, as are expanded ids with no node. Values never
        seen in any forest are kept: they may belong to records still loading.
        """
        previous_values = set(self._node_map)
        self._load_options(options)
        vanished = previous_values - set(self._node_map)

        previous_selection = self._state.selection(self.mode)
        if self.mode == SelectionMode.MULTIPLE:
            state = replace(
                self._state,
                selected_values=tuple(v for v in self._state.selected_values if v not in vanished),
            )
        else:
            state = replace(
                self._state,
                value=None if self._state.value in vanished else self._state.value,
            )

        state = replace(
            state,
            expanded_ids=frozenset(i for i in state.expanded_ids if i in self._node_ids),
        )
        state = self._expand_search_matches(self._expand_selected_ancestors(state))
        self._commit(state)

        if state.selection(self.mode) != previous_selection:
            self._emit()
        return self._state

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _load_options(self, options: Iterable[TreeNode]) -> None:
        self._options = list(options)
        self._node_map: Dict[str, TreeNode] = index_all(self._options)
        self._node_ids: Set[str] = {node.id for node in iter_nodes(self._options)}
        self._filter_cache = None

    def _commit(self, state: SelectionState) -> SelectionState:
        self._state = state
        return state

    def _emit(self) -> None:
        if self.mode == SelectionMode.MULTIPLE:
            if self._on_selection_change:
                self._on_selection_change(list(self._state.selected_values))
        elif self._on_change:
            self._on_change(self._state.value)

    def _selectable(self, node: NodeRef) -> Optional[TreeNode]:
        """The current forest's node for ``node``, or None when unknown or disabled."""
        value = node.value if isinstance(node, TreeNode) else node
        target = self._node_map.get(value)
        if target is None:
            logger.debug(f"Selection ignored for unknown value {value}")
            return None
        if target.disabled:
            logger.debug(f"Selection ignored for disabled node {target.id}")
            return None
        return target

    def _filter_for(self, term: str) -> FilterResult:
        if self._filter_cache is None or self._filter_cache[0] != term:
            self._filter_cache = (term, filter_tree(self._options, term))
        return self._filter_cache[1]

    def _current_filter(self) -> FilterResult:
        if not self.config.searchable:
            return FilterResult(nodes=self._options, auto_expand_ids=set())
        return self._filter_for(self._state.search_term)

    def _expand_selected_ancestors(self, state: SelectionState) -> SelectionState:
        expanded = set(state.expanded_ids)
        for value in state.selection(self.mode):
            path = find_path_to_node(self._options, value)
            if path:
                expanded.update(path)
        if len(expanded) == len(state.expanded_ids):
            return state
        return replace(state, expanded_ids=frozenset(expanded))

    def _expand_search_matches(self, state: SelectionState) -> SelectionState:
        if not self.config.searchable or not state.search_active:
            return state
        auto_expand = self._filter_for(state.search_term).auto_expand_ids
        if auto_expand <= state.expanded_ids:
            return state
        return replace(state, expanded_ids=state.expanded_ids | frozenset(auto_expand))
