"""
Picker configuration and the immutable selection snapshot produced by every action.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class SelectionMode(Enum):
    """Selection cardinality of a picker."""
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class TreeSelectConfig:
    """Options recognised by a tree select picker."""
    multiple: bool = False
    searchable: bool = True
    max_tag_count: int = 3  # summary truncation only, never limits the selection
    placeholder: str = "Select an option"
    empty_state: str = "No options available."
    default_expand_all: bool = False

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.MULTIPLE if self.multiple else SelectionMode.SINGLE


@dataclass(frozen=True)
class SelectionState:
    """
    Snapshot of one picker.

    ``value`` is used in single mode and ``selected_values`` in multiple mode.
    ``selected_values`` keeps insertion order for display but is compared as a set
    by callers.
    """
    is_open: bool = False
    value: Optional[str] = None
    selected_values: Tuple[str, ...] = ()
    expanded_ids: FrozenSet[str] = frozenset()
    search_term: str = ""

    @property
    def search_active(self) -> bool:
        return bool(self.search_term.strip())

    def selection(self, mode: SelectionMode) -> Tuple[str, ...]:
        """Selected values for ``mode`` as a tuple, empty when nothing is selected."""
        if mode == SelectionMode.MULTIPLE:
            return self.selected_values
        return (self.value,) if self.value is not None else ()
