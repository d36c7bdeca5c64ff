"""
Tree node and accessor types shared by the hierarchy builder, index and filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, Set, TypeVar

T = TypeVar("T")

NodeComparator = Callable[["TreeNode", "TreeNode"], int]


@dataclass
class TreeNode:
    """A selectable node derived from exactly one record."""
    id: str
    value: str
    label: str
    description: Optional[str] = None
    disabled: bool = False
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def _fields_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "value": self.value,
            "label": self.label,
        }
        if self.description:
            result["description"] = self.description
        if self.disabled:
            result["disabled"] = True
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to a nested dictionary for JSON export."""
        root = self._fields_dict()
        stack = [(self, root)]
        while stack:
            node, data = stack.pop()
            if node.children:
                data["children"] = [child._fields_dict() for child in node.children]
                stack.extend(zip(node.children, data["children"]))
        return root


@dataclass
class HierarchyAccessors(Generic[T]):
    """
    How to read a record of type ``T`` as a hierarchy entry.

    ``get_value`` defaults to the id; some callers select by a different field.
    ``comparator`` orders siblings; when omitted, labels are compared
    case- and accent-insensitively. Ties are always broken by id.
    """
    get_id: Callable[[T], str]
    get_parent_id: Callable[[T], Optional[str]]
    get_label: Callable[[T], str]
    get_description: Optional[Callable[[T], Optional[str]]] = None
    get_disabled: Optional[Callable[[T], bool]] = None
    get_value: Optional[Callable[[T], str]] = None
    comparator: Optional[NodeComparator] = None


@dataclass
class FilterResult:
    """Pruned forest for a search term plus the ids to expand to reveal matches."""
    nodes: List[TreeNode]
    auto_expand_ids: Set[str] = field(default_factory=set)
