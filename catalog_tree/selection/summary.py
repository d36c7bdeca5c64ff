"""Selected-summary shown on a closed picker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..hierarchy.models import TreeNode


@dataclass(frozen=True)
class SelectionSummary:
    tags: Tuple[str, ...]
    overflow_count: int = 0
    placeholder: Optional[str] = None

    @property
    def is_placeholder(self) -> bool:
        return not self.tags and not self.overflow_count

    @property
    def text(self) -> str:
        if self.is_placeholder:
            return self.placeholder or ""
        parts = [", ".join(self.tags)] if self.tags else []
        if self.overflow_count:
            parts.append(f"+{self.overflow_count}")
        return " ".join(parts)


def build_selection_summary(
    selected_nodes: Sequence[TreeNode],
    multiple: bool,
    max_tag_count: int = 3,
    placeholder: str = "Select an option",
) -> SelectionSummary:
    """
    Summarise a selection as at most ``max_tag_count`` labels plus an overflow count.

    Single mode shows the one selected label.
    """
    if not selected_nodes:
        return SelectionSummary(tags=(), placeholder=placeholder)

    if not multiple:
        return SelectionSummary(tags=(selected_nodes[0].label,))

    limit = max(0, max_tag_count)
    tags = tuple(node.label for node in selected_nodes[:limit])
    return SelectionSummary(tags=tags, overflow_count=len(selected_nodes) - len(tags), placeholder=placeholder)
