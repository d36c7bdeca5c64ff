"""
Cycle prevention for parent pickers.

``invalid_parent_ids`` only marks choices to disable in the UI. Callers that
assign parents outside the picker can opt into ``assert_no_cycle``.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..system.error_handling import HierarchyCycleError, create_error_context
from .models import HierarchyAccessors, T
from .tree_builder import resolve_parent_map

logger = logging.getLogger(__name__)


def _ancestors(parent_map: Dict[str, Optional[str]], record_id: str) -> List[str]:
    """Ancestor ids of ``record_id``, nearest first."""
    chain: List[str] = []
    current = parent_map.get(record_id)
    while current is not None:
        chain.append(current)
        current = parent_map.get(current)
    return chain


def invalid_parent_ids(
    records: Iterable[T],
    self_id: str,
    accessors: HierarchyAccessors[T],
) -> Set[str]:
    """
    Ids that must not be offered as the parent of ``self_id``.

    Always contains ``self_id``; also contains every record whose resolved
    ancestor chain passes through ``self_id``.
    """
    children: Dict[str, List[str]] = {}
    for record_id, parent_id in resolve_parent_map(records, accessors).items():
        if parent_id is not None:
            children.setdefault(parent_id, []).append(record_id)

    blocked = {self_id}
    pending = [self_id]
    while pending:
        for child_id in children.get(pending.pop(), []):
            if child_id not in blocked:
                blocked.add(child_id)
                pending.append(child_id)
    return blocked


def ancestor_path(
    records: Iterable[T],
    record_id: str,
    accessors: HierarchyAccessors[T],
) -> List[str]:
    """Root-first ancestor ids of ``record_id``; empty for roots and unknown ids."""
    parent_map = resolve_parent_map(records, accessors)
    return list(reversed(_ancestors(parent_map, record_id)))


def hierarchy_highlight_ids(
    records: Iterable[T],
    record_id: str,
    accessors: HierarchyAccessors[T],
) -> List[str]:
    """The chain highlighted on a detail page: ancestors, then the record itself."""
    return ancestor_path(records, record_id, accessors) + [record_id]


def assert_no_cycle(
    records: Iterable[T],
    child_id: str,
    proposed_parent_id: Optional[str],
    accessors: HierarchyAccessors[T],
) -> None:
    """
    Reject a parent assignment that would make ``child_id`` its own ancestor.

    Clearing the parent (None) is always allowed.

    Raises:
        HierarchyCycleError: when the proposed parent is the child or one of
            its descendants
    """
    if not proposed_parent_id:
        return

    records = list(records)
    if proposed_parent_id in invalid_parent_ids(records, child_id, accessors):
        logger.debug(f"Rejected parent {proposed_parent_id} for {child_id}")
        raise HierarchyCycleError(
            f"Cannot place {child_id} under {proposed_parent_id}: "
            f"{proposed_parent_id} is {child_id} or one of its descendants",
            child_id=child_id,
            proposed_parent_id=proposed_parent_id,
            context=create_error_context("assign_parent", record_id=child_id),
        )
