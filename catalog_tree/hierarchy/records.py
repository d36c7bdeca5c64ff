"""
Catalog record type plus pandas adapters for loading and flattening hierarchies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from ..system.error_handling import RecordValidationError
from .models import HierarchyAccessors, T, TreeNode

FOREST_COLUMNS = ["ID", "Parent ID", "Label", "Description", "Depth", "Path", "Disabled", "Children"]


@dataclass(frozen=True)
class CatalogRecord:
    """A category or family as delivered by the catalog API."""
    id: str
    parent_id: Optional[str]
    label: str
    description: Optional[str] = None
    key: Optional[str] = None


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    text = str(value).strip()
    return text or None


def catalog_accessors(
    invalid_ids: Optional[Iterable[str]] = None,
    key_label: str = "Key",
) -> HierarchyAccessors[CatalogRecord]:
    """
    Accessors for ``CatalogRecord``.

    The label falls back to the key, then the id. Records without their own
    description are described by their key. Ids in ``invalid_ids`` come out
    disabled.
    """
    blocked = set(invalid_ids or [])

    def _label(record: CatalogRecord) -> str:
        return _clean_text(record.label) or record.key or record.id

    def _description(record: CatalogRecord) -> Optional[str]:
        if record.description:
            return record.description
        return f"{key_label}: {record.key}" if record.key else None

    return HierarchyAccessors(
        get_id=lambda record: record.id,
        get_parent_id=lambda record: record.parent_id,
        get_label=_label,
        get_description=_description,
        get_disabled=lambda record: record.id in blocked,
    )


def records_from_dataframe(
    df: pd.DataFrame,
    id_column: str,
    parent_column: str,
    label_column: str,
    description_column: Optional[str] = None,
    key_column: Optional[str] = None,
) -> List[CatalogRecord]:
    """
    Convert a catalog export table into records.

    Blank or missing parents become None. Rows without an id are skipped.

    Raises:
        RecordValidationError: when a named column is missing
    """
    required = [id_column, parent_column, label_column]
    optional = [c for c in (description_column, key_column) if c]
    for column in required + optional:
        if column not in df.columns:
            raise RecordValidationError(
                f"Column '{column}' not found in record table",
                field_name=column,
                value=list(df.columns),
            )

    records: List[CatalogRecord] = []
    for row in df.to_dict("records"):
        record_id = _clean_text(row.get(id_column))
        if not record_id:
            continue
        key = _clean_text(row.get(key_column)) if key_column else None
        records.append(
            CatalogRecord(
                id=record_id,
                parent_id=_clean_text(row.get(parent_column)),
                label=_clean_text(row.get(label_column)) or key or record_id,
                description=_clean_text(row.get(description_column)) if description_column else None,
                key=key,
            )
        )
    return records


def with_current_record(
    records: List[T],
    current: Optional[T],
    get_id: Callable[[T], str] = lambda record: record.id,
) -> List[T]:
    """Append the record being edited when the loaded options do not contain it yet."""
    if current is None:
        return records
    current_id = get_id(current)
    if any(get_id(record) == current_id for record in records):
        return records
    return list(records) + [current]


def forest_to_dataframe(nodes: List[TreeNode]) -> pd.DataFrame:
    """Flatten a forest into one pre-order row per node."""
    rows: List[Dict[str, Any]] = []
    stack: List[Tuple[TreeNode, Optional[str], int, str]] = [
        (node, None, 0, "") for node in reversed(nodes)
    ]

    while stack:
        node, parent_id, depth, path = stack.pop()
        node_path = f"{path} > {node.label}" if path else node.label
        rows.append({
            "ID": node.id,
            "Parent ID": parent_id,
            "Label": node.label,
            "Description": node.description or "",
            "Depth": depth,
            "Path": node_path,
            "Disabled": node.disabled,
            "Children": len(node.children),
        })
        stack.extend((child, node.id, depth + 1, node_path) for child in reversed(node.children))

    return pd.DataFrame(rows, columns=FOREST_COLUMNS)
