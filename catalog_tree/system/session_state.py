"""
Centralised Session State Management for the catalog hierarchy console

Defines canonical session state keys plus cleanup helpers for picker state.
"""

from typing import Any, Dict, Optional
import streamlit as st


class SessionStateKeys:
    """Canonical session state key definitions."""

    # Record source
    CATEGORY_RECORDS = "category_records"
    FAMILY_RECORDS = "family_records"
    RECORDS_LOADED_AT = "records_loaded_at"

    # Record being edited
    CURRENT_CATEGORY_ID = "current_category_id"
    LINKED_FAMILY_IDS = "linked_family_ids"

    # User preferences and modes
    DEBUG_MODE = "debug_mode"
    DEFAULT_EXPAND_ALL = "default_expand_all"

    # Session identity, shown in debug exports
    SESSION_ID = "session_id"

    # Tree select widgets (dynamic keys - patterns)
    TREE_SELECT_PREFIX = "tree_select_"
    TREE_SELECT_SEARCH_SUFFIX = "_search"
    TREE_SELECT_CONTROLLER_SUFFIX = "_controller"


class SessionStateGroups:
    """Logical groupings of session state keys for bulk operations."""

    RECORD_DATA = [
        SessionStateKeys.CATEGORY_RECORDS,
        SessionStateKeys.FAMILY_RECORDS,
        SessionStateKeys.RECORDS_LOADED_AT,
    ]

    EDIT_STATE = [
        SessionStateKeys.CURRENT_CATEGORY_ID,
        SessionStateKeys.LINKED_FAMILY_IDS,
    ]

    USER_PREFERENCES = [
        SessionStateKeys.DEBUG_MODE,
        SessionStateKeys.DEFAULT_EXPAND_ALL,
    ]

    SYSTEM_MONITORING = [
        SessionStateKeys.SESSION_ID,
    ]


def tree_select_key(widget_key: str, suffix: str = "") -> str:
    """Build the session key used by a tree select widget."""
    return f"{SessionStateKeys.TREE_SELECT_PREFIX}{widget_key}{suffix}"


def get_picker_controller(widget_key: str) -> Optional[Any]:
    """Return the controller stored for a tree select widget, if any."""
    return st.session_state.get(
        tree_select_key(widget_key, SessionStateKeys.TREE_SELECT_CONTROLLER_SUFFIX)
    )


def store_picker_controller(widget_key: str, controller: Any) -> None:
    st.session_state[
        tree_select_key(widget_key, SessionStateKeys.TREE_SELECT_CONTROLLER_SUFFIX)
    ] = controller


def clear_picker_state(widget_key: Optional[str] = None) -> None:
    """Discard tree select state; one widget when a key is given, otherwise all of them."""
    if widget_key:
        prefix = tree_select_key(widget_key)
        keys_to_remove = [
            key for key in st.session_state.keys()
            if key == prefix or key.startswith(f"{prefix}_")
        ]
    else:
        keys_to_remove = [
            key for key in st.session_state.keys()
            if key.startswith(SessionStateKeys.TREE_SELECT_PREFIX)
        ]

    for key in keys_to_remove:
        del st.session_state[key]


def clear_edit_state() -> None:
    """Clear the record-being-edited keys."""
    for key in SessionStateGroups.EDIT_STATE:
        if key in st.session_state:
            del st.session_state[key]


def clear_hierarchy_state() -> None:
    """Clear loaded records plus every picker and edit key derived from them."""
    for key in SessionStateGroups.RECORD_DATA:
        if key in st.session_state:
            del st.session_state[key]

    clear_picker_state()
    clear_edit_state()


def get_state_debug_info() -> Dict[str, Any]:
    debug_info = {
        "total_keys": len(st.session_state.keys()),
        "pickers": 0,
        "unknown_keys": [],
    }

    known_keys = set(
        SessionStateGroups.RECORD_DATA
        + SessionStateGroups.EDIT_STATE
        + SessionStateGroups.USER_PREFERENCES
        + SessionStateGroups.SYSTEM_MONITORING
    )
    for key in st.session_state.keys():
        if key.startswith(SessionStateKeys.TREE_SELECT_PREFIX):
            if key.endswith(SessionStateKeys.TREE_SELECT_CONTROLLER_SUFFIX):
                debug_info["pickers"] += 1
        elif key not in known_keys:
            debug_info["unknown_keys"].append(key)

    return debug_info
