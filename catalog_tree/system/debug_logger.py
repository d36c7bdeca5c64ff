"""
Debug Logging Utility
Provides optional debug logging for hierarchy building and picker interaction.
"""

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional

import streamlit as st

from .session_state import SessionStateKeys, clear_hierarchy_state, get_state_debug_info
from .version import __version__


class HierarchyDebugLogger:
    """
    Debug logger for tree building, filtering and selection changes.
    Provides structured logging for troubleshooting picker behaviour.
    """

    def __init__(self, enable_debug: bool = False):
        """
        Initialise the debug logger.

        Args:
            enable_debug: Whether to enable debug logging
        """
        self.enable_debug = enable_debug
        self.logger = logging.getLogger('catalog_tree.debug')

        if self.enable_debug:
            self.logger.setLevel(logging.DEBUG)
            self.logger.propagate = False

            formatter = logging.Formatter(
                '[%(levelname)s][%(name)s] %(message)s'
            )

            # Keep a single managed handler so formatting stays consistent.
            self.logger.handlers.clear()

            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.DEBUG)
            console_handler.setFormatter(formatter)

            self.logger.addHandler(console_handler)

    def log_build_summary(self, source: str, record_count: int, root_count: int, node_count: int) -> None:
        """Log the outcome of a forest build."""
        if not self.enable_debug:
            return

        self.logger.info(f"Built {source} hierarchy: {record_count} records, "
                         f"{root_count} roots, {node_count} nodes")
        if record_count and node_count != record_count:
            self.logger.debug(f"{record_count - node_count} records shared an id with an earlier record")

    def log_filter_result(self, term: str, visible_roots: int, auto_expand_count: int) -> None:
        """Log a search pass over a picker."""
        if not self.enable_debug:
            return

        self.logger.debug(f"Search '{term}': {visible_roots} visible roots, "
                          f"{auto_expand_count} nodes auto-expanded")

    def log_invalid_parents(self, record_id: str, invalid_ids) -> None:
        """Log the parent choices disabled for a record."""
        if not self.enable_debug:
            return

        self.logger.info(f"Cycle guard for {record_id}: {len(invalid_ids)} parent choices disabled")
        self.logger.debug(f"Disabled parents: {sorted(invalid_ids)}")

    def log_user_action(self, action: str, details: Optional[Dict] = None) -> None:
        """Log user actions for audit trail."""
        if not self.enable_debug:
            return

        details_str = f" - Details: {json.dumps(details, default=str)}" if details else ""
        self.logger.info(f"User action: {action}{details_str}")


def get_debug_logger() -> HierarchyDebugLogger:
    """
    Get a debug logger instance based on Streamlit settings.

    Returns:
        HierarchyDebugLogger instance
    """
    enable_debug = st.session_state.get(SessionStateKeys.DEBUG_MODE, False)

    return HierarchyDebugLogger(enable_debug)


def _is_cloud_environment() -> bool:
    return bool(
        os.getenv('STREAMLIT_SHARING_MODE')
        or os.getenv('HOSTNAME', '').startswith('streamlit')
        or os.path.exists('/.streamlit')
    )


def render_debug_controls() -> None:
    """
    Render debug controls in Streamlit sidebar as a collapsible section.
    Only shows in local development environment.
    """
    if _is_cloud_environment():
        return

    with st.sidebar.expander("🐛 Debug Options", expanded=False):
        debug_mode = st.checkbox(
            "Enable Debug Logging",
            value=st.session_state.get(SessionStateKeys.DEBUG_MODE, False),
            help="Enable detailed logging of tree builds, searches and selections"
        )

        st.session_state[SessionStateKeys.DEBUG_MODE] = debug_mode

        if debug_mode:
            from ..ui.theme import info_box
            st.markdown(info_box("Debug logging is enabled. Check console output for detailed logs."), unsafe_allow_html=True)

            debug_info = {
                'version': __version__,
                'session_id': st.session_state.get(SessionStateKeys.SESSION_ID, 'unknown'),
                'timestamp': datetime.now().isoformat(),
                'state': get_state_debug_info(),
            }
            st.download_button(
                "💾 Download Debug Info",
                data=json.dumps(debug_info, indent=2, default=str),
                file_name=f"catalog_tree_debug_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json",
                mime="application/json",
                key="download_debug_info",
            )

        st.markdown("---")
        st.markdown("**🗑️ Session Cache Management**")

        if st.button("🚮 Reset Hierarchy State", help="Reload records and discard every picker's selection", type="secondary"):
            clear_hierarchy_state()
            st.session_state[SessionStateKeys.DEBUG_MODE] = debug_mode
            st.rerun()
