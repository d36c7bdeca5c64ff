"""
Session State Management Testing
Tests for canonical keys and picker state cleanup.
"""

import unittest
from unittest.mock import patch

from catalog_tree.system.session_state import (
    SessionStateGroups,
    SessionStateKeys,
    clear_edit_state,
    clear_hierarchy_state,
    clear_picker_state,
    get_picker_controller,
    get_state_debug_info,
    store_picker_controller,
    tree_select_key,
)


class TestSessionStateKeys(unittest.TestCase):
    """Test session state key constants."""

    def test_tree_select_key(self):
        self.assertEqual(tree_select_key("parent"), "tree_select_parent")
        self.assertEqual(
            tree_select_key("parent", SessionStateKeys.TREE_SELECT_SEARCH_SUFFIX),
            "tree_select_parent_search",
        )

    def test_groups_defined(self):
        self.assertIn(SessionStateKeys.CATEGORY_RECORDS, SessionStateGroups.RECORD_DATA)
        self.assertIn(SessionStateKeys.CURRENT_CATEGORY_ID, SessionStateGroups.EDIT_STATE)
        self.assertIn(SessionStateKeys.DEBUG_MODE, SessionStateGroups.USER_PREFERENCES)

    def test_every_plain_key_belongs_to_a_group(self):
        """Fixed keys are all grouped; only tree select key patterns stand alone."""
        plain_keys = {
            value for name, value in vars(SessionStateKeys).items()
            if name.isupper() and not name.startswith("TREE_SELECT_")
        }
        grouped = set(
            SessionStateGroups.RECORD_DATA
            + SessionStateGroups.EDIT_STATE
            + SessionStateGroups.USER_PREFERENCES
            + SessionStateGroups.SYSTEM_MONITORING
        )
        self.assertEqual(plain_keys, grouped)


class TestPickerState(unittest.TestCase):
    """Test picker controller storage and cleanup."""

    @patch("streamlit.session_state", new_callable=dict)
    def test_store_and_get_controller(self, mock_state):
        self.assertIsNone(get_picker_controller("parent"))
        marker = object()
        store_picker_controller("parent", marker)
        self.assertIs(get_picker_controller("parent"), marker)
        self.assertIn("tree_select_parent_controller", mock_state)

    @patch("streamlit.session_state", new_callable=dict)
    def test_clear_single_picker(self, mock_state):
        mock_state.update({
            "tree_select_parent_controller": 1,
            "tree_select_parent_search": "au",
            "tree_select_parent_check_A": True,
            "tree_select_parents_controller": 2,
            "tree_select_families_controller": 3,
            SessionStateKeys.DEBUG_MODE: True,
        })

        clear_picker_state("parent")

        self.assertEqual(
            set(mock_state),
            {"tree_select_parents_controller", "tree_select_families_controller", SessionStateKeys.DEBUG_MODE},
        )

    @patch("streamlit.session_state", new_callable=dict)
    def test_clear_all_pickers(self, mock_state):
        mock_state.update({
            "tree_select_parent_controller": 1,
            "tree_select_families_search": "sh",
            SessionStateKeys.DEBUG_MODE: True,
        })

        clear_picker_state()

        self.assertEqual(set(mock_state), {SessionStateKeys.DEBUG_MODE})

    @patch("streamlit.session_state", new_callable=dict)
    def test_clear_hierarchy_state_keeps_preferences(self, mock_state):
        mock_state.update({
            SessionStateKeys.CATEGORY_RECORDS: [],
            SessionStateKeys.FAMILY_RECORDS: [],
            SessionStateKeys.CURRENT_CATEGORY_ID: "cat-1",
            SessionStateKeys.LINKED_FAMILY_IDS: ["fam-1"],
            SessionStateKeys.SESSION_ID: "ab12cd34",
            "tree_select_parent_controller": 1,
            SessionStateKeys.DEBUG_MODE: True,
            SessionStateKeys.DEFAULT_EXPAND_ALL: True,
        })

        clear_hierarchy_state()

        self.assertEqual(
            set(mock_state),
            {SessionStateKeys.DEBUG_MODE, SessionStateKeys.DEFAULT_EXPAND_ALL, SessionStateKeys.SESSION_ID},
        )

    @patch("streamlit.session_state", new_callable=dict)
    def test_clear_edit_state(self, mock_state):
        mock_state[SessionStateKeys.LINKED_FAMILY_IDS] = ["fam-1"]
        mock_state[SessionStateKeys.CURRENT_CATEGORY_ID] = "cat-1"
        clear_edit_state()
        self.assertNotIn(SessionStateKeys.LINKED_FAMILY_IDS, mock_state)
        self.assertNotIn(SessionStateKeys.CURRENT_CATEGORY_ID, mock_state)

    @patch("streamlit.session_state", new_callable=dict)
    def test_debug_info(self, mock_state):
        mock_state.update({
            "tree_select_parent_controller": 1,
            "tree_select_parent_search": "",
            "tree_select_families_controller": 2,
            "stray_key": 1,
            SessionStateKeys.SESSION_ID: "ab12cd34",
            SessionStateKeys.DEBUG_MODE: False,
        })

        info = get_state_debug_info()

        self.assertEqual(info["total_keys"], 6)
        self.assertEqual(info["pickers"], 2)
        self.assertEqual(info["unknown_keys"], ["stray_key"])


if __name__ == "__main__":
    unittest.main()
