"""
Tree select widget tests: visible row flattening and per-key controller storage.
"""

import unittest
from unittest.mock import patch

from catalog_tree.hierarchy import CatalogRecord, build_hierarchy_tree, catalog_accessors
from catalog_tree.selection import TreeSelectConfig, TreeSelectController
from catalog_tree.system.session_state import SessionStateKeys, tree_select_key
from catalog_tree.ui import flatten_visible_rows, get_tree_select_controller


def _records():
    return [
        CatalogRecord("A", None, "Alpha"),
        CatalogRecord("B", "A", "Beta"),
        CatalogRecord("C", "B", "Gamma"),
        CatalogRecord("D", None, "Delta"),
    ]


def _forest(records=None):
    return build_hierarchy_tree(records or _records(), catalog_accessors())


class TestFlattenVisibleRows(unittest.TestCase):
    def test_collapsed_forest_shows_roots(self):
        rows = flatten_visible_rows(TreeSelectController(_forest()))
        self.assertEqual([(r.node.id, r.depth) for r in rows], [("A", 0), ("D", 0)])
        self.assertTrue(rows[0].has_children)
        self.assertFalse(rows[0].expanded)
        self.assertFalse(rows[1].has_children)

    def test_expanded_nodes_show_children(self):
        controller = TreeSelectController(_forest())
        controller.toggle_expand("A")

        rows = flatten_visible_rows(controller)

        self.assertEqual([(r.node.id, r.depth) for r in rows], [("A", 0), ("B", 1), ("D", 0)])

    def test_collapsed_parent_hides_expanded_child(self):
        controller = TreeSelectController(_forest())
        controller.toggle_expand("B")
        self.assertEqual([r.node.id for r in flatten_visible_rows(controller)], ["A", "D"])

    def test_search_reveals_match(self):
        controller = TreeSelectController(_forest())
        controller.set_search_term("gamma")

        rows = flatten_visible_rows(controller)

        self.assertEqual([(r.node.id, r.depth) for r in rows], [("A", 0), ("B", 1), ("C", 2)])

    def test_selected_flag(self):
        controller = TreeSelectController(_forest(), TreeSelectConfig(multiple=True))
        controller.toggle_multi_select("B")

        rows = {r.node.id: r for r in flatten_visible_rows(controller)}

        self.assertFalse(rows["A"].selected)
        self.assertTrue(rows["B"].selected)
        self.assertTrue(rows["C"].selected)


class TestGetTreeSelectController(unittest.TestCase):
    @patch("streamlit.session_state", new_callable=dict)
    def test_controller_created_once_per_key(self, mock_state):
        first = get_tree_select_controller("parent", _forest(), value="C")
        second = get_tree_select_controller("parent", _forest(), value="D")

        self.assertIs(first, second)
        self.assertEqual(second.value, "C")
        self.assertIn(
            tree_select_key("parent", SessionStateKeys.TREE_SELECT_CONTROLLER_SUFFIX),
            mock_state,
        )

    @patch("streamlit.session_state", new_callable=dict)
    def test_changed_options_rebuild_controller_forest(self, mock_state):
        controller = get_tree_select_controller(
            "families", _forest(), TreeSelectConfig(multiple=True), selected_values=["B", "C"]
        )

        get_tree_select_controller("families", _forest([r for r in _records() if r.id != "C"]))

        self.assertEqual(controller.selected_values, ["B"])

    @patch("streamlit.session_state", new_callable=dict)
    def test_keys_are_independent(self, mock_state):
        first = get_tree_select_controller("one", _forest())
        second = get_tree_select_controller("two", _forest())
        self.assertIsNot(first, second)

    @patch("streamlit.session_state", new_callable=dict)
    def test_changed_config_replaces_controller(self, mock_state):
        first = get_tree_select_controller("parent", _forest(), TreeSelectConfig(), value="A")
        first.open()

        second = get_tree_select_controller("parent", _forest(), TreeSelectConfig(default_expand_all=True))

        self.assertIsNot(first, second)
        self.assertTrue(second.config.default_expand_all)
        self.assertEqual(second.value, "A")
        self.assertTrue(second.state.is_open)
        self.assertFalse(first.is_expanded("B"))
        self.assertTrue(second.is_expanded("B"))
        self.assertIs(get_tree_select_controller("parent", _forest()), second)

    @patch("streamlit.session_state", new_callable=dict)
    def test_equal_or_missing_config_keeps_controller(self, mock_state):
        first = get_tree_select_controller("parent", _forest(), TreeSelectConfig(placeholder="Pick"))

        self.assertIs(get_tree_select_controller("parent", _forest(), TreeSelectConfig(placeholder="Pick")), first)
        self.assertIs(get_tree_select_controller("parent", _forest()), first)

    @patch("streamlit.session_state", new_callable=dict)
    def test_mode_change_starts_empty(self, mock_state):
        first = get_tree_select_controller("families", _forest(), TreeSelectConfig(), value="B")
        first.set_search_term("gam")

        controller = get_tree_select_controller("families", _forest(), TreeSelectConfig(multiple=True))

        self.assertEqual(controller.selected_values, [])
        self.assertIsNone(controller.value)
        self.assertEqual(controller.state.search_term, "gam")

    @patch("streamlit.session_state", new_callable=dict)
    def test_config_and_options_change_together(self, mock_state):
        get_tree_select_controller(
            "families", _forest(), TreeSelectConfig(multiple=True), selected_values=["B", "C"]
        )

        controller = get_tree_select_controller(
            "families",
            _forest([r for r in _records() if r.id != "C"]),
            TreeSelectConfig(multiple=True, max_tag_count=1),
        )

        self.assertEqual(controller.config.max_tag_count, 1)
        self.assertEqual(controller.selected_values, ["B"])


if __name__ == "__main__":
    unittest.main()
