import unittest

from catalog_tree.hierarchy import TreeNode
from catalog_tree.selection import build_selection_summary


def _nodes(*labels):
    return [TreeNode(str(i), str(i), label) for i, label in enumerate(labels)]


class TestSelectionSummary(unittest.TestCase):
    def test_empty_selection_shows_placeholder(self):
        summary = build_selection_summary([], multiple=True, placeholder="Select families")
        self.assertTrue(summary.is_placeholder)
        self.assertEqual(summary.text, "Select families")

    def test_single_mode_shows_label(self):
        summary = build_selection_summary(_nodes("Audio"), multiple=False)
        self.assertEqual(summary.tags, ("Audio",))
        self.assertEqual(summary.text, "Audio")

    def test_within_limit_has_no_overflow(self):
        summary = build_selection_summary(_nodes("Shoes", "Phones"), multiple=True, max_tag_count=3)
        self.assertEqual(summary.overflow_count, 0)
        self.assertEqual(summary.text, "Shoes, Phones")

    def test_overflow_counts_hidden_tags(self):
        summary = build_selection_summary(
            _nodes("Apparel", "Shoes", "Running Shoes", "Devices", "Phones"),
            multiple=True,
            max_tag_count=3,
        )
        self.assertEqual(summary.tags, ("Apparel", "Shoes", "Running Shoes"))
        self.assertEqual(summary.overflow_count, 2)
        self.assertEqual(summary.text, "Apparel, Shoes, Running Shoes +2")

    def test_zero_tag_count_shows_only_overflow(self):
        summary = build_selection_summary(_nodes("A", "B"), multiple=True, max_tag_count=0)
        self.assertFalse(summary.is_placeholder)
        self.assertEqual(summary.text, "+2")

    def test_negative_tag_count_treated_as_zero(self):
        summary = build_selection_summary(_nodes("A"), multiple=True, max_tag_count=-1)
        self.assertEqual(summary.tags, ())
        self.assertEqual(summary.overflow_count, 1)


if __name__ == "__main__":
    unittest.main()
