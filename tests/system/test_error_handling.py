"""
Error handling tests: exception types, the central handler and safe execution.
"""

import unittest
from unittest.mock import patch

from catalog_tree.system.error_handling import (
    CatalogTreeError,
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    HierarchyCycleError,
    RecordValidationError,
    create_error_context,
    display_error_to_user,
    safe_execute,
    streamlit_safe_execute,
)
from catalog_tree.system.session_state import SessionStateKeys
from catalog_tree.ui.theme import ThemeColors


class TestErrorTypes(unittest.TestCase):
    def test_cycle_error_defaults(self):
        error = HierarchyCycleError("loop", child_id="A", proposed_parent_id="C")

        self.assertIsInstance(error, CatalogTreeError)
        self.assertEqual(error.severity, ErrorSeverity.HIGH)
        self.assertEqual(error.category, ErrorCategory.HIERARCHY_VALIDATION)
        self.assertIn("loop in the hierarchy", error.get_user_friendly_message())

        details = error.get_technical_details()
        self.assertEqual(details["child_id"], "A")
        self.assertEqual(details["proposed_parent_id"], "C")
        self.assertEqual(details["category"], "hierarchy_validation")

    def test_record_validation_error(self):
        error = RecordValidationError("missing column", field_name="parent_id", value=["id"])
        self.assertEqual(error.category, ErrorCategory.RECORD_VALIDATION)
        self.assertEqual(error.severity, ErrorSeverity.MEDIUM)
        self.assertEqual(error.field_name, "parent_id")

    def test_context_in_technical_details(self):
        context = create_error_context("assign_parent", record_id="cat-1", user_data={"parent": "cat-2"})
        error = CatalogTreeError("failed", context=context)

        self.assertEqual(context.user_data, {"parent": "cat-2"})
        self.assertEqual(
            error.get_technical_details()["context"],
            {"operation": "assign_parent", "record_id": "cat-1"},
        )


class TestErrorHandler(unittest.TestCase):
    def test_handle_error_counts(self):
        handler = ErrorHandler("catalog_tree.test")
        handler.handle_error(CatalogTreeError("one", severity=ErrorSeverity.LOW))
        handler.handle_error(CatalogTreeError("two"))
        self.assertEqual(handler.error_count, 2)

    def test_log_exception_wraps_and_categorises(self):
        handler = ErrorHandler("catalog_tree.test")
        original = KeyError("id")

        wrapped = handler.log_exception("load_records", original)

        self.assertEqual(wrapped.category, ErrorCategory.RECORD_VALIDATION)
        self.assertIs(wrapped.original_exception, original)
        self.assertIn("load_records", wrapped.message)


class TestSafeExecute(unittest.TestCase):
    def test_returns_result(self):
        self.assertEqual(safe_execute("add", lambda a, b: a + b, 1, 2), 3)

    def test_plain_exception_returns_default(self):
        def _fail():
            raise ValueError("bad")

        self.assertEqual(safe_execute("fail", _fail, default_return="fallback"), "fallback")

    def test_catalog_errors_propagate(self):
        def _fail():
            raise HierarchyCycleError("loop")

        with self.assertRaises(HierarchyCycleError):
            safe_execute("fail", _fail)


class TestStreamlitSafeExecute(unittest.TestCase):
    @patch("streamlit.markdown")
    @patch("streamlit.session_state", new_callable=dict)
    def test_error_shown_and_default_returned(self, mock_state, mock_markdown):
        def _fail():
            raise HierarchyCycleError("loop", child_id="A", proposed_parent_id="B")

        result = streamlit_safe_execute("save_parent", _fail, default_return="unchanged")

        self.assertEqual(result, "unchanged")
        rendered = mock_markdown.call_args[0][0]
        self.assertIn("loop in the hierarchy", rendered)

    @patch("streamlit.markdown")
    @patch("streamlit.session_state", new_callable=dict)
    def test_success_renders_nothing(self, mock_state, mock_markdown):
        self.assertEqual(streamlit_safe_execute("noop", lambda: "ok"), "ok")
        mock_markdown.assert_not_called()

    @patch("streamlit.json")
    @patch("streamlit.expander")
    @patch("streamlit.markdown")
    @patch("streamlit.session_state", new_callable=dict)
    def test_debug_mode_adds_technical_details(self, mock_state, mock_markdown, mock_expander, mock_json):
        mock_state[SessionStateKeys.DEBUG_MODE] = True

        def _fail():
            raise KeyError("parent_id")

        streamlit_safe_execute("load_records", _fail)

        mock_expander.assert_called_once()
        details = mock_json.call_args[0][0]
        self.assertEqual(details["category"], "record_validation")
        self.assertEqual(details["original_exception"]["type"], "KeyError")


class TestDisplayErrorToUser(unittest.TestCase):
    """Each severity renders in its own themed box."""

    @patch("streamlit.expander")
    @patch("streamlit.markdown")
    def test_severity_selects_box(self, mock_markdown, mock_expander):
        cases = [
            (ErrorSeverity.CRITICAL, ThemeColors.RED, "Critical Error"),
            (ErrorSeverity.HIGH, ThemeColors.RED, "**Error:**"),
            (ErrorSeverity.MEDIUM, ThemeColors.AMBER, "Warning"),
            (ErrorSeverity.LOW, ThemeColors.BLUE, "Notice"),
        ]
        for severity, colour, prefix in cases:
            with self.subTest(severity=severity):
                error = CatalogTreeError("boom", category=ErrorCategory.SELECTION, severity=severity)
                display_error_to_user(error)

                rendered = mock_markdown.call_args[0][0]
                self.assertIn(colour, rendered)
                self.assertIn(prefix, rendered)
                self.assertIn("selection could not be applied", rendered)

        mock_expander.assert_not_called()


if __name__ == "__main__":
    unittest.main()
