"""
Standardised error handling for the catalog hierarchy console.
Includes user-facing helpers for Streamlit UI.
"""

import logging
import traceback
from datetime import datetime
from typing import Optional, Dict, Any, Callable
from enum import Enum
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


_SEVERITY_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class ErrorCategory(Enum):
    """Error categories for better classification."""
    HIERARCHY_VALIDATION = "hierarchy_validation"
    RECORD_VALIDATION = "record_validation"
    SELECTION = "selection"
    UI_RENDERING = "ui_rendering"
    SYSTEM = "system"


@dataclass
class ErrorContext:
    """Context information for errors."""
    operation: str
    record_id: Optional[str] = None
    user_data: Optional[Dict[str, Any]] = None
    session_info: Optional[Dict[str, Any]] = None


class CatalogTreeError(Exception):
    """Base exception class for the catalog hierarchy console."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context
        self.original_exception = original_exception
        super().__init__(self.message)

    def get_user_friendly_message(self) -> str:
        friendly_messages = {
            ErrorCategory.HIERARCHY_VALIDATION: "The selected parent would create a loop in the hierarchy. Please choose a different parent.",
            ErrorCategory.RECORD_VALIDATION: "The records contain invalid or unexpected values. Please review the source data.",
            ErrorCategory.SELECTION: "The selection could not be applied. Please try again.",
            ErrorCategory.UI_RENDERING: "There was a display issue. Please refresh the page and try again.",
            ErrorCategory.SYSTEM: "A system error occurred. Please try again or contact support.",
        }
        return friendly_messages.get(self.category, self.message)

    def get_technical_details(self) -> Dict[str, Any]:
        details = {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
        }

        if self.context:
            details["context"] = {
                "operation": self.context.operation,
                "record_id": self.context.record_id,
            }

        if self.original_exception:
            details["original_exception"] = {
                "type": type(self.original_exception).__name__,
                "message": str(self.original_exception),
                "traceback": traceback.format_exc(),
            }

        return details


class HierarchyCycleError(CatalogTreeError):
    """Raised when assigning a parent would make a record its own ancestor."""

    def __init__(self, message: str, child_id: str = None, proposed_parent_id: str = None, **kwargs):
        self.child_id = child_id
        self.proposed_parent_id = proposed_parent_id
        kwargs.setdefault("severity", ErrorSeverity.HIGH)
        super().__init__(message=message, category=ErrorCategory.HIERARCHY_VALIDATION, **kwargs)

    def get_technical_details(self) -> Dict[str, Any]:
        details = super().get_technical_details()
        details.update(
            {
                "child_id": self.child_id,
                "proposed_parent_id": self.proposed_parent_id,
            }
        )
        return details


class RecordValidationError(CatalogTreeError):
    """Specific error for record source issues (missing columns, unreadable frames)."""

    def __init__(self, message: str, field_name: str = None, value: Any = None, **kwargs):
        self.field_name = field_name
        self.value = value
        super().__init__(message=message, category=ErrorCategory.RECORD_VALIDATION, **kwargs)


class ErrorHandler:
    """Centralised error handling and logging."""

    def __init__(self, logger_name: str = "catalog_tree"):
        self.logger = logging.getLogger(logger_name)
        self._setup_logger()
        self._error_count = 0
        self._session_errors = []

    def _setup_logger(self):
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    @property
    def error_count(self) -> int:
        return self._error_count

    def handle_error(self, error: CatalogTreeError) -> None:
        technical_details = error.get_technical_details()
        self._error_count += 1
        self._session_errors.append(
            {"timestamp": datetime.now().isoformat(), "error": error, "details": technical_details}
        )

        self.logger.log(
            _SEVERITY_LOG_LEVELS[error.severity],
            f"{error.category.value} error ({error.severity.value}): {technical_details}",
        )

    def log_exception(
        self,
        operation: str,
        exception: Exception,
        context: Optional[ErrorContext] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
    ) -> CatalogTreeError:
        category = self._categorize_exception(exception)
        wrapped = CatalogTreeError(
            message=f"Error in {operation}: {str(exception)}",
            category=category,
            severity=severity,
            context=context,
            original_exception=exception,
        )
        self.handle_error(wrapped)
        return wrapped

    def _categorize_exception(self, exception: Exception) -> ErrorCategory:
        category_map = {
            "ValueError": ErrorCategory.RECORD_VALIDATION,
            "TypeError": ErrorCategory.RECORD_VALIDATION,
            "KeyError": ErrorCategory.RECORD_VALIDATION,
            "AttributeError": ErrorCategory.SYSTEM,
            "ImportError": ErrorCategory.SYSTEM,
            "ModuleNotFoundError": ErrorCategory.SYSTEM,
            "MemoryError": ErrorCategory.SYSTEM,
            "RecursionError": ErrorCategory.SYSTEM,
        }
        return category_map.get(type(exception).__name__, ErrorCategory.SYSTEM)


def safe_execute(
    operation_name: str,
    func: Callable,
    *args,
    context: Optional[ErrorContext] = None,
    error_handler: Optional[ErrorHandler] = None,
    default_return=None,
    **kwargs,
) -> Any:
    """Safely execute a function with standardised error handling."""
    if error_handler is None:
        error_handler = ErrorHandler()

    try:
        return func(*args, **kwargs)
    except CatalogTreeError as tree_error:
        error_handler.handle_error(tree_error)
        raise
    except Exception as e:
        wrapped = error_handler.log_exception(operation_name, e, context)
        if wrapped.severity in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]:
            raise wrapped
        return default_return


def create_error_context(operation: str, record_id: str = None, **kwargs) -> ErrorContext:
    """Helper function to create error context."""
    return ErrorContext(
        operation=operation,
        record_id=record_id,
        user_data=kwargs.get("user_data"),
        session_info=kwargs.get("session_info"),
    )


# UI helpers (Streamlit)

_SEVERITY_BANNERS = {
    ErrorSeverity.CRITICAL: ("🚨 **Critical Error:**", "error_box"),
    ErrorSeverity.HIGH: ("❌ **Error:**", "error_box"),
    ErrorSeverity.MEDIUM: ("⚠️ **Warning:**", "warning_box"),
    ErrorSeverity.LOW: ("ℹ️ **Notice:**", "info_box"),
}


def display_error_to_user(error: CatalogTreeError, show_technical_details: bool = False) -> None:
    """Show ``error`` in the themed box for its severity."""
    import streamlit as st
    from ..ui import theme

    prefix, box_name = _SEVERITY_BANNERS[error.severity]
    box = getattr(theme, box_name)
    st.markdown(box(f"{prefix} {error.get_user_friendly_message()}"), unsafe_allow_html=True)

    if show_technical_details:
        with st.expander("🔧 Technical Details", expanded=False):
            st.json(error.get_technical_details())


def streamlit_safe_execute(
    operation_name: str,
    func: Callable,
    *args,
    show_error_to_user: bool = True,
    default_return=None,
    **kwargs,
) -> Any:
    """Run ``func`` for a widget action; failures are logged and shown, never raised."""
    import streamlit as st
    from .session_state import SessionStateKeys

    error_handler = ErrorHandler()

    try:
        return func(*args, **kwargs)
    except CatalogTreeError as e:
        error_handler.handle_error(e)
        reported = e
    except Exception as e:
        context = create_error_context(operation_name)
        reported = error_handler.log_exception(operation_name, e, context)

    if show_error_to_user:
        display_error_to_user(reported, st.session_state.get(SessionStateKeys.DEBUG_MODE, False))
    return default_return
