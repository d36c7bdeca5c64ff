"""
Pytest configuration for test compatibility helpers.
"""

import logging


def _quiet_streamlit_bare_mode() -> None:
    """
    Silence the "missing ScriptRunContext" warnings Streamlit emits when
    widgets and session state are touched outside ``streamlit run``.
    """
    for name in (
        "streamlit.runtime.scriptrunner_utils.script_run_context",
        "streamlit.runtime.scriptrunner.script_run_context",
        "streamlit.runtime.state.session_state_proxy",
    ):
        logging.getLogger(name).setLevel(logging.ERROR)


_quiet_streamlit_bare_mode()
