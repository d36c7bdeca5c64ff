"""
Centralized Theme Constants for the catalog hierarchy console

Usage:
    from catalog_tree.ui.theme import info_box

    st.markdown(info_box("Parent updated"), unsafe_allow_html=True)
"""


class ThemeColors:
    """Canonical color definitions"""

    TEXT = "#FAFAFA"

    BLUE = "#28546B"  # Info/neutral messages
    PURPLE = "#5B2758"  # Hierarchy path highlights
    GREEN = "#1F4E3D"  # Success states
    AMBER = "#7A5F0B"  # Warning states, disabled choices
    RED = "#660022"  # Error states


class ThemeSpacing:
    """Spacing constants for consistent UI layout"""

    PADDING_STANDARD = "0.75rem"
    BORDER_RADIUS = "0.5rem"
    MARGIN_STANDARD = "0.5rem"


class ComponentThemes:
    """Theme configurations for specific UI components"""

    PICKER_SELECTION_SUMMARY = ThemeColors.BLUE
    HIERARCHY_PATH = ThemeColors.PURPLE
    CYCLE_GUARD_NOTICE = ThemeColors.AMBER


def create_info_box_style(
    background_color: str,
    text: str,
    margin_bottom: str = ThemeSpacing.MARGIN_STANDARD,
    extra_styles: str = ""
) -> str:
    """
    Create a styled info box with consistent theme formatting

    Args:
        background_color: Background color for the box
        text: Text content for the box
        margin_bottom: Bottom margin (default: standard margin)
        extra_styles: Additional CSS styles to append

    Returns:
        Formatted HTML string for st.markdown()
    """
    base_style = f"""
        background-color: {background_color};
        padding: {ThemeSpacing.PADDING_STANDARD};
        border-radius: {ThemeSpacing.BORDER_RADIUS};
        color: {ThemeColors.TEXT};
        text-align: left;
        margin-bottom: {margin_bottom};
        {extra_styles}
    """

    return f"""
    <div style="{base_style.strip()}">
        {text}
    </div>
    """


def info_box(text: str, margin_bottom: str = ThemeSpacing.MARGIN_STANDARD) -> str:
    """Create blue info box - most common pattern"""
    return create_info_box_style(ThemeColors.BLUE, text, margin_bottom)


def success_box(text: str, margin_bottom: str = ThemeSpacing.MARGIN_STANDARD) -> str:
    """Create green success box"""
    return create_info_box_style(ThemeColors.GREEN, text, margin_bottom)


def warning_box(text: str, margin_bottom: str = ThemeSpacing.MARGIN_STANDARD) -> str:
    """Create amber warning box"""
    return create_info_box_style(ThemeColors.AMBER, text, margin_bottom)


def error_box(text: str, margin_bottom: str = ThemeSpacing.MARGIN_STANDARD) -> str:
    """Create red error box"""
    return create_info_box_style(ThemeColors.RED, text, margin_bottom)
