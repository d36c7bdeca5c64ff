import uuid
from datetime import datetime

import pandas as pd
import streamlit as st

from catalog_tree.hierarchy import (
    CatalogRecord,
    ancestor_path,
    assert_no_cycle,
    build_hierarchy_tree,
    catalog_accessors,
    forest_to_dataframe,
    hierarchy_highlight_ids,
    invalid_parent_ids,
    iter_nodes,
    records_from_dataframe,
    with_current_record,
)
from catalog_tree.selection import TreeSelectConfig
from catalog_tree.system import get_debug_logger, render_debug_controls
from catalog_tree.system.error_handling import streamlit_safe_execute
from catalog_tree.system.session_state import SessionStateKeys, clear_picker_state
from catalog_tree.system.version import APP_DESCRIPTION, APP_FULL_NAME, __version__
from catalog_tree.ui import render_hierarchy_tree_view, render_tree_select
from catalog_tree.ui.theme import ComponentThemes, create_info_box_style, info_box, success_box


# Page configuration
st.set_page_config(
    page_title=APP_FULL_NAME,
    layout="wide"
)


SAMPLE_CATEGORIES = pd.DataFrame(
    [
        {"id": "cat-root", "parent_id": None, "name": "All Products", "key": "ALL"},
        {"id": "cat-elec", "parent_id": "cat-root", "name": "Electronics", "key": "ELEC"},
        {"id": "cat-audio", "parent_id": "cat-elec", "name": "Audio", "key": "AUDIO"},
        {"id": "cat-head", "parent_id": "cat-audio", "name": "Headphones", "key": "HEAD"},
        {"id": "cat-tv", "parent_id": "cat-elec", "name": "Televisions", "key": "TV"},
        {"id": "cat-home", "parent_id": "cat-root", "name": "Home & Garden", "key": "HOME"},
        {"id": "cat-kitchen", "parent_id": "cat-home", "name": "Kitchen", "key": "KITCHEN"},
        {"id": "cat-outlet", "parent_id": "cat-archived", "name": "Outlet", "key": "OUTLET"},
    ]
)

SAMPLE_FAMILIES = pd.DataFrame(
    [
        {"id": "fam-apparel", "parent_id": None, "name": "Apparel", "key": "APPAREL"},
        {"id": "fam-shoes", "parent_id": "fam-apparel", "name": "Shoes", "key": "SHOES"},
        {"id": "fam-run", "parent_id": "fam-shoes", "name": "Running Shoes", "key": "RUN"},
        {"id": "fam-devices", "parent_id": None, "name": "Devices", "key": "DEVICES"},
        {"id": "fam-phones", "parent_id": "fam-devices", "name": "Phones", "key": "PHONES"},
    ]
)


def _load_records():
    """Load category and family records into session state once per session."""
    if SessionStateKeys.SESSION_ID not in st.session_state:
        st.session_state[SessionStateKeys.SESSION_ID] = uuid.uuid4().hex[:8]
    if SessionStateKeys.CATEGORY_RECORDS not in st.session_state:
        st.session_state[SessionStateKeys.CATEGORY_RECORDS] = records_from_dataframe(
            SAMPLE_CATEGORIES, "id", "parent_id", "name", key_column="key"
        )
    if SessionStateKeys.FAMILY_RECORDS not in st.session_state:
        st.session_state[SessionStateKeys.FAMILY_RECORDS] = records_from_dataframe(
            SAMPLE_FAMILIES, "id", "parent_id", "name", key_column="key"
        )
        st.session_state[SessionStateKeys.RECORDS_LOADED_AT] = datetime.now()
    return (
        st.session_state[SessionStateKeys.CATEGORY_RECORDS],
        st.session_state[SessionStateKeys.FAMILY_RECORDS],
    )


def _save_parent(records, category_id, parent_id):
    """Apply a new parent to the record being edited after a hard cycle check."""
    accessors = catalog_accessors()
    assert_no_cycle(records, category_id, parent_id, accessors)

    updated = [
        CatalogRecord(r.id, parent_id, r.label, r.description, r.key) if r.id == category_id else r
        for r in records
    ]
    st.session_state[SessionStateKeys.CATEGORY_RECORDS] = updated
    return updated


def main():
    render_debug_controls()
    debug_logger = get_debug_logger()

    categories, families = _load_records()

    st.title("🗂️ Catalog Hierarchy")
    loaded_at = st.session_state.get(SessionStateKeys.RECORDS_LOADED_AT)
    st.caption(
        f"v{__version__} · {APP_DESCRIPTION}"
        + (f" · records loaded {loaded_at:%H:%M:%S}" if loaded_at else "")
    )

    category_ids = [r.id for r in categories]
    current_id = st.sidebar.selectbox(
        "Category being edited",
        category_ids,
        index=category_ids.index(st.session_state.get(SessionStateKeys.CURRENT_CATEGORY_ID, category_ids[1])),
        format_func=lambda cid: next(r.label for r in categories if r.id == cid),
    )
    if st.session_state.get(SessionStateKeys.CURRENT_CATEGORY_ID) != current_id:
        st.session_state[SessionStateKeys.CURRENT_CATEGORY_ID] = current_id
        clear_picker_state("category_parent")

    expand_all = st.sidebar.checkbox(
        "Expand whole hierarchy",
        value=st.session_state.get(SessionStateKeys.DEFAULT_EXPAND_ALL, False),
    )
    st.session_state[SessionStateKeys.DEFAULT_EXPAND_ALL] = expand_all

    current = next(r for r in categories if r.id == current_id)
    options = with_current_record(categories, current)

    blocked = invalid_parent_ids(options, current_id, catalog_accessors())
    debug_logger.log_invalid_parents(current_id, blocked)

    category_tree = build_hierarchy_tree(options, catalog_accessors(invalid_ids=blocked))
    debug_logger.log_build_summary(
        "category", len(options), len(category_tree), sum(1 for _ in iter_nodes(category_tree))
    )

    col1, col2 = st.columns([1, 1])

    with col1:
        st.subheader("Parent Category")
        labels = {r.id: r.label for r in options}
        path = ancestor_path(options, current_id, catalog_accessors())
        st.markdown(
            create_info_box_style(
                ComponentThemes.HIERARCHY_PATH,
                " › ".join([labels[i] for i in path] + [f"<b>{current.label}</b>"]),
            ),
            unsafe_allow_html=True,
        )
        st.markdown(
            create_info_box_style(
                ComponentThemes.CYCLE_GUARD_NOTICE,
                f"{len(blocked)} choice(s) disabled: a category cannot sit under itself or its descendants.",
            ),
            unsafe_allow_html=True,
        )
        parent_id = render_tree_select(
            "category_parent",
            category_tree,
            TreeSelectConfig(placeholder="No parent (root category)", default_expand_all=expand_all),
            value=current.parent_id,
        )

        if st.button("💾 Save Parent", type="primary", disabled=parent_id == current.parent_id):
            saved = streamlit_safe_execute(
                "save_parent",
                _save_parent,
                options,
                current_id,
                parent_id,
            )
            if saved is not None:
                st.toast("Parent updated", icon="✅")
                st.rerun()

    with col2:
        st.subheader("Linked Families")
        family_tree = build_hierarchy_tree(families, catalog_accessors())
        linked = render_tree_select(
            "linked_families",
            family_tree,
            TreeSelectConfig(multiple=True, max_tag_count=3, placeholder="Select families"),
        )
        st.session_state[SessionStateKeys.LINKED_FAMILY_IDS] = linked
        if linked:
            st.markdown(success_box(f"{len(linked)} families linked"), unsafe_allow_html=True)
        else:
            st.markdown(info_box("Selecting a family also selects every family below it."), unsafe_allow_html=True)

    st.markdown("---")
    render_hierarchy_tree_view(
        build_hierarchy_tree(options, catalog_accessors()),
        active_id=current_id,
        highlight_ids=hierarchy_highlight_ids(options, current_id, catalog_accessors()),
    )

    with st.expander("📋 Flat Category Table", expanded=False):
        st.dataframe(forest_to_dataframe(category_tree), use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()
