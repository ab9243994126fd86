"""
Organization Management Page - hierarchy nodes derived from clubs
"""

import streamlit as st

from src.models import HIERARCHY_ORDER, HierarchyLevel, SelectionState
from src.services import ServiceContainer
from src.dashboard.components.filters import LEVEL_LABELS, HierarchicalFilters


def render(services: ServiceContainer):
    """Main render function"""
    page = services.organization_view

    st.subheader("Organizations")

    col_type, col_search = st.columns([0.3, 0.7], vertical_alignment="bottom")
    with col_type:
        level = st.selectbox(
            "Level",
            HIERARCHY_ORDER,
            format_func=LEVEL_LABELS.get,
            key="org_level"
        )
    with col_search:
        search = st.text_input("Search", key="org_search", placeholder=f"Search {LEVEL_LABELS[level].lower()}...")

    summary = page.get_summary(level)
    metric_col1, metric_col2 = st.columns(2)
    with metric_col1:
        st.metric(f"{LEVEL_LABELS[level]} count", f"{summary.node_count:,}")
    with metric_col2:
        st.metric("Clubs", f"{summary.club_count:,}")

    nodes = page.get_organizations(level, search)
    if not nodes:
        st.info(f"No {LEVEL_LABELS[level].lower()} found")
        return

    col_table, col_chart = st.columns([1, 1])
    with col_table:
        st.dataframe(page.create_organizations_dataframe(nodes), use_container_width=True, hide_index=True)
    with col_chart:
        st.plotly_chart(page.create_club_count_chart(nodes), use_container_width=True)

    st.divider()
    render_edit_preview(services, level, nodes)


def render_edit_preview(services: ServiceContainer, level: HierarchyLevel, nodes):
    """Edit form prefill with a searchable parent picker"""
    page = services.organization_view

    names = [node.name for node in nodes]
    selected_name = st.selectbox("Edit organization", ["Select..."] + names, key=f"org_edit_{level.value}")
    if selected_name == "Select...":
        return

    node = nodes[names.index(selected_name)]
    form = page.get_edit_form(node)

    with st.container(border=True):
        st.text_input("Name", value=form.name, key=f"org_edit_name_{node.id}")
        if level.parent is None:
            st.caption("Top-level organization, no parent")
            return

        parent_label = LEVEL_LABELS[level.parent]
        current_parent = node.parent or ""
        st.caption(f"Current {parent_label.lower()}: {current_parent or 'none'}")
        parent_search = st.text_input(f"Search {parent_label.lower()}", key=f"org_parent_search_{node.id}")
        parent_options = page.get_parent_options(level, parent_search, SelectionState())
        HierarchicalFilters.render_search_picker(
            st, parent_label, parent_options, parent_search, key=f"org_parent_pick_{node.id}"
        )
