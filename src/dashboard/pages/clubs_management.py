"""
Clubs Management Page - filtered club list and create-club form
"""

import streamlit as st

from src.models import ClubFormState, FilterState, MatchFrequency, StatusFilter
from src.services import ServiceContainer
from src.dashboard.components.filters import HierarchicalFilters
from src.dashboard.utils.session_state import get_filters, set_filters, get_form, set_form

STATUS_LABELS = {
    StatusFilter.ALL: "All",
    StatusFilter.ACTIVE: "Active",
    StatusFilter.INACTIVE: "Inactive",
}


def render(services: ServiceContainer):
    """Main render function"""
    page = services.clubs_management
    filters = page.sync_filters(get_filters())
    if filters != get_filters():
        set_filters(filters)

    summary = page.get_summary(filters)
    st.subheader("Clubs")
    st.caption(f"Showing {summary.filtered_count} of {summary.total_count} clubs")

    search = st.text_input("Search clubs", value=filters.search_query, placeholder="Name or description")
    if search != filters.search_query:
        set_filters(page.update_search(filters, search))
        st.rerun()

    render_filter_panel(services, filters, summary.active_filter_count)

    st.divider()
    render_club_table(services, filters)

    st.divider()
    render_create_club_form(services)


def render_filter_panel(services: ServiceContainer, filters: FilterState, active_count: int):
    """Status and hierarchy filters inside an expander"""
    page = services.clubs_management
    title = f"Filters ({active_count} active)" if active_count else "Filters"

    with st.expander(title, expanded=active_count > 0):
        statuses = list(STATUS_LABELS)
        status = st.radio(
            "Status",
            statuses,
            index=statuses.index(filters.status),
            format_func=STATUS_LABELS.get,
            horizontal=True,
            key="clubs_status_filter"
        )
        if status != filters.status:
            set_filters(page.update_status(filters, status))
            st.rerun()

        new_filters, changed = HierarchicalFilters.render(
            st,
            filters,
            page.get_filter_options(filters),
            page.update_filter,
            key_prefix="clubs_filter"
        )
        if changed:
            set_filters(new_filters)
            st.rerun()

        if st.button("Clear filters", use_container_width=True, disabled=active_count == 0):
            set_filters(page.clear_filters(filters))
            st.rerun()


def render_club_table(services: ServiceContainer, filters: FilterState):
    page = services.clubs_management
    clubs = page.get_clubs(filters)

    if not clubs:
        st.info("No clubs match the current filters")
        return

    df = page.create_clubs_dataframe(clubs)
    event = st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        on_select="rerun",
        selection_mode="single-row",
        key="clubs_table"
    )

    selected_rows = event.selection.rows if event else []
    if not selected_rows:
        return

    club = clubs[selected_rows[0]]
    with st.container(border=True):
        st.markdown(f"**{club.name}**")
        st.caption(club.description or "No description")
        st.write(" > ".join(value for value in club.to_path_tuple() if value))
        action = "Deactivate" if club.is_active else "Activate"
        if st.button(f"{action} club", key=f"toggle_{club.id}"):
            if page.toggle_club_status(club):
                st.success(f"{club.name} updated")
                st.rerun()
            else:
                st.error("Could not update club status. Please check the logs.")


def render_create_club_form(services: ServiceContainer):
    page = services.clubs_management
    form = get_form('create_club_form')

    if form is None:
        if st.button("Create new club"):
            set_form('create_club_form', page.open_form())
            st.rerun()
        return

    synced = page.sync_form(form)
    if synced != form:
        form = synced
        set_form('create_club_form', form)

    with st.container(border=True):
        st.markdown("### New club")
        new_form, changed = HierarchicalFilters.render(
            st,
            form,
            page.get_form_options(form),
            page.update_form_field,
            key_prefix="create_club",
            require_parent=True,
            empty_label="Select..."
        )
        if changed:
            set_form('create_club_form', new_form)
            st.rerun()

        name = st.text_input("Name", key="create_club_name")
        description = st.text_area("Description", key="create_club_description")
        frequency = st.selectbox(
            "Match frequency",
            list(MatchFrequency),
            format_func=lambda f: f.value.capitalize(),
            key="create_club_frequency"
        )
        group_size = st.number_input("Group size", min_value=2, max_value=10, value=2, key="create_club_group")

        col_save, col_cancel = st.columns(2)
        with col_save:
            if st.button("Create", type="primary", use_container_width=True):
                _submit_club(services, form, name, description, frequency, group_size)
        with col_cancel:
            if st.button("Cancel", use_container_width=True):
                set_form('create_club_form', None)
                st.rerun()


def _submit_club(services: ServiceContainer, form: ClubFormState, name, description, frequency, group_size):
    try:
        club = services.clubs_management.create_club(form, name, description, frequency, group_size)
    except ValueError as e:
        st.error(str(e))
        return

    if club is None:
        st.error("Could not save the club. Please check the logs.")
        return

    set_form('create_club_form', None)
    st.success(f"Created club {club.name}")
    st.rerun()
