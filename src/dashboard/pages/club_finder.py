"""
Club Finder Page - register-style walk from division down to one club
"""

import streamlit as st

from src.services import ServiceContainer
from src.dashboard.components.filters import HierarchicalFilters
from src.dashboard.utils.session_state import get_form, set_form


def render(services: ServiceContainer):
    """Main render function"""
    page = services.club_registration

    form = get_form('registration_form')
    if form is None:
        form = page.start()
        set_form('registration_form', form)
    else:
        synced = page.sync(form)
        if synced != form:
            form = synced
            set_form('registration_form', form)

    st.subheader("Find your club")
    st.caption("Levels with a single option are filled in automatically")

    new_form, changed = HierarchicalFilters.render(
        st,
        form,
        page.get_options(form),
        page.select,
        key_prefix="finder",
        require_parent=True,
        empty_label="Select..."
    )
    if changed:
        set_form('registration_form', new_form)
        st.rerun()

    if not form.church:
        st.info("Select a church to see its clubs")
        return

    if not page.is_club_step_reachable(form):
        st.warning("No clubs available for this church")
        return

    clubs = page.get_club_choices(form)
    club_ids = [club.id for club in clubs]
    labels = {club.id: club.name for club in clubs}
    index = club_ids.index(form.club_id) if form.club_id in club_ids else None

    club_id = st.radio("Club", club_ids, index=index, format_func=labels.get, key=f"finder_club_{form.church}")
    if club_id and club_id != form.club_id:
        set_form('registration_form', page.choose_club(form, club_id))
        st.rerun()

    if page.is_complete(form) and form.club_id in labels:
        st.success(f"Selected club: {labels.get(form.club_id)}")

    if st.button("Start over"):
        set_form('registration_form', page.start())
        st.rerun()
