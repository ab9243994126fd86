"""
Session state management utilities for Streamlit dashboard.

This module provides helper functions for managing Streamlit session state
in a consistent way across the application. Selections are stored as
immutable state objects and replaced as a whole on every change.
"""

import streamlit as st
from typing import Optional

from src.models import ClubFormState, FilterState


def initialize_session_state(default_page: str = 'Clubs') -> None:
    """
    Initialize session state with default values.

    This should be called once at the start of the app to ensure
    all required session state keys exist.
    """
    # Clubs list filter
    if 'club_filters' not in st.session_state:
        st.session_state.club_filters = FilterState()

    # Sidebar club picker
    if 'registration_form' not in st.session_state:
        st.session_state.registration_form = None

    # Create-club form, created when the form opens
    if 'create_club_form' not in st.session_state:
        st.session_state.create_club_form = None

    # Initialize page navigation
    if 'current_page' not in st.session_state:
        st.session_state.current_page = default_page

    # Initialize service state
    if 'services_initialized' not in st.session_state:
        st.session_state.services_initialized = False


def get_filters() -> FilterState:
    """
    Get current club list filters.

    Returns:
        Current FilterState
    """
    if 'club_filters' not in st.session_state:
        initialize_session_state()

    return st.session_state.club_filters


def set_filters(filters: FilterState) -> None:
    st.session_state.club_filters = filters


def get_form(key: str) -> Optional[ClubFormState]:
    """
    Get a form selection from session state.

    Args:
        key: 'registration_form' or 'create_club_form'

    Returns:
        Stored ClubFormState, None if the form is not open
    """
    return st.session_state.get(key)


def set_form(key: str, form: Optional[ClubFormState]) -> None:
    """Store a form selection, None discards it."""
    st.session_state[key] = form

