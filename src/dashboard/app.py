"""
Main Streamlit dashboard application
"""
import streamlit as st
import logging
from datetime import datetime
from typing import Optional

from src.config.dashboard_config import load_config
from src.models import DashboardConfig
from src.services import ServiceContainer, ClubRepositoryError
from src.dashboard.utils.session_state import (
    initialize_session_state, get_filters, set_filters, get_form, set_form
)
from src.dashboard.pages import clubs_management, organization_management, club_finder

logger = logging.getLogger(__name__)


class ClubAdminDashboard:
    """Main dashboard application class using ServiceContainer"""

    def __init__(self, config: DashboardConfig):
        """Initialize dashboard with configuration"""
        self.config = config
        self.services: Optional[ServiceContainer] = None

        # Define available pages
        self.pages = {
            "Clubs": clubs_management,
            "Organizations": organization_management,
            "Club Finder": club_finder
        }

    def run(self):
        """Main application entry point"""
        st.set_page_config(
            page_title=self.config.page_title,
            page_icon="🏕️",
            layout="wide",
            initial_sidebar_state="expanded"
        )

        initialize_session_state(self.config.default_page)

        # Initialize services if needed
        if not st.session_state.get('services_initialized', False):
            success = self._initialize_services()
            if success:
                st.session_state.services_initialized = True
            else:
                st.error("Failed to initialize services. Please check the logs.")
                return
        else:
            self.services = st.session_state.get('services')

        self._render_dashboard()

    def _initialize_services(self) -> bool:
        """Initialize all services via ServiceContainer"""
        try:
            with st.spinner("Loading clubs..."):
                self.services = ServiceContainer.initialize(self.config)
                self.services.warm_up()

                st.session_state.services = self.services
                return True

        except Exception as e:
            logger.error(f"Service initialization failed: {e}")
            st.error(f"Service initialization failed: {e}")
            return False

    def _render_dashboard(self):
        """Render the main dashboard interface"""
        st.title(f"🏕️ {self.config.page_title}")

        # Page navigation
        pages = list(self.pages.keys())
        cols = st.columns(len(pages))
        for idx, page_name in enumerate(pages):
            with cols[idx]:
                if st.button(page_name, use_container_width=True):
                    st.session_state.current_page = page_name

        st.markdown("")  # spacing

        self._render_sidebar()

        current_page = st.session_state.get('current_page', self.config.default_page)

        try:
            if current_page in self.pages and self.services:
                self.pages[current_page].render(self.services)
            else:
                st.error(f"Page '{current_page}' not found or services not initialized")

        except ClubRepositoryError as e:
            logger.error(f"Club data unavailable on page {current_page}: {e}")
            st.error(f"Could not load clubs: {e}")
        except Exception as e:
            logger.error(f"Error rendering page {current_page}: {e}")
            st.error(f"Error rendering page: {e}")

    def _render_sidebar(self):
        """Render sidebar with data status and refresh"""
        st.sidebar.title("Navigation")
        st.sidebar.subheader("Data Status")

        if not self.services:
            st.sidebar.error("Services unavailable")
            return

        cache_info = self.services.club_repository.get_cache_info()
        if cache_info.last_updated:
            age = datetime.now() - cache_info.last_updated
            minutes = int(age.total_seconds() / 60)
            st.sidebar.success(f"{cache_info.entry_count} clubs loaded ({minutes}m ago)")
            st.sidebar.caption(f"Source: {cache_info.source_file}")
        else:
            st.sidebar.warning("No club data loaded")

        if st.sidebar.button("🔄 Refresh Data", type="primary", use_container_width=True):
            self._refresh_data()

    def _refresh_data(self):
        """Reload clubs and re-validate every open selection against the new list"""
        try:
            with st.spinner("Refreshing clubs..."):
                self.services.hierarchy_coordination.refresh()

                # New list version, so each sync re-validates and auto-selects
                clubs_management = self.services.clubs_management
                set_filters(clubs_management.sync_filters(get_filters()))
                if get_form('create_club_form') is not None:
                    set_form('create_club_form', clubs_management.sync_form(get_form('create_club_form')))
                if get_form('registration_form') is not None:
                    set_form('registration_form', self.services.club_registration.sync(get_form('registration_form')))

            st.sidebar.success("Data refreshed!")
            st.rerun()

        except ClubRepositoryError as e:
            logger.error(f"Refresh failed: {e}")
            st.sidebar.error(f"Refresh failed: {e}")


def main():
    """Entry point for the dashboard application"""
    try:
        config = load_config()
        logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))

        dashboard = ClubAdminDashboard(config)
        dashboard.run()

    except Exception as e:
        st.error(f"Dashboard initialization failed: {e}")
        logger.error(f"Dashboard initialization failed: {e}", exc_info=True)


if __name__ == "__main__":
    main()
