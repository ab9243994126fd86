# src/services/pages/clubs_management_service.py
import logging
from dataclasses import replace
from typing import Dict, List, Optional, TypeVar, Union

import pandas as pd

from src.models import (
    ClubFormState, ClubListSummary, ClubRecord, FilterState, HierarchyLevel, MatchFrequency, StatusFilter
)
from ..coordination.hierarchy_coordination_service import HierarchyCoordinationService
from ..core.cascade_controller import auto_select, reset, revalidate, set_value
from ..core.club_repository import ClubRepositoryError
from ..core.filter_engine import get_active_filter_count

logger = logging.getLogger(__name__)

State = TypeVar('State', FilterState, ClubFormState)

TABLE_COLUMNS = ['ID', 'Name', 'Division', 'Union', 'Association', 'Church',
                 'Status', 'Frequency', 'Group Size']


class ClubsManagementService:
    """
    Clubs management page logic: the filter flow over the club list and the
    create-club form flow. Both use the same cascade transitions.
    """

    def __init__(self, data_coordination: HierarchyCoordinationService):
        self.coordination = data_coordination
        # Club-list version each stored selection was last settled against
        self._synced_versions: Dict[str, int] = {}

    # ========================================================================
    # Filter flow
    # ========================================================================

    def get_filter_options(self, filters: FilterState) -> Dict[str, List[str]]:
        return self.coordination.get_hierarchy_options(filters)

    def update_filter(self, filters: FilterState, level: Union[HierarchyLevel, str], value: str) -> FilterState:
        """Apply a pick, then fill whatever became unambiguous below it."""
        return self.auto_select_filters(set_value(filters, level, value))

    def update_status(self, filters: FilterState, status: Union[StatusFilter, str]) -> FilterState:
        return replace(filters, status=StatusFilter.coerce(status))

    def update_search(self, filters: FilterState, search_query: str) -> FilterState:
        return replace(filters, search_query=search_query or "")

    def clear_filters(self, filters: FilterState) -> FilterState:
        return reset(filters)

    def auto_select_filters(self, filters: FilterState) -> FilterState:
        """Fill single-candidate levels."""
        return auto_select(self.coordination.get_clubs(), filters)

    def sync_filters(self, filters: FilterState) -> FilterState:
        """Re-validate and auto-select stored filters when the club list changed."""
        return self._sync('filters', filters)

    def get_clubs(self, filters: FilterState) -> List[ClubRecord]:
        """Clubs to display for the current filters."""
        try:
            return self.coordination.get_filtered_clubs(filters)
        except ClubRepositoryError as e:
            logger.error(f"Error getting clubs for filters {filters}: {e}")
            return []

    def get_summary(self, filters: FilterState) -> ClubListSummary:
        try:
            total = len(self.coordination.get_clubs())
        except ClubRepositoryError as e:
            logger.error(f"Error counting clubs: {e}")
            total = 0
        return ClubListSummary(
            filtered_count=len(self.get_clubs(filters)),
            total_count=total,
            active_filter_count=get_active_filter_count(filters, filters.search_query)
        )

    def create_clubs_dataframe(self, clubs: List[ClubRecord]) -> pd.DataFrame:
        """Table rows for display, in the given club order."""
        rows = [
            {
                'ID': club.id,
                'Name': club.name,
                'Division': club.division,
                'Union': club.union,
                'Association': club.association,
                'Church': club.church,
                'Status': 'Active' if club.is_active else 'Inactive',
                'Frequency': club.match_frequency.value.capitalize(),
                'Group Size': club.group_size,
            }
            for club in clubs
        ]
        return pd.DataFrame(rows, columns=TABLE_COLUMNS)

    def toggle_club_status(self, club: ClubRecord) -> bool:
        """Flip a club between active and inactive."""
        try:
            self.coordination.repository.set_club_status(club.id, not club.is_active)
            return True
        except ClubRepositoryError as e:
            logger.error(f"Error toggling status of club {club.id}: {e}")
            return False

    # ========================================================================
    # Create-club form flow
    # ========================================================================

    def sync_form(self, form: ClubFormState) -> ClubFormState:
        """Re-validate and auto-select the open form when the club list changed."""
        return self._sync('form', form)

    def get_form_options(self, form: ClubFormState) -> Dict[str, List[str]]:
        return self.coordination.get_hierarchy_options(form)

    def update_form_field(self, form: ClubFormState, level: Union[HierarchyLevel, str], value: str) -> ClubFormState:
        """Apply a pick, then fill whatever became unambiguous below it."""
        form = set_value(form, level, value)
        return auto_select(self.coordination.get_clubs(), form)

    def open_form(self) -> ClubFormState:
        self._synced_versions['form'] = self.coordination.version
        return auto_select(self.coordination.get_clubs(), ClubFormState())

    def create_club(self, form: ClubFormState, name: str, description: str,
                    match_frequency: Union[MatchFrequency, str], group_size: int) -> Optional[ClubRecord]:
        """
        Create a club under the form's hierarchy path.

        Raises:
            ValueError: Invalid form input, surfaced to the user as is
        """
        try:
            return self.coordination.repository.create_club(
                name=name.strip(),
                description=description.strip(),
                match_frequency=MatchFrequency(match_frequency),
                group_size=int(group_size),
                hierarchy=form
            )
        except ClubRepositoryError as e:
            logger.error(f"Error creating club {name}: {e}")
            return None

    def _sync(self, name: str, state: State) -> State:
        version = self.coordination.version
        if self._synced_versions.get(name) == version:
            return state
        clubs = self.coordination.get_clubs()
        self._synced_versions[name] = version
        logger.info(f"Club list changed, re-validating {name}")
        return auto_select(clubs, revalidate(clubs, state))
