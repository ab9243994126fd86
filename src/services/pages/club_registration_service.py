# src/services/pages/club_registration_service.py
import logging
from typing import Dict, List, Optional, Union

from src.models import ClubFormState, ClubRecord, HierarchyLevel
from ..coordination.hierarchy_coordination_service import HierarchyCoordinationService
from ..core.cascade_controller import (
    auto_select, auto_select_club, is_club_step_reachable, revalidate, select_club, set_value
)

logger = logging.getLogger(__name__)


class ClubRegistrationService:
    """
    Register-style club picker: walks the cascade down to a single club.

    Auto-selection runs after every change so a user in a small organization
    only confirms what is already unambiguous.
    """

    def __init__(self, data_coordination: HierarchyCoordinationService, active_only: bool = True):
        self.coordination = data_coordination
        self.active_only = active_only
        self._synced_version: Optional[int] = None

    def _clubs(self) -> List[ClubRecord]:
        return self.coordination.get_clubs(active_only=self.active_only)

    def _settle(self, form: ClubFormState) -> ClubFormState:
        clubs = self._clubs()
        self._synced_version = self.coordination.version
        return auto_select_club(clubs, auto_select(clubs, form))

    def start(self) -> ClubFormState:
        """Empty form with unambiguous levels already filled."""
        return self._settle(ClubFormState())

    def select(self, form: ClubFormState, level: Union[HierarchyLevel, str], value: str) -> ClubFormState:
        return self._settle(set_value(form, level, value))

    def choose_club(self, form: ClubFormState, club_id: str) -> ClubFormState:
        return select_club(form, club_id)

    def reload(self, form: ClubFormState) -> ClubFormState:
        """Pick up a refreshed club list without losing still-valid choices."""
        return self._settle(revalidate(self._clubs(), form))

    def sync(self, form: ClubFormState) -> ClubFormState:
        """Re-check a stored form if the club list changed since it was last settled."""
        if self._synced_version == self.coordination.version:
            return form
        logger.info("Club list changed, re-validating registration form")
        return self.reload(form)

    def get_options(self, form: ClubFormState) -> Dict[str, List[str]]:
        return self.coordination.get_hierarchy_options(form, active_only=self.active_only)

    def get_club_choices(self, form: ClubFormState) -> List[ClubRecord]:
        return self.coordination.get_available_clubs(form, active_only=self.active_only)

    def is_club_step_reachable(self, form: ClubFormState) -> bool:
        return is_club_step_reachable(self._clubs(), form)

    def is_complete(self, form: ClubFormState) -> bool:
        return bool(form.club_id)
