"""
HierarchyCoordinationService - Derived hierarchy data shared by all pages.

Holds the club list coming from the repository and exposes the read-only
arrays the pages render (divisions, unions, associations, churches,
filtered clubs, organizations). Results are memoized per club-list version
and selection, and dropped whenever the repository hands out a new list.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

from src.models import (
    HIERARCHY_ORDER, ClubRecord, FilterState, HierarchyLevel, OrgNode, SelectionState
)
from ..core.cascade_controller import revalidate
from ..core.club_repository import ClubRepository
from ..core.filter_engine import filter_clubs
from ..core.hierarchy_extractor import get_available_clubs, get_available_values
from ..core.organization_aggregator import build_organization_tree, get_organizations_of_type

logger = logging.getLogger(__name__)

State = TypeVar('State', bound=SelectionState)

# Plural keys exposed to the pages, one per hierarchy level
OPTION_KEYS = {
    HierarchyLevel.DIVISION: 'divisions',
    HierarchyLevel.UNION: 'unions',
    HierarchyLevel.ASSOCIATION: 'associations',
    HierarchyLevel.CHURCH: 'churches',
}


class HierarchyCoordinationService:
    """
    Coordinates the club repository and the pure hierarchy engine.

    This service provides the "glue" needed by multiple pages and UI
    components. It is NOT page-specific.
    """

    def __init__(self, repository: ClubRepository):
        self.repository = repository
        self._cache: Dict[Tuple, Any] = {}
        self._cache_version: Optional[int] = None

    # ========================================================================
    # Club list
    # ========================================================================

    def get_clubs(self, active_only: bool = False) -> List[ClubRecord]:
        """Current club list, optionally limited to active clubs."""
        clubs = self.repository.get_all_clubs()
        if active_only:
            return self._memoize(('active_clubs',), lambda: [c for c in clubs if c.is_active])
        return clubs

    @property
    def version(self) -> int:
        """Version of the club list currently served."""
        self.repository.get_all_clubs()
        return self.repository.version

    def refresh(self, *states: State) -> List[State]:
        """
        Reload clubs and re-validate the given selections against the new list.

        Returns:
            The re-validated states, in the order given
        """
        clubs = self.repository.get_all_clubs(force_refresh=True)
        self._reset_cache()
        logger.info(f"Club list refreshed: {len(clubs)} clubs")
        return [revalidate(clubs, state) for state in states]

    # ========================================================================
    # Derived arrays
    # ========================================================================

    def get_filter_options(self, level: Union[HierarchyLevel, str],
                           parent_filters: Optional[SelectionState] = None,
                           active_only: bool = False) -> List[str]:
        """
        Get available options for one filter dropdown.

        Args:
            level: Hierarchy level to list
            parent_filters: Already selected parent levels
            active_only: Derive options from active clubs only

        Returns:
            Sorted list of available options
        """
        level = HierarchyLevel.coerce(level)
        key = ('options', level, self._selection_key(parent_filters), active_only)
        return self._memoize(
            key, lambda: get_available_values(level, self.get_clubs(active_only), parent_filters)
        )

    def get_hierarchy_options(self, selection: Optional[SelectionState] = None,
                              active_only: bool = False) -> Dict[str, List[str]]:
        """All four candidate lists: divisions, unions, associations, churches."""
        return {
            OPTION_KEYS[level]: self.get_filter_options(level, selection, active_only)
            for level in HIERARCHY_ORDER
        }

    def get_filtered_clubs(self, filters: FilterState) -> List[ClubRecord]:
        """
        Clubs matching hierarchy, status and search of a FilterState.

        Only the result for the latest FilterState is kept.
        """
        self._check_version()
        last = self._cache.get(('filtered',))
        if last is None or last[0] != filters:
            last = (filters, filter_clubs(self.get_clubs(), filters, filters.search_query))
            self._cache[('filtered',)] = last
        return last[1]

    def get_available_clubs(self, selection: SelectionState, active_only: bool = False) -> List[ClubRecord]:
        """Clubs offered at the terminal step for the given selection."""
        key = ('available_clubs', self._selection_key(selection), active_only)
        return self._memoize(key, lambda: get_available_clubs(self.get_clubs(active_only), selection))

    def get_organizations(self, level: Union[HierarchyLevel, str, None] = None) -> List[OrgNode]:
        """Organization nodes, all levels or one level sorted by name."""
        nodes = self._memoize(('organizations',), lambda: build_organization_tree(self.get_clubs()))
        if level is None:
            return nodes
        return get_organizations_of_type(nodes, level)

    # ========================================================================
    # Memoization
    # ========================================================================

    def _memoize(self, key: Tuple, compute: Callable[[], Any]) -> Any:
        self._check_version()
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]

    def _check_version(self) -> None:
        # Load first so the version check sees the list compute() will read
        self.repository.get_all_clubs()
        if self._cache_version != self.repository.version:
            self._reset_cache()

    def _reset_cache(self) -> None:
        self._cache = {}
        self._cache_version = self.repository.version

    @staticmethod
    def _selection_key(selection: Optional[SelectionState]) -> Tuple[str, ...]:
        """Only hierarchy levels affect candidate lists."""
        if selection is None:
            return ()
        return tuple(selection.get(level) for level in HIERARCHY_ORDER)
