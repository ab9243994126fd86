from .club_repository import ClubRepository, ClubRepositoryError, ClubNotFoundError
from .hierarchy_extractor import get_available_values, get_available_clubs
from .organization_aggregator import build_organization_tree, get_organizations_of_type, search_organizations
from .filter_engine import filter_clubs, get_active_filter_count, filter_by_search
from .cascade_controller import (
    set_value, clear, reset, auto_select, auto_select_club, select_club,
    is_club_step_reachable, revalidate
)

__all__ = [
    'ClubRepository',
    'ClubRepositoryError',
    'ClubNotFoundError',
    'get_available_values',
    'get_available_clubs',
    'build_organization_tree',
    'get_organizations_of_type',
    'search_organizations',
    'filter_clubs',
    'get_active_filter_count',
    'filter_by_search',
    'set_value',
    'clear',
    'reset',
    'auto_select',
    'auto_select_club',
    'select_club',
    'is_club_step_reachable',
    'revalidate',
]
