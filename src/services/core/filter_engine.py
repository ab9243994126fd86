"""
Filter Predicate Engine - Hierarchy, status and text filters over club lists.
"""

from typing import Any, List, Mapping, Union

from src.models import HIERARCHY_ORDER, ClubRecord, FilterState, StatusFilter
from .hierarchy_extractor import level_selections, matches_path

Filters = Union[FilterState, Mapping[str, Any], None]


def _status_of(filters: Filters) -> StatusFilter:
    if filters is None:
        return StatusFilter.ALL
    if isinstance(filters, FilterState):
        return filters.status
    return StatusFilter.coerce(filters.get('status'))


def _matches_search(club: ClubRecord, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return needle in club.name.lower() or needle in club.description.lower()


def filter_clubs(clubs: List[ClubRecord], filters: Filters, search_query: str = "") -> List[ClubRecord]:
    """
    Filter clubs by hierarchy path, status and free text.

    All three conditions must hold. Relative order of ``clubs`` is preserved.

    Args:
        clubs: Club list to filter
        filters: FilterState or mapping with level keys and optional 'status'
        search_query: Case-insensitive substring matched against name or description

    Returns:
        Matching clubs
    """
    selections = level_selections(filters)
    status = _status_of(filters)

    return [
        club for club in clubs
        if matches_path(club, selections, HIERARCHY_ORDER)
        and status.matches(club.is_active)
        and _matches_search(club, search_query)
    ]


def get_active_filter_count(filters: Filters, search_query: str = "") -> int:
    """Number of independently active filter conditions."""
    selections = level_selections(filters)
    count = sum(1 for value in selections.values() if value)
    if _status_of(filters) is not StatusFilter.ALL:
        count += 1
    if search_query:
        count += 1
    return count


def filter_by_search(values: List[str], query: str) -> List[str]:
    """Plain case-insensitive substring filter for long picker lists."""
    if not query or not query.strip():
        return values
    needle = query.lower()
    return [value for value in values if needle in value.lower()]
