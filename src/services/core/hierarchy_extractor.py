"""
Hierarchy Extractor - Candidate values for each level of the organization tree.

Given the flat club list and whatever the user already picked above a level,
this module answers "what can be chosen here?". It is the single source of
picker options for both the filter and the form flows.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Union

from src.models import EMPTY_VALUE, HIERARCHY_ORDER, ClubRecord, HierarchyLevel, SelectionState

Selections = Union[Mapping[str, str], SelectionState, None]


def level_selections(selections: Selections) -> Dict[HierarchyLevel, str]:
    """
    Normalize selections to a {HierarchyLevel: value} dict.

    Accepts a SelectionState or a mapping keyed by level name. Keys that are
    not hierarchy levels (status, search_query, club_id) are ignored and
    missing or None entries become EMPTY_VALUE.
    """
    if selections is None:
        return {level: EMPTY_VALUE for level in HIERARCHY_ORDER}
    if isinstance(selections, SelectionState):
        return {level: selections.get(level) for level in HIERARCHY_ORDER}
    return {
        level: (selections.get(level.value) or EMPTY_VALUE)
        for level in HIERARCHY_ORDER
    }


def matches_path(club: ClubRecord, selections: Dict[HierarchyLevel, str],
                 levels: Iterable[HierarchyLevel]) -> bool:
    """True when the club equals every non-empty selection at the given levels."""
    for level in levels:
        selected = selections[level]
        if selected and club.get_level(level) != selected:
            return False
    return True


def get_available_values(level: Union[HierarchyLevel, str],
                         clubs: List[ClubRecord],
                         ancestor_selections: Selections = None) -> List[str]:
    """
    Get the distinct values available at a hierarchy level.

    Only selections strictly above ``level`` narrow the result; entries at the
    same or deeper levels are ignored.

    Args:
        level: Level to list values for
        clubs: Club list to derive values from
        ancestor_selections: Already selected parent levels

    Returns:
        Sorted list of distinct non-empty values, empty when nothing matches
    """
    level = HierarchyLevel.coerce(level)
    selections = level_selections(ancestor_selections)
    ancestors = level.shallower_levels()

    values = set()
    for club in clubs:
        value = club.get_level(level)
        if value and matches_path(club, selections, ancestors):
            values.add(value)

    return sorted(values)


def get_available_clubs(clubs: List[ClubRecord], selections: Selections) -> List[ClubRecord]:
    """
    Clubs offered at the terminal step of the cascade.

    Nothing is offered until a church is selected. The result is sorted by
    club name and may be empty, which callers show as "no data".
    """
    normalized = level_selections(selections)
    if not normalized[HierarchyLevel.CHURCH]:
        return []

    narrowed = [club for club in clubs if matches_path(club, normalized, HIERARCHY_ORDER)]
    return sorted(narrowed, key=lambda club: (club.name.lower(), club.id))
