"""
Cascade Controller - Selection transitions over the ordered hierarchy chain.

Division -> Union -> Association -> Church -> (Club)

Every transition takes a SelectionState and returns a new one. Changing a
level always clears everything strictly below it, and deeper levels are only
read after shallower ones have been settled.
"""

import logging
from dataclasses import replace
from typing import List, TypeVar, Union

from src.models import (
    EMPTY_VALUE, HIERARCHY_ORDER, ClubFormState, ClubRecord, HierarchyLevel, SelectionState
)
from .hierarchy_extractor import get_available_clubs, get_available_values

logger = logging.getLogger(__name__)

State = TypeVar('State', bound=SelectionState)


def set_value(state: State, level: Union[HierarchyLevel, str], value: str) -> State:
    """Set one level and clear every deeper level, including the club leaf."""
    level = HierarchyLevel.coerce(level)
    updates = {level.value: value or EMPTY_VALUE}
    for deeper in level.deeper_levels():
        updates[deeper.value] = EMPTY_VALUE
    for leaf_field in state.LEAF_FIELDS:
        updates[leaf_field] = EMPTY_VALUE
    return replace(state, **updates)


def clear(state: State, level: Union[HierarchyLevel, str]) -> State:
    return set_value(state, level, EMPTY_VALUE)


def reset(state: State) -> State:
    """Fresh empty state of the same kind."""
    return type(state)()


def auto_select(clubs: List[ClubRecord], state: State) -> State:
    """
    Fill levels that have exactly one candidate.

    Single top-down pass. A level is filled only when it is empty and its
    parent is selected (or it is the root), so user choices are never
    replaced. A gap above a deeper user choice is only filled when that
    choice still fits under the filled value.
    """
    for level in HIERARCHY_ORDER:
        if state.is_selected(level):
            continue
        parent = level.parent
        if parent is not None and not state.is_selected(parent):
            continue

        candidates = get_available_values(level, clubs, state)
        if len(candidates) != 1:
            continue

        filled = replace(state, **{level.value: candidates[0]})
        if not _fits_below(clubs, filled, level):
            logger.debug(f"Not auto-selecting {level.value}: {candidates[0]} conflicts with deeper selections")
            continue

        logger.debug(f"Auto-selecting {level.value}: {candidates[0]}")
        state = filled

    return state


def _fits_below(clubs: List[ClubRecord], state: SelectionState, level: HierarchyLevel) -> bool:
    """True when every selection deeper than ``level`` is still available."""
    for deeper in level.deeper_levels():
        value = state.get(deeper)
        if value and value not in get_available_values(deeper, clubs, state):
            return False
    if isinstance(state, ClubFormState) and state.club_id:
        return state.club_id in {club.id for club in get_available_clubs(clubs, state)}
    return True


def auto_select_club(clubs: List[ClubRecord], state: ClubFormState) -> ClubFormState:
    """Pick the club when the selected church narrows the list to exactly one."""
    if not state.church or state.club_id:
        return state
    available = get_available_clubs(clubs, state)
    if len(available) == 1:
        logger.debug(f"Auto-selecting club: {available[0].id}")
        return replace(state, club_id=available[0].id)
    return state


def select_club(state: ClubFormState, club_id: str) -> ClubFormState:
    """Terminal step of the form flow."""
    if not isinstance(state, ClubFormState):
        raise ValueError(f"Club selection requires a ClubFormState, got {type(state).__name__}")
    if not state.church:
        raise ValueError("Select a church before selecting a club")
    return replace(state, club_id=club_id or EMPTY_VALUE)


def is_club_step_reachable(clubs: List[ClubRecord], state: SelectionState) -> bool:
    return bool(state.church) and bool(get_available_clubs(clubs, state))


def revalidate(clubs: List[ClubRecord], state: State) -> State:
    """
    Re-establish the selection invariant after the club list changed.

    Levels are checked root first, so an invalid division clears union,
    association and church in the same call.
    """
    for level in HIERARCHY_ORDER:
        value = state.get(level)
        if value and value not in get_available_values(level, clubs, state):
            logger.info(f"Clearing stale {level.value} selection: {value}")
            state = clear(state, level)

    if isinstance(state, ClubFormState) and state.club_id:
        available_ids = {club.id for club in get_available_clubs(clubs, state)}
        if state.club_id not in available_ids:
            logger.info(f"Clearing stale club selection: {state.club_id}")
            state = replace(state, club_id=EMPTY_VALUE)

    return state
