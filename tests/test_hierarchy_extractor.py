"""
Tests for the hierarchy extractor.

Validates candidate values per level, ancestor narrowing and the terminal
club step.
"""

import random

import pytest

from src.models import ClubFormState, ClubRecord, FilterState, HierarchyLevel
from src.services.core.hierarchy_extractor import (
    get_available_clubs, get_available_values, level_selections
)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def scenario_clubs():
    """Two clubs sharing a path down to the association."""
    return [
        ClubRecord(id='1', name='Eagles', division='D1', union='U1', association='A1',
                   church='C1', is_active=True),
        ClubRecord(id='2', name='Hawks', division='D1', union='U1', association='A1',
                   church='C2', is_active=False),
    ]


@pytest.fixture
def wide_clubs():
    """Clubs across two divisions, with a few blank fields."""
    return [
        ClubRecord(id='1', name='Eagles', division='D1', union='U1', association='A1', church='C1'),
        ClubRecord(id='2', name='Hawks', division='D1', union='U1', association='A2', church='C2'),
        ClubRecord(id='3', name='Owls', division='D1', union='U2', association='A3', church='C3'),
        ClubRecord(id='4', name='Falcons', division='D2', union='U3', association='A4', church='C4'),
        ClubRecord(id='5', name='Ravens', division='D2', union='U3', association='', church=''),
        ClubRecord(id='6', name='Orphans', division='', union='', association='', church=''),
    ]


# ============================================================================
# TEST CLASSES
# ============================================================================

class TestGetAvailableValues:

    def test_root_level_without_selections(self, wide_clubs):
        assert get_available_values(HierarchyLevel.DIVISION, wide_clubs) == ['D1', 'D2']

    def test_empty_selection_equals_distinct_values(self, wide_clubs):
        for level in HierarchyLevel:
            expected = sorted({club.get_level(level) for club in wide_clubs if club.get_level(level)})
            assert get_available_values(level, wide_clubs, {}) == expected

    def test_narrowed_by_parent(self, scenario_clubs):
        assert get_available_values('union', scenario_clubs, {'division': 'D1'}) == ['U1']

    def test_narrowed_by_full_path(self, scenario_clubs):
        selections = {'division': 'D1', 'union': 'U1', 'association': 'A1'}
        assert get_available_values('church', scenario_clubs, selections) == ['C1', 'C2']

    def test_narrowed_subset_of_unconstrained(self, wide_clubs):
        unconstrained = set(get_available_values('association', wide_clubs, {}))
        narrowed = get_available_values('association', wide_clubs, {'division': 'D1', 'union': 'U1'})
        assert narrowed == ['A1', 'A2']
        assert set(narrowed) <= unconstrained

    def test_gap_in_ancestors_imposes_no_constraint(self, wide_clubs):
        # union left empty, only division narrows
        assert get_available_values('association', wide_clubs, {'division': 'D1'}) == ['A1', 'A2', 'A3']

    def test_same_and_deeper_selections_are_ignored(self, wide_clubs):
        selections = {'division': 'D1', 'union': 'U2', 'church': 'C1'}
        assert get_available_values('union', wide_clubs, selections) == ['U1', 'U2']

    def test_accepts_selection_state(self, wide_clubs):
        filters = FilterState(division='D2')
        assert get_available_values(HierarchyLevel.UNION, wide_clubs, filters) == ['U3']

    def test_blank_values_are_skipped(self, wide_clubs):
        assert get_available_values('church', wide_clubs, {'division': 'D2'}) == ['C4']

    def test_unknown_ancestor_path_is_empty(self, wide_clubs):
        assert get_available_values('union', wide_clubs, {'division': 'D9'}) == []

    def test_empty_club_list(self):
        assert get_available_values('division', [], {}) == []

    def test_independent_of_input_order(self, wide_clubs):
        shuffled = list(wide_clubs)
        random.Random(7).shuffle(shuffled)
        for level in HierarchyLevel:
            assert get_available_values(level, shuffled) == get_available_values(level, wide_clubs)

    def test_unknown_level(self, wide_clubs):
        with pytest.raises(ValueError):
            get_available_values('conference', wide_clubs)


class TestLevelSelections:

    def test_ignores_non_level_keys(self):
        normalized = level_selections({'division': 'D1', 'status': 'active', 'union': None})
        assert normalized[HierarchyLevel.DIVISION] == 'D1'
        assert normalized[HierarchyLevel.UNION] == ''
        assert len(normalized) == 4

    def test_none(self):
        assert all(value == '' for value in level_selections(None).values())


class TestGetAvailableClubs:

    def test_requires_church(self, scenario_clubs):
        assert get_available_clubs(scenario_clubs, ClubFormState(division='D1', union='U1', association='A1')) == []

    def test_narrowed_to_church(self, scenario_clubs):
        form = ClubFormState(division='D1', union='U1', association='A1', church='C2')
        assert [club.name for club in get_available_clubs(scenario_clubs, form)] == ['Hawks']

    def test_sorted_by_name(self):
        clubs = [
            ClubRecord(id='1', name='Zebras', division='D1', union='U1', association='A1', church='C1'),
            ClubRecord(id='2', name='antelopes', division='D1', union='U1', association='A1', church='C1'),
            ClubRecord(id='3', name='Bisons', division='D1', union='U1', association='A1', church='C1'),
        ]
        form = ClubFormState(division='D1', union='U1', association='A1', church='C1')
        assert [club.id for club in get_available_clubs(clubs, form)] == ['2', '3', '1']

    def test_no_match_is_empty(self, scenario_clubs):
        form = ClubFormState(division='D2', union='U1', association='A1', church='C1')
        assert get_available_clubs(scenario_clubs, form) == []
