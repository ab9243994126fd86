"""
Tests for the page services: clubs management, organization view and
club registration.
"""

import json
import shutil
import tempfile
from pathlib import Path
from unittest.mock import MagicMock, patch

import pandas as pd
import plotly.graph_objects as go
import pytest

from src.models import (
    ClubFormState, ClubRecord, FilterState, HierarchyLevel, MatchFrequency, OrgNode, StatusFilter
)
from src.services.coordination.hierarchy_coordination_service import HierarchyCoordinationService
from src.services.core.club_repository import ClubRepository, ClubRepositoryError
from src.services.pages import ClubRegistrationService, ClubsManagementService, OrganizationViewService
from src.services.pages.clubs_management_service import TABLE_COLUMNS


# ============================================================================
# MODULE-LEVEL FIXTURES (accessible to all test classes)
# ============================================================================

@pytest.fixture
def clubs():
    return [
        ClubRecord(id='1', name='Eagles', description='Morning hikes', division='D1', union='U1',
                   association='A1', church='C1'),
        ClubRecord(id='2', name='Hawks', division='D1', union='U1', association='A1', church='C2',
                   is_active=False, match_frequency=MatchFrequency.MONTHLY, group_size=3),
        ClubRecord(id='3', name='Owls', division='D1', union='U1', association='A1', church='C2'),
    ]


@pytest.fixture
def mock_repository(clubs):
    repository = MagicMock(spec=ClubRepository)
    repository.get_all_clubs.return_value = clubs
    repository.version = 1
    return repository


@pytest.fixture
def coordination(mock_repository):
    return HierarchyCoordinationService(repository=mock_repository)


# ============================================================================
# CLUBS MANAGEMENT
# ============================================================================

class TestClubsManagementService:

    @pytest.fixture
    def service(self, coordination):
        return ClubsManagementService(data_coordination=coordination)

    def test_filter_transitions(self, service):
        filters = FilterState(division='D1', union='U1', association='A1', church='C2')

        filters = service.update_filter(filters, 'union', 'U9')
        assert filters == FilterState(division='D1', union='U9')

        filters = service.update_status(filters, 'Inactive')
        filters = service.update_search(filters, 'hawk')
        assert filters.status is StatusFilter.INACTIVE
        assert filters.search_query == 'hawk'

        assert service.clear_filters(filters) == FilterState()

    def test_auto_select_filters(self, service):
        filters = service.auto_select_filters(FilterState())
        assert filters == FilterState(division='D1', union='U1', association='A1')

    def test_get_clubs_and_summary(self, service):
        filters = FilterState(church='C2', status=StatusFilter.ACTIVE)

        assert [club.id for club in service.get_clubs(filters)] == ['3']

        summary = service.get_summary(filters)
        assert summary.filtered_count == 1
        assert summary.total_count == 3
        assert summary.active_filter_count == 2
        assert summary.filters_active

    def test_get_clubs_repository_error(self, service, mock_repository):
        mock_repository.get_all_clubs.side_effect = ClubRepositoryError("unreadable")

        with patch('src.services.pages.clubs_management_service.logger') as mock_logger:
            assert service.get_clubs(FilterState()) == []
            summary = service.get_summary(FilterState())

        assert summary.total_count == 0
        assert mock_logger.error.called

    def test_create_clubs_dataframe(self, service, clubs):
        df = service.create_clubs_dataframe(clubs)

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == TABLE_COLUMNS
        assert df['Status'].tolist() == ['Active', 'Inactive', 'Active']
        assert df.loc[1, 'Frequency'] == 'Monthly'
        assert df.loc[1, 'Group Size'] == 3

    def test_create_clubs_dataframe_empty(self, service):
        df = service.create_clubs_dataframe([])
        assert df.empty
        assert list(df.columns) == TABLE_COLUMNS

    def test_toggle_club_status(self, service, mock_repository, clubs):
        assert service.toggle_club_status(clubs[1]) is True
        mock_repository.set_club_status.assert_called_once_with('2', True)

    def test_toggle_club_status_error(self, service, mock_repository, clubs):
        mock_repository.set_club_status.side_effect = ClubRepositoryError("read-only")
        assert service.toggle_club_status(clubs[0]) is False

    def test_update_filter_auto_selects_below(self, service):
        filters = service.update_filter(FilterState(status=StatusFilter.ACTIVE), 'division', 'D1')
        assert filters == FilterState(division='D1', union='U1', association='A1', status=StatusFilter.ACTIVE)

    def test_sync_filters_runs_once_per_version(self, service, mock_repository):
        filters = service.sync_filters(FilterState())
        assert filters == FilterState(division='D1', union='U1', association='A1')

        untouched = FilterState(division='D1')
        assert service.sync_filters(untouched) is untouched

        mock_repository.get_all_clubs.return_value = [
            ClubRecord(id='3', name='Owls', division='D1', union='U1', association='A1', church='C2'),
        ]
        mock_repository.version = 2

        filters = service.sync_filters(FilterState(division='D1', union='U1', association='A1', church='C1'))
        assert filters == FilterState(division='D1', union='U1', association='A1', church='C2')

    def test_sync_form_after_club_list_change(self, service, mock_repository):
        form = service.update_form_field(service.open_form(), 'church', 'C1')
        assert service.sync_form(form) is form

        mock_repository.get_all_clubs.return_value = [
            ClubRecord(id='3', name='Owls', division='D1', union='U1', association='A1', church='C2'),
        ]
        mock_repository.version = 2

        form = service.sync_form(form)
        assert form == ClubFormState(division='D1', union='U1', association='A1', church='C2')

    def test_form_flow(self, service):
        form = service.open_form()
        assert form == ClubFormState(division='D1', union='U1', association='A1')

        form = service.update_form_field(form, 'church', 'C1')
        assert form.church == 'C1'
        assert service.get_form_options(form)['churches'] == ['C1', 'C2']

    def test_create_club(self, service, mock_repository):
        form = ClubFormState(division='D1', union='U1', association='A1', church='C1')
        created = ClubRecord(id='4', name='Falcons', church='C1')
        mock_repository.create_club.return_value = created

        assert service.create_club(form, ' Falcons ', ' Chess ', 'biweekly', '4') is created
        mock_repository.create_club.assert_called_once_with(
            name='Falcons', description='Chess', match_frequency=MatchFrequency.BIWEEKLY,
            group_size=4, hierarchy=form
        )

    def test_create_club_repository_error(self, service, mock_repository):
        mock_repository.create_club.side_effect = ClubRepositoryError("disk full")
        form = ClubFormState(church='C1')
        assert service.create_club(form, 'Falcons', '', 'weekly', 2) is None

    def test_create_club_invalid_input_propagates(self, service, mock_repository):
        mock_repository.create_club.side_effect = ValueError("Club name is required")
        with pytest.raises(ValueError):
            service.create_club(ClubFormState(church='C1'), '', '', 'weekly', 2)


# ============================================================================
# ORGANIZATION VIEW
# ============================================================================

class TestOrganizationViewService:

    @pytest.fixture
    def service(self, coordination):
        return OrganizationViewService(data_coordination=coordination)

    def test_get_organizations_with_search(self, service):
        assert [node.name for node in service.get_organizations('church')] == ['C1', 'C2']
        assert [node.name for node in service.get_organizations('church', 'c2')] == ['C2']

    def test_get_summary(self, service):
        summary = service.get_summary(HierarchyLevel.CHURCH, top_n=1)

        assert summary.level is HierarchyLevel.CHURCH
        assert summary.node_count == 2
        assert summary.club_count == 3
        assert summary.top_nodes == {'C2': 2}

    def test_dataframe(self, service):
        df = service.create_organizations_dataframe(service.get_organizations('division'))
        assert list(df.columns) == ['Name', 'Parent', 'Clubs']
        assert df.loc[0, 'Parent'] == ''
        assert df.loc[0, 'Clubs'] == 3

    def test_chart(self, service):
        fig = service.create_club_count_chart(service.get_organizations('church'), title="Clubs per church")
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 1
        assert list(fig.data[0].y) == ['C1', 'C2']

    def test_edit_form_prefills_parent_level_only(self, service):
        node = OrgNode(id='church-C1', name='C1', type=HierarchyLevel.CHURCH, parent='A1', club_count=1)
        form = service.get_edit_form(node)

        assert form.name == 'C1'
        assert form.parent_association == 'A1'
        assert form.parent_union == ''
        assert form.parent_division == ''

    def test_edit_form_for_root(self, service):
        node = OrgNode(id='division-D1', name='D1', type=HierarchyLevel.DIVISION, parent=None, club_count=3)
        form = service.get_edit_form(node)
        assert (form.parent_division, form.parent_union, form.parent_association) == ('', '', '')

    def test_parent_options(self, service):
        assert service.get_parent_options('union') == ['D1']
        assert service.get_parent_options('church', 'a') == ['A1']
        assert service.get_parent_options('church', 'zzz') == []
        assert service.get_parent_options('division') == []


# ============================================================================
# CLUB REGISTRATION
# ============================================================================

class TestClubRegistrationService:

    @pytest.fixture
    def service(self, coordination):
        return ClubRegistrationService(data_coordination=coordination, active_only=True)

    def test_start_fills_unambiguous_levels(self, service):
        form = service.start()
        assert form == ClubFormState(division='D1', union='U1', association='A1')
        assert not service.is_club_step_reachable(form)

    def test_single_active_club_is_auto_selected(self, service):
        form = service.select(service.start(), 'church', 'C2')

        # Hawks is inactive, so only Owls is offered
        assert [club.id for club in service.get_club_choices(form)] == ['3']
        assert form.club_id == '3'
        assert service.is_complete(form)

    def test_choose_club(self, coordination):
        service = ClubRegistrationService(data_coordination=coordination, active_only=False)
        form = service.select(service.start(), 'church', 'C2')

        assert form.club_id == ''
        assert service.is_club_step_reachable(form)
        form = service.choose_club(form, '2')
        assert service.is_complete(form)

    def test_options_only_from_active_clubs(self, service):
        options = service.get_options(ClubFormState(division='D1', union='U1', association='A1'))
        assert options['churches'] == ['C1', 'C2']

    def test_reload_keeps_valid_choices(self, service, mock_repository):
        form = service.select(service.start(), 'church', 'C1')
        assert form.club_id == '1'

        mock_repository.get_all_clubs.return_value = [
            ClubRecord(id='3', name='Owls', division='D1', union='U1', association='A1', church='C2')
        ]
        mock_repository.version = 2

        form = service.reload(form)
        assert form.church == 'C2'
        assert form.club_id == '3'

    def test_sync_is_noop_without_changes(self, service):
        form = service.select(service.start(), 'church', 'C2')
        assert service.sync(form) is form


# ============================================================================
# CROSS-SERVICE FLOWS (real repository on disk)
# ============================================================================

@pytest.fixture
def services_on_disk(clubs):
    temp_dir = Path(tempfile.mkdtemp())
    clubs_file = temp_dir / "clubs.json"
    with open(clubs_file, 'w', encoding='utf-8') as f:
        json.dump({"clubs": [club.to_dict() for club in clubs]}, f)

    coordination = HierarchyCoordinationService(repository=ClubRepository(clubs_file))
    yield (
        ClubsManagementService(data_coordination=coordination),
        ClubRegistrationService(data_coordination=coordination, active_only=True)
    )

    shutil.rmtree(temp_dir)


class TestSelectionsFollowClubChanges:

    def test_deactivated_club_is_dropped_from_registration(self, services_on_disk):
        management, registration = services_on_disk

        form = registration.select(registration.start(), 'church', 'C1')
        assert form.club_id == '1'

        eagles = management.coordination.repository.get_club('1')
        assert management.toggle_club_status(eagles)

        form = registration.sync(form)
        choices = {club.id for club in registration.get_club_choices(form)}

        # Eagles was the only active club in C1, so the church moves to C2
        assert form.church == 'C2'
        assert form.club_id in choices
        assert form.club_id == '3'

    def test_created_club_keeps_open_form_valid(self, services_on_disk):
        management, _ = services_on_disk

        form = management.update_form_field(management.open_form(), 'church', 'C2')
        created = management.create_club(form, 'Falcons', '', 'weekly', 2)
        assert created is not None

        assert management.sync_form(form) == form
        filters = management.sync_filters(FilterState(church='C2'))
        assert [club.id for club in management.get_clubs(filters)] == ['2', '3', created.id]
