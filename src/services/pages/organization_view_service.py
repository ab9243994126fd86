# src/services/pages/organization_view_service.py
"""
OrganizationViewService:
 - Organization nodes per level, searchable, with club-count chart.
"""

import logging
from typing import List, Optional, Union

import pandas as pd
import plotly.graph_objects as go

from src.models import EMPTY_VALUE, HierarchyLevel, OrganizationSummary, OrgEditForm, OrgNode, SelectionState
from ..coordination.hierarchy_coordination_service import HierarchyCoordinationService
from ..core.club_repository import ClubRepositoryError
from ..core.filter_engine import filter_by_search
from ..core.organization_aggregator import search_organizations

logger = logging.getLogger(__name__)

# Parent field of the edit form for each level that has a parent
PARENT_FORM_FIELDS = {
    HierarchyLevel.UNION: 'parent_division',
    HierarchyLevel.ASSOCIATION: 'parent_union',
    HierarchyLevel.CHURCH: 'parent_association',
}


class OrganizationViewService:

    """Organization management page - nodes derived from the club list."""

    def __init__(self, data_coordination: HierarchyCoordinationService):
        self.coordination = data_coordination

    def get_organizations(self, level: Union[HierarchyLevel, str], search_query: str = "") -> List[OrgNode]:
        """Nodes of one level matching the search, sorted by name."""
        try:
            nodes = self.coordination.get_organizations(level)
        except ClubRepositoryError as e:
            logger.error(f"Error getting organizations for {level}: {e}")
            return []
        return search_organizations(nodes, search_query)

    def get_summary(self, level: Union[HierarchyLevel, str], top_n: int = 5) -> OrganizationSummary:
        level = HierarchyLevel.coerce(level)
        nodes = self.get_organizations(level)
        largest = sorted(nodes, key=lambda node: (-node.club_count, node.name))[:top_n]
        return OrganizationSummary(
            level=level,
            node_count=len(nodes),
            club_count=sum(node.club_count for node in nodes),
            top_nodes={node.name: node.club_count for node in largest}
        )

    def create_organizations_dataframe(self, nodes: List[OrgNode]) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {'Name': node.name, 'Parent': node.parent or '', 'Clubs': node.club_count}
                for node in nodes
            ],
            columns=['Name', 'Parent', 'Clubs']
        )

    def create_club_count_chart(self, nodes: List[OrgNode], title: Optional[str] = None) -> go.Figure:
        """Horizontal bar chart of clubs per node."""
        fig = go.Figure()
        fig.add_trace(go.Bar(
            x=[node.club_count for node in nodes],
            y=[node.name for node in nodes],
            orientation='h',
            marker_color='#1f77b4',
            hovertemplate='%{y}: %{x} clubs<extra></extra>'
        ))
        fig.update_layout(
            title=title,
            xaxis_title="Clubs",
            yaxis=dict(autorange="reversed"),
            height=max(250, 40 * len(nodes)),
            margin=dict(l=10, r=10, t=40 if title else 10, b=10)
        )
        return fig

    def get_edit_form(self, node: OrgNode) -> OrgEditForm:
        """Prefill the edit form; only the field matching the node's parent level is set."""
        form = OrgEditForm(name=node.name, level=node.type)
        parent_field = PARENT_FORM_FIELDS.get(node.type)
        if parent_field:
            setattr(form, parent_field, node.parent or EMPTY_VALUE)
        return form

    def get_parent_options(self, level: Union[HierarchyLevel, str], parent_search: str = "",
                           selection: Optional[SelectionState] = None) -> List[str]:
        """
        Candidate parents for a node of ``level``, narrowed by the picker search.

        Returns an empty list for the root level.
        """
        level = HierarchyLevel.coerce(level)
        if level.parent is None:
            return []
        options = self.coordination.get_filter_options(level.parent, selection)
        return filter_by_search(options, parent_search)
