from dataclasses import dataclass
from typing import Dict

from .core import EMPTY_VALUE, HierarchyLevel


@dataclass
class ClubListSummary:
    """Header metrics for the clubs management page."""
    filtered_count: int
    total_count: int
    active_filter_count: int

    @property
    def filters_active(self) -> bool:
        return self.active_filter_count > 0


@dataclass
class OrganizationSummary:
    """Per-level node and club totals for the organization page."""
    level: HierarchyLevel
    node_count: int
    club_count: int
    top_nodes: Dict[str, int]  # node name -> club_count, largest first


@dataclass
class OrgEditForm:
    """Prefilled values for editing an organization node."""
    name: str
    level: HierarchyLevel
    parent_division: str = EMPTY_VALUE
    parent_union: str = EMPTY_VALUE
    parent_association: str = EMPTY_VALUE
