# Core models (most commonly used)
from .core import (
    EMPTY_VALUE, HIERARCHY_ORDER, HierarchyLevel, MatchFrequency, StatusFilter,
    ClubRecord, OrgNode, normalize_field
)

# State models
from .state import SelectionState, FilterState, ClubFormState

# Page models
from .pages import ClubListSummary, OrganizationSummary, OrgEditForm

# Config models
from .config import DashboardConfig, CacheInfo

__all__ = [
    # Core
    'EMPTY_VALUE', 'HIERARCHY_ORDER', 'HierarchyLevel', 'MatchFrequency', 'StatusFilter',
    'ClubRecord', 'OrgNode', 'normalize_field',
    # State
    'SelectionState', 'FilterState', 'ClubFormState',
    # Pages
    'ClubListSummary', 'OrganizationSummary', 'OrgEditForm',
    # Config
    'DashboardConfig', 'CacheInfo'
]
