# ============================================================================
# src/models/core.py - Core domain models
# ============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

EMPTY_VALUE = ""


class HierarchyLevel(Enum):
    """Organizational tiers, declared root-first. Declaration order is rank order."""
    DIVISION = "division"
    UNION = "union"
    ASSOCIATION = "association"
    CHURCH = "church"

    @classmethod
    def coerce(cls, level: Union['HierarchyLevel', str]) -> 'HierarchyLevel':
        """Accept either a member or its string value."""
        if isinstance(level, cls):
            return level
        try:
            return cls(str(level).lower())
        except ValueError:
            raise ValueError(f"Unknown hierarchy level: {level}")

    @property
    def rank(self) -> int:
        return HIERARCHY_ORDER.index(self)

    @property
    def parent(self) -> Optional['HierarchyLevel']:
        """Level one step closer to the root, None for the root."""
        if self.rank == 0:
            return None
        return HIERARCHY_ORDER[self.rank - 1]

    def shallower_levels(self) -> List['HierarchyLevel']:
        return HIERARCHY_ORDER[:self.rank]

    def deeper_levels(self) -> List['HierarchyLevel']:
        return HIERARCHY_ORDER[self.rank + 1:]


HIERARCHY_ORDER = list(HierarchyLevel)


class MatchFrequency(Enum):
    """How often a club generates matches."""
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class StatusFilter(Enum):
    """Club status filter vocabulary."""
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"

    @classmethod
    def coerce(cls, status: Union['StatusFilter', str, None]) -> 'StatusFilter':
        if isinstance(status, cls):
            return status
        if not status:
            return cls.ALL
        try:
            return cls(str(status).lower())
        except ValueError:
            raise ValueError(f"Unknown status filter: {status}")

    def matches(self, is_active: bool) -> bool:
        if self is StatusFilter.ALL:
            return True
        return is_active == (self is StatusFilter.ACTIVE)


def normalize_field(value: Any) -> str:
    """Absent or blank values become EMPTY_VALUE."""
    if value is None:
        return EMPTY_VALUE
    return str(value).strip()


@dataclass(frozen=True)
class ClubRecord:
    """A club as delivered by the club repository."""
    id: str
    name: str
    description: str = EMPTY_VALUE
    division: str = EMPTY_VALUE
    union: str = EMPTY_VALUE
    association: str = EMPTY_VALUE
    church: str = EMPTY_VALUE
    is_active: bool = True
    match_frequency: MatchFrequency = MatchFrequency.WEEKLY
    group_size: int = 2

    def get_level(self, level: Union[HierarchyLevel, str]) -> str:
        """Value of this club's field at the given hierarchy level."""
        return getattr(self, HierarchyLevel.coerce(level).value)

    def to_path_tuple(self) -> tuple:
        """Hierarchy path, root first."""
        return tuple(self.get_level(level) for level in HIERARCHY_ORDER)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the repository's storage format."""
        return {
            'id': self.id, 'name': self.name, 'description': self.description,
            'division': self.division, 'union': self.union,
            'association': self.association, 'church': self.church,
            'isActive': self.is_active,
            'matchFrequency': self.match_frequency.value,
            'groupSize': self.group_size
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClubRecord':
        """Create ClubRecord from a stored dictionary (camelCase or snake_case keys)."""
        is_active = data.get('isActive', data.get('is_active', True))
        frequency = data.get('matchFrequency', data.get('match_frequency')) or MatchFrequency.WEEKLY.value
        group_size = data.get('groupSize', data.get('group_size')) or 2
        return cls(
            id=normalize_field(data.get('id')),
            name=normalize_field(data.get('name')),
            description=normalize_field(data.get('description')),
            division=normalize_field(data.get('division')),
            union=normalize_field(data.get('union')),
            association=normalize_field(data.get('association')),
            church=normalize_field(data.get('church')),
            is_active=bool(is_active),
            match_frequency=MatchFrequency(frequency),
            group_size=int(group_size)
        )


@dataclass(frozen=True)
class OrgNode:
    """Aggregated hierarchy entry derived from the club list."""
    id: str
    name: str
    type: HierarchyLevel
    parent: Optional[str]
    club_count: int

    @staticmethod
    def make_id(level: HierarchyLevel, name: str) -> str:
        return f"{level.value}-{name}"
