from dataclasses import dataclass
from typing import ClassVar, Dict, Tuple, Union

from .core import EMPTY_VALUE, HIERARCHY_ORDER, HierarchyLevel, StatusFilter


@dataclass(frozen=True)
class SelectionState:
    """
    Immutable per-level selection shared by the filter and form flows.

    Empty string means "unselected". Transitions live in the cascade
    controller and always return a new instance.
    """
    division: str = EMPTY_VALUE
    union: str = EMPTY_VALUE
    association: str = EMPTY_VALUE
    church: str = EMPTY_VALUE

    # Fields below the church level that a cascade must also clear
    LEAF_FIELDS: ClassVar[Tuple[str, ...]] = ()

    def get(self, level: Union[HierarchyLevel, str]) -> str:
        return getattr(self, HierarchyLevel.coerce(level).value)

    def is_selected(self, level: Union[HierarchyLevel, str]) -> bool:
        return bool(self.get(level))

    def to_filters(self) -> Dict[str, str]:
        """Hierarchy selections as a level -> value dictionary."""
        return {level.value: self.get(level) for level in HIERARCHY_ORDER}


@dataclass(frozen=True)
class FilterState(SelectionState):
    """Selection used by the clubs list filter."""
    status: StatusFilter = StatusFilter.ALL
    search_query: str = EMPTY_VALUE


@dataclass(frozen=True)
class ClubFormState(SelectionState):
    """Selection used by the create/edit and registration forms."""
    club_id: str = EMPTY_VALUE

    LEAF_FIELDS: ClassVar[Tuple[str, ...]] = ('club_id',)
