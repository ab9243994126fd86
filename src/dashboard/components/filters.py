"""
Hierarchical filtering UI components
"""
from typing import Callable, Dict, List, Tuple, Union

import streamlit as st

from src.models import HIERARCHY_ORDER, HierarchyLevel, SelectionState
from src.services.coordination.hierarchy_coordination_service import OPTION_KEYS

LEVEL_LABELS = {
    HierarchyLevel.DIVISION: "Division",
    HierarchyLevel.UNION: "Union",
    HierarchyLevel.ASSOCIATION: "Association",
    HierarchyLevel.CHURCH: "Church",
}

UpdateFn = Callable[[SelectionState, HierarchyLevel, str], SelectionState]


class HierarchicalFilters:
    """
    Reusable hierarchical selector with cascading dependencies.

    Options come from HierarchyCoordinationService; every pick is routed
    through ``update`` (a cascade transition) and the caller reruns the
    script when the selection changed.
    """

    @staticmethod
    def render(container, state: SelectionState, options: Dict[str, List[str]], update: UpdateFn,
               key_prefix: str, require_parent: bool = False,
               empty_label: str = "All") -> Tuple[SelectionState, bool]:
        """
        Render one selectbox per hierarchy level.

        Args:
            container: Streamlit container (st, st.sidebar, column, expander)
            state: Current selection
            options: Candidate lists keyed 'divisions', 'unions', 'associations', 'churches'
            update: Transition applied to a changed level
            key_prefix: Widget key prefix, unique per flow
            require_parent: Disable a level until its parent is chosen
            empty_label: Label of the "nothing selected" entry

        Returns:
            (new state, changed flag)
        """
        for level in HIERARCHY_ORDER:
            label = LEVEL_LABELS[level]
            current = state.get(level)
            parent = level.parent

            if require_parent and parent is not None and not state.get(parent):
                container.selectbox(
                    label, [f"Select {LEVEL_LABELS[parent].lower()} first"],
                    disabled=True, key=f"{key_prefix}_{level.value}_locked"
                )
                continue

            values = options[OPTION_KEYS[level]]
            if not values:
                container.selectbox(label, ["No data"], disabled=True, key=f"{key_prefix}_{level.value}_empty")
                continue

            display_options = [empty_label] + values
            index = display_options.index(current) if current in values else 0

            # Value in the key so programmatic changes (cascade, auto-select) reset the widget
            selected = container.selectbox(
                label,
                display_options,
                index=index,
                key=f"{key_prefix}_{level.value}_{current}"
            )

            value = "" if selected == empty_label else selected
            if value != current:
                return update(state, level, value), True

        return state, False

    @staticmethod
    def render_search_picker(container, label: str, values: List[str], search: str,
                             key: str) -> Union[str, None]:
        """Searchable picker for long lists; returns the chosen value or None."""
        if not values:
            container.caption(f"No {label.lower()} matches '{search}'" if search else f"No {label.lower()} available")
            return None
        choice = container.radio(label, values, index=None, key=key)
        return choice
