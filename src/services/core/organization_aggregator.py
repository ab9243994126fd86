"""
Organization Aggregator - Folds the flat club list into hierarchy nodes.

Each distinct (level, name) pair becomes one OrgNode carrying the number of
clubs under it and the name of its parent one level up.
"""

import logging
from typing import Dict, List, Optional, Tuple, Union

from src.models import HIERARCHY_ORDER, ClubRecord, HierarchyLevel, OrgNode

logger = logging.getLogger(__name__)


def _club_tuples(club: ClubRecord) -> List[Tuple[HierarchyLevel, str, Optional[str]]]:
    """(level, name, parent_name) for each level of one club, root first."""
    tuples = []
    for level in HIERARCHY_ORDER:
        parent_level = level.parent
        parent_name = club.get_level(parent_level) if parent_level else None
        tuples.append((level, club.get_level(level), parent_name))
    return tuples


def build_organization_tree(clubs: List[ClubRecord]) -> List[OrgNode]:
    """
    Build deduplicated organization nodes from the club list.

    A node keeps the parent seen on its first occurrence. Later occurrences
    only increment the club count, even when they name a different parent.

    Returns:
        OrgNodes sorted by level rank, then name
    """
    counts: Dict[str, int] = {}
    first_seen: Dict[str, Tuple[HierarchyLevel, str, Optional[str]]] = {}

    for club in clubs:
        for level, name, parent_name in _club_tuples(club):
            if not name:
                continue

            key = OrgNode.make_id(level, name)
            if key not in first_seen:
                first_seen[key] = (level, name, parent_name)
                counts[key] = 1
                continue

            counts[key] += 1
            stored_parent = first_seen[key][2]
            if stored_parent != parent_name:
                logger.debug(
                    f"{level.value} '{name}' seen under '{parent_name}' "
                    f"but keeps first parent '{stored_parent}' (club {club.id})"
                )

    nodes = [
        OrgNode(id=key, name=name, type=level, parent=parent_name or None, club_count=counts[key])
        for key, (level, name, parent_name) in first_seen.items()
    ]
    return sorted(nodes, key=lambda node: (node.type.rank, node.name))


def get_organizations_of_type(nodes: List[OrgNode],
                              level: Union[HierarchyLevel, str]) -> List[OrgNode]:
    """Nodes of one level, sorted by name."""
    level = HierarchyLevel.coerce(level)
    return sorted((node for node in nodes if node.type is level), key=lambda node: node.name)


def search_organizations(nodes: List[OrgNode], query: str) -> List[OrgNode]:
    """Case-insensitive name filter, order preserved."""
    if not query:
        return list(nodes)
    needle = query.lower()
    return [node for node in nodes if needle in node.name.lower()]
