"""
ClubRepository - File-backed source of club records.

Loads the club list from a JSON file once, normalizes every record at the
boundary (blank hierarchy fields become empty strings) and serves it to the
hierarchy services. Writes go straight back to the same file.
"""

import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from src.models import CacheInfo, ClubRecord, MatchFrequency, SelectionState

logger = logging.getLogger(__name__)


class ClubRepositoryError(RuntimeError):
    """Club file could not be read or written."""


class ClubNotFoundError(ClubRepositoryError):
    """No club with the requested id."""


class ClubRepository:
    """
    Club list storage with an in-memory cache.

    The cached list is replaced, never mutated, so callers holding an older
    list keep a consistent snapshot. ``version`` increments on every change
    and can be used as a memoization key.
    """

    def __init__(self, clubs_file: Union[str, Path]):
        """
        Initialize repository.

        Args:
            clubs_file: Path to JSON file holding {"clubs": [...]} or a bare list
        """
        self.clubs_file = Path(clubs_file)
        self._clubs: Optional[List[ClubRecord]] = None
        self._loaded_at: Optional[datetime] = None
        self._version: int = 0

        if not self.clubs_file.exists():
            logger.warning(f"Clubs file does not exist: {self.clubs_file}")

    @property
    def version(self) -> int:
        return self._version

    # ========================================================================
    # Queries
    # ========================================================================

    def get_all_clubs(self, force_refresh: bool = False) -> List[ClubRecord]:
        """
        Get every club.

        Args:
            force_refresh: Re-read the file even if a list is cached

        Returns:
            Club list (empty when the file does not exist)

        Raises:
            ClubRepositoryError: File is unreadable or malformed
        """
        if force_refresh or self._clubs is None:
            logger.info(f"Loading clubs from {self.clubs_file}")
            self._set_clubs(self._load_clubs())
        return self._clubs

    def get_active_clubs(self) -> List[ClubRecord]:
        return [club for club in self.get_all_clubs() if club.is_active]

    def get_club(self, club_id: str) -> ClubRecord:
        for club in self.get_all_clubs():
            if club.id == club_id:
                return club
        raise ClubNotFoundError(f"Club not found: {club_id}")

    def get_cache_info(self) -> CacheInfo:
        return CacheInfo(
            last_updated=self._loaded_at,
            entry_count=len(self._clubs) if self._clubs is not None else 0,
            source_file=str(self.clubs_file)
        )

    # ========================================================================
    # Mutations
    # ========================================================================

    def create_club(self, name: str, description: str, match_frequency: MatchFrequency,
                    group_size: int, hierarchy: SelectionState) -> ClubRecord:
        """
        Create a club under the selected hierarchy path and persist it.

        Raises:
            ValueError: Name missing, church not selected, or group size below 2
        """
        if not name or not name.strip():
            raise ValueError("Club name is required")
        if not hierarchy.church:
            raise ValueError("A church must be selected before creating a club")
        if group_size < 2:
            raise ValueError(f"Group size must be at least 2, got {group_size}")

        clubs = self.get_all_clubs()
        logger.info(f"Creating club {name} in church {hierarchy.church}")

        new_club = ClubRecord.from_dict({
            'id': self._next_id(clubs),
            'name': name,
            'description': description,
            'division': hierarchy.division,
            'union': hierarchy.union,
            'association': hierarchy.association,
            'church': hierarchy.church,
            'isActive': True,
            'matchFrequency': MatchFrequency(match_frequency).value,
            'groupSize': group_size
        })

        self._save_clubs(clubs + [new_club])
        logger.info(f"Created club {new_club.id}: {new_club.name}")
        return new_club

    def set_club_status(self, club_id: str, is_active: bool) -> ClubRecord:
        """Activate or deactivate a club and persist the change."""
        clubs = self.get_all_clubs()
        updated = None
        new_clubs = []
        for club in clubs:
            if club.id == club_id:
                updated = replace(club, is_active=is_active)
                new_clubs.append(updated)
            else:
                new_clubs.append(club)

        if updated is None:
            logger.warning(f"Cannot update status, club not found: {club_id}")
            raise ClubNotFoundError(f"Club not found: {club_id}")

        self._save_clubs(new_clubs)
        logger.info(f"Club {club_id} is now {'active' if is_active else 'inactive'}")
        return updated

    # ========================================================================
    # File I/O
    # ========================================================================

    def _load_clubs(self) -> List[ClubRecord]:
        if not self.clubs_file.exists():
            logger.warning(f"No clubs file found at {self.clubs_file}, starting empty")
            return []

        try:
            with open(self.clubs_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error loading clubs file {self.clubs_file}: {e}")
            raise ClubRepositoryError(f"Could not read clubs file {self.clubs_file}: {e}") from e

        raw_clubs = data.get('clubs', []) if isinstance(data, dict) else data
        if not isinstance(raw_clubs, list):
            raise ClubRepositoryError(f"Expected a list of clubs in {self.clubs_file}")

        clubs = []
        for index, raw_club in enumerate(raw_clubs):
            club = self._parse_club(index, raw_club)
            if club is not None:
                clubs.append(club)

        logger.info(f"Loaded {len(clubs)} clubs from {self.clubs_file}")
        return clubs

    def _parse_club(self, index: int, raw_club: Any) -> Optional[ClubRecord]:
        if not isinstance(raw_club, dict):
            logger.warning(f"Skipping club entry {index}: not an object")
            return None
        try:
            club = ClubRecord.from_dict(raw_club)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping club entry {index}: {e}")
            return None
        if not club.id:
            logger.warning(f"Skipping club entry {index}: missing id")
            return None
        return club

    def _save_clubs(self, clubs: List[ClubRecord]) -> None:
        payload: Dict[str, Any] = {
            'metadata': {'last_updated': datetime.now().isoformat()},
            'clubs': [club.to_dict() for club in clubs]
        }
        try:
            self.clubs_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.clubs_file, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error(f"Error saving clubs file {self.clubs_file}: {e}")
            raise ClubRepositoryError(f"Could not write clubs file {self.clubs_file}: {e}") from e

        self._set_clubs(clubs)
        logger.info(f"Clubs saved to {self.clubs_file}")

    def _set_clubs(self, clubs: List[ClubRecord]) -> None:
        self._clubs = list(clubs)
        self._loaded_at = datetime.now()
        self._version += 1

    @staticmethod
    def _next_id(clubs: List[ClubRecord]) -> str:
        numeric_ids = [int(club.id) for club in clubs if club.id.isdigit()]
        return str(max(numeric_ids, default=0) + 1)
