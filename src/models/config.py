import logging
from dataclasses import dataclass, fields
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)


@dataclass
class DashboardConfig:
    """Main dashboard configuration container."""
    # Club repository file
    clubs_file: Path

    # UI settings
    page_title: str = "Club Administration"
    default_page: str = "Clubs"

    # Registration picker only offers active clubs
    registration_active_only: bool = True

    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'DashboardConfig':
        """Create config from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(
            clubs_file=Path(config_dict['clubs_file']),
            page_title=config_dict.get('page_title', "Club Administration"),
            default_page=config_dict.get('default_page', "Clubs"),
            registration_active_only=bool(config_dict.get('registration_active_only', True)),
            log_level=str(config_dict.get('log_level', "INFO")).upper()
        )

    @classmethod
    def from_yaml(cls, config_path: Union[str, Path]) -> 'DashboardConfig':
        """Load config from a YAML file. Relative clubs_file paths resolve against the file's directory."""
        config_path = Path(config_path)
        with open(config_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        if 'clubs_file' not in config_dict:
            raise ValueError(f"Missing required config key 'clubs_file' in {config_path}")

        config = cls.from_dict(config_dict)
        if not config.clubs_file.is_absolute():
            config.clubs_file = config_path.parent / config.clubs_file
        return config

    def validate(self) -> bool:
        """Validate configuration"""
        if not str(self.clubs_file):
            return False
        if self.clubs_file.suffix != '.json':
            return False
        return self.log_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class CacheInfo:
    """Club repository cache metadata."""
    last_updated: Optional[datetime]
    entry_count: int
    source_file: str
