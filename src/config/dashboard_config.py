# src/config/dashboard_config.py
"""
Dashboard configuration loading
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from src.models import DashboardConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CLUB_DASHBOARD_CONFIG"

PROJECT_ROOT = Path(__file__).resolve().parents[2]


# Default configuration
DEFAULT_CONFIG = DashboardConfig(
    clubs_file=PROJECT_ROOT / "data" / "clubs.json",
    page_title="Club Administration",
    default_page="Clubs",
    registration_active_only=True,
    log_level="INFO"
)


def load_config(config_path: Optional[Union[str, Path]] = None) -> DashboardConfig:
    """
    Load dashboard configuration.

    Lookup order: explicit path, CLUB_DASHBOARD_CONFIG environment variable,
    config.yaml at the project root, then DEFAULT_CONFIG.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or PROJECT_ROOT / "config.yaml"

    config_path = Path(config_path)
    if not config_path.exists():
        logger.info(f"No config file at {config_path}, using defaults")
        return DEFAULT_CONFIG

    config = DashboardConfig.from_yaml(config_path)
    if not config.validate():
        raise ValueError(f"Invalid dashboard configuration in {config_path}")

    logger.info(f"Loaded configuration from {config_path}")
    return config
