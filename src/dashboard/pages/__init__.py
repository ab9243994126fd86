# src/dashboard/pages/__init__.py
"""
Dashboard pages module
"""

from . import clubs_management
from . import organization_management
from . import club_finder

__all__ = ['clubs_management', 'organization_management', 'club_finder']
