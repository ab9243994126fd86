"""
Services package - Clean imports for all services.
"""

# Core services
from .core.club_repository import ClubRepository, ClubRepositoryError, ClubNotFoundError

# Coordination services
from .coordination.hierarchy_coordination_service import HierarchyCoordinationService

# Page services
from .pages.clubs_management_service import ClubsManagementService
from .pages.organization_view_service import OrganizationViewService
from .pages.club_registration_service import ClubRegistrationService

# Utility services
from .utils.service_container import ServiceContainer

__all__ = [
    # Core
    'ClubRepository',
    'ClubRepositoryError',
    'ClubNotFoundError',

    # Coordination
    'HierarchyCoordinationService',

    # Pages
    'ClubsManagementService',
    'OrganizationViewService',
    'ClubRegistrationService',

    # Utils
    'ServiceContainer',
]
