from .clubs_management_service import ClubsManagementService
from .organization_view_service import OrganizationViewService
from .club_registration_service import ClubRegistrationService

__all__ = [
    'ClubsManagementService',
    'OrganizationViewService',
    'ClubRegistrationService',
]
