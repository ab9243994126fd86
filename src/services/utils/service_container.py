"""
Service Container - Manages all services and their initialization.
"""

from dataclasses import dataclass
import logging

from src.models import DashboardConfig
from ..core.club_repository import ClubRepository
from ..coordination.hierarchy_coordination_service import HierarchyCoordinationService
from ..pages.clubs_management_service import ClubsManagementService
from ..pages.organization_view_service import OrganizationViewService
from ..pages.club_registration_service import ClubRegistrationService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Service container for the club administration dashboard."""
    # Core data services
    club_repository: ClubRepository

    # Coordination layer
    hierarchy_coordination: HierarchyCoordinationService

    # Page services
    clubs_management: ClubsManagementService
    organization_view: OrganizationViewService
    club_registration: ClubRegistrationService

    @classmethod
    def initialize(cls, config: DashboardConfig) -> 'ServiceContainer':
        """Initialize all services."""
        try:
            logger.info("Initializing services...")

            # 1. Initialize core services
            club_repository = ClubRepository(clubs_file=config.clubs_file)

            # 2. Initialize coordination layer
            hierarchy_coordination = HierarchyCoordinationService(repository=club_repository)

            # 3. Initialize page services
            clubs_management = ClubsManagementService(data_coordination=hierarchy_coordination)
            organization_view = OrganizationViewService(data_coordination=hierarchy_coordination)
            club_registration = ClubRegistrationService(
                data_coordination=hierarchy_coordination,
                active_only=config.registration_active_only
            )

            logger.info("All services initialized successfully")

            return cls(
                club_repository=club_repository,
                hierarchy_coordination=hierarchy_coordination,
                clubs_management=clubs_management,
                organization_view=organization_view,
                club_registration=club_registration
            )

        except Exception as e:
            logger.error(f"Failed to initialize services: {e}")
            raise

    def warm_up(self) -> None:
        """Warm up services (load the club list)."""
        try:
            logger.info("Warming up services...")

            clubs = self.club_repository.get_all_clubs()
            if not clubs:
                logger.warning("No club data available")
            else:
                logger.info(f"Club list loaded: {len(clubs)} clubs")

        except Exception as e:
            logger.error(f"Error during service warm-up: {e}")
            raise
