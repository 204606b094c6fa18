from dataclasses import dataclass

from ..application.services.catalog_service import CatalogService
from ..application.services.subscription_service import SubscriptionService
from ..domain.ports.persistence import PersistenceGateway
from .config import Settings


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    catalog_service: CatalogService
    subscription_service: SubscriptionService
