from functools import lru_cache
import logging

from venuebook.core.config import settings
from venuebook.application.ports.availability_source import AvailabilitySourcePort
from venuebook.application.ports.reservation_gateway import ReservationGatewayPort
from venuebook.application.ports.workflow_store import WorkflowStorePort
from venuebook.application.use_cases.venue_booking import VenueBookingUseCase
from venuebook.domain.entities.venue import Venue
from venuebook.infrastructure.gateway.holidaze_client import HolidazeClient
from venuebook.infrastructure.gateway.holidaze_gateway import (
    HolidazeAvailabilitySource,
    HolidazeReservationGateway,
)
from venuebook.infrastructure.gateway.mock_reservation_service import MockReservationService
from venuebook.infrastructure.notifications.log_notifier import LogNotifier
from venuebook.infrastructure.store.memory_store import MemoryWorkflowStore


DEMO_VENUES = [
    Venue(id="demo-venue", name="Fjord Cabin", price_per_night=120.0, max_guests=4),
]


def _use_mock_service() -> bool:
    return not settings.VENUE_API_KEY or settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_mock_service() -> MockReservationService:
    return MockReservationService(venues=list(DEMO_VENUES))


@lru_cache
def get_client() -> HolidazeClient:
    return HolidazeClient()


def get_reservation_gateway() -> ReservationGatewayPort:
    if _use_mock_service():
        return get_mock_service()
    return HolidazeReservationGateway(client=get_client())


def get_availability_source() -> AvailabilitySourcePort:
    if _use_mock_service():
        return get_mock_service()
    return HolidazeAvailabilitySource(client=get_client())


@lru_cache
def get_workflow_store() -> WorkflowStorePort:
    return MemoryWorkflowStore()


@lru_cache
def get_notifier() -> LogNotifier:
    return LogNotifier()


def get_venue_booking_use_case(venue_id: str) -> VenueBookingUseCase:
    logger = logging.getLogger(__name__)
    use_mock = _use_mock_service()
    logger.debug("Building venue booking use case", extra={"venue_id": venue_id, "mock": use_mock})
    return VenueBookingUseCase(
        venue_id=venue_id,
        availability_source=get_availability_source(),
        gateway=get_reservation_gateway(),
        notifier=get_notifier(),
        confirmation_prefix=settings.CONFIRMATION_PREFIX,
    )
