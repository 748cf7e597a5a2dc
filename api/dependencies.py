"""API Dependencies - Service wiring"""
import logging
import os
from typing import Optional

from application.services import BookingManager
from domain.identity import IdGenerators
from infrastructure.config import Config
from infrastructure.repositories.in_memory_repositories import (
    InMemoryAccommodationRepository,
    InMemoryClientRepository,
    InMemoryOwnerRepository,
    InMemoryReservationRepository,
)

logger = logging.getLogger(__name__)

_booking_manager: Optional[BookingManager] = None


def build_booking_manager(id_generators: Optional[IdGenerators] = None) -> BookingManager:
    """Wire a BookingManager over fresh in-memory repositories"""
    id_generators = id_generators or IdGenerators()
    return BookingManager(
        clients=InMemoryClientRepository(id_generators),
        owners=InMemoryOwnerRepository(id_generators),
        accommodations=InMemoryAccommodationRepository(id_generators),
        reservations=InMemoryReservationRepository(id_generators),
        id_generators=id_generators
    )


def get_booking_manager() -> BookingManager:
    """Process-wide manager, loaded from ``Config.DATA_DIR`` when autoload is on"""
    global _booking_manager
    if _booking_manager is None:
        _booking_manager = build_booking_manager()
        if Config.AUTOLOAD and os.path.isdir(Config.DATA_DIR):
            logger.info("Autoloading snapshots from %s", Config.DATA_DIR)
            _booking_manager.load_all(Config.DATA_DIR)
    return _booking_manager
