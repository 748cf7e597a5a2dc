"""In-Memory Repository Implementations"""
import logging
import threading
from datetime import date
from typing import Dict, List, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from domain.entities import Accommodation, Client, Owner, Reservation
from domain.identity import IdGenerator, IdGenerators
from domain.repositories import (
    AccommodationRepository,
    ClientRepository,
    ManageableRepository,
    OwnerRepository,
    ReservationRepository,
)
from domain.value_objects import ImportResult
from infrastructure.persistence import read_text, write_text_atomic

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InMemoryRepository(ManageableRepository[T]):
    """Dictionary-backed collection keyed by entity ID.

    A single re-entrant lock guards every operation. Entities entering through
    :meth:`import_json` or :meth:`load` are reported to the ID generators so
    that entities created afterwards get fresh IDs.
    """

    entity_type: Type = None
    entity_name = "Entity"

    def __init__(self, id_generators: Optional[IdGenerators] = None):
        self._storage: Dict[int, T] = {}
        self._lock = threading.RLock()
        self._id_generators = id_generators
        self._adapter = TypeAdapter(List[self.entity_type])

    def _generator(self) -> Optional[IdGenerator]:
        return None

    def _observe(self, entity: T) -> None:
        generator = self._generator()
        if generator is not None:
            generator.observe(entity.id)

    def _parse(self, data: str) -> List[T]:
        try:
            return self._adapter.validate_json(data)
        except ValidationError as e:
            raise ValueError(f"Failed to parse {self.entity_name} data: {e}") from e

    # ==================== COLLECTION METHODS ====================
    def add(self, entity: T) -> bool:
        if entity is None:
            raise ValueError(f"{self.entity_name} cannot be None")
        with self._lock:
            if entity.id in self._storage:
                return False
            self._storage[entity.id] = entity
            return True

    def remove(self, entity: T) -> bool:
        if entity is None:
            raise ValueError(f"{self.entity_name} cannot be None")
        with self._lock:
            return self._storage.pop(entity.id, None) is not None

    def find_by_id(self, entity_id: int) -> Optional[T]:
        with self._lock:
            return self._storage.get(entity_id)

    def find_all(self) -> List[T]:
        with self._lock:
            return list(self._storage.values())

    def count(self) -> int:
        with self._lock:
            return len(self._storage)

    # ==================== SERIALIZATION ====================
    def import_json(self, data: str) -> ImportResult:
        if not data or not data.strip():
            raise ValueError("Import data cannot be null or empty.")

        entities = self._parse(data)
        result = ImportResult()
        with self._lock:
            for entity in entities:
                if entity.id in self._storage:
                    result.replaced_count += 1
                else:
                    result.imported_count += 1
                self._storage[entity.id] = entity
                self._observe(entity)

        logger.info("%s import finished: %s", self.entity_name, result)
        return result

    def export_json(self) -> str:
        with self._lock:
            return self._adapter.dump_json(list(self._storage.values()), indent=2).decode("utf-8")

    # ==================== SNAPSHOTS ====================
    def save(self, file_path: str) -> None:
        write_text_atomic(file_path, self.export_json())
        logger.info("Saved %d %s record(s) to %s", self.count(), self.entity_name, file_path)

    def load(self, file_path: str) -> None:
        data = read_text(file_path)
        if not data.strip():
            raise ValueError(f"Snapshot file {file_path} is empty.")

        entities = self._parse(data)
        with self._lock:
            self._storage = {entity.id: entity for entity in entities}
            for entity in entities:
                self._observe(entity)

        logger.info("Loaded %d %s record(s) from %s", len(entities), self.entity_name, file_path)


class InMemoryClientRepository(InMemoryRepository[Client], ClientRepository):
    """In-memory implementation of ClientRepository"""

    entity_type = Client
    entity_name = "Client"

    def _generator(self) -> Optional[IdGenerator]:
        return self._id_generators.clients if self._id_generators else None


class InMemoryOwnerRepository(InMemoryRepository[Owner], OwnerRepository):
    """In-memory implementation of OwnerRepository"""

    entity_type = Owner
    entity_name = "Owner"

    def _generator(self) -> Optional[IdGenerator]:
        return self._id_generators.owners if self._id_generators else None


class InMemoryAccommodationRepository(InMemoryRepository[Accommodation], AccommodationRepository):
    """In-memory implementation of AccommodationRepository"""

    entity_type = Accommodation
    entity_name = "Accommodation"

    def _generator(self) -> Optional[IdGenerator]:
        return self._id_generators.accommodations if self._id_generators else None

    def _observe(self, entity: Accommodation) -> None:
        super()._observe(entity)
        if self._id_generators:
            for room in entity.rooms:
                self._id_generators.rooms.observe(room.id)

    def find_by_owner_id(self, owner_id: int) -> List[Accommodation]:
        """Find accommodations belonging to an owner"""
        with self._lock:
            return [a for a in self._storage.values() if a.owner_id == owner_id]


class InMemoryReservationRepository(InMemoryRepository[Reservation], ReservationRepository):
    """In-memory implementation of ReservationRepository"""

    entity_type = Reservation
    entity_name = "Reservation"

    def _generator(self) -> Optional[IdGenerator]:
        return self._id_generators.reservations if self._id_generators else None

    def _observe(self, entity: Reservation) -> None:
        super()._observe(entity)
        if self._id_generators:
            for payment in entity.payments:
                self._id_generators.payments.observe(payment.id)

    def find_by_client_id(self, client_id: int) -> List[Reservation]:
        """Find reservations by client ID"""
        with self._lock:
            return [r for r in self._storage.values() if r.client_id == client_id]

    def find_by_accommodation_id(self, accommodation_id: int) -> List[Reservation]:
        """Find reservations for an accommodation"""
        with self._lock:
            return [r for r in self._storage.values() if r.accommodation_id == accommodation_id]

    def find_future_reservations(self, accommodation_id: int, today: Optional[date] = None) -> List[Reservation]:
        """Find active reservations of an accommodation that end after today"""
        today = today or date.today()
        with self._lock:
            return [
                r for r in self._storage.values()
                if r.accommodation_id == accommodation_id and r.is_active() and r.check_out_date > today
            ]
