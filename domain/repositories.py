"""Domain Repository Interfaces"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Generic, List, Optional, TypeVar

from domain.entities import Accommodation, Client, Owner, Reservation
from domain.value_objects import ImportResult

T = TypeVar("T")


class ManageableRepository(ABC, Generic[T]):
    """Repository interface shared by every aggregate collection"""

    @abstractmethod
    def add(self, entity: T) -> bool:
        """Add entity; False if its ID is already taken"""
        pass

    @abstractmethod
    def remove(self, entity: T) -> bool:
        """Remove entity; False if its ID is not present"""
        pass

    @abstractmethod
    def find_by_id(self, entity_id: int) -> Optional[T]:
        """Find entity by ID"""
        pass

    @abstractmethod
    def find_all(self) -> List[T]:
        """Find all entities in insertion order"""
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def import_json(self, data: str) -> ImportResult:
        """Merge serialized entities, replacing those whose ID collides"""
        pass

    @abstractmethod
    def export_json(self) -> str:
        """Serialize all entities"""
        pass

    @abstractmethod
    def save(self, file_path: str) -> None:
        """Write a snapshot of the collection to disk"""
        pass

    @abstractmethod
    def load(self, file_path: str) -> None:
        """Replace the collection with a snapshot read from disk"""
        pass


class ClientRepository(ManageableRepository[Client]):
    """Repository interface for Client Aggregate"""


class OwnerRepository(ManageableRepository[Owner]):
    """Repository interface for Owner Aggregate"""


class AccommodationRepository(ManageableRepository[Accommodation]):
    """Repository interface for Accommodation Aggregate"""

    @abstractmethod
    def find_by_owner_id(self, owner_id: int) -> List[Accommodation]:
        """Find accommodations belonging to an owner"""
        pass


class ReservationRepository(ManageableRepository[Reservation]):
    """Repository interface for Reservation Aggregate"""

    @abstractmethod
    def find_by_client_id(self, client_id: int) -> List[Reservation]:
        """Find reservations by client ID"""
        pass

    @abstractmethod
    def find_by_accommodation_id(self, accommodation_id: int) -> List[Reservation]:
        """Find reservations for an accommodation"""
        pass

    @abstractmethod
    def find_future_reservations(self, accommodation_id: int, today: Optional[date] = None) -> List[Reservation]:
        """Find active reservations of an accommodation that end after today"""
        pass
