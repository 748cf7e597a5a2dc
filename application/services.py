"""Application Services - Business use cases"""
import logging
import os
import threading
from datetime import date, datetime
from typing import List, Optional, Tuple

from domain import validators
from domain.entities import Accommodation, Client, Owner, Reservation, Room
from domain.enums import (
    AccommodationType,
    CancellationResult,
    PaymentMethod,
    PaymentResult,
    RemoveAccommodationResult,
    RoomType,
    StatusChangeResult,
    UpdateAccommodationResult,
    UpdateClientResult,
    UpdateOwnerResult,
    UpdateReservationResult,
)
from domain.exceptions import (
    AccommodationCreationError,
    ClientCreationError,
    DomainValidationError,
    EntityNotFoundError,
    OwnerCreationError,
    ReservationCreationError,
    RoomCreationError,
    TotalCostError,
)
from domain.identity import IdGenerators
from domain.repositories import AccommodationRepository, ClientRepository, OwnerRepository, ReservationRepository
from domain.value_objects import ImportResult
from infrastructure.persistence import write_text_atomic

logger = logging.getLogger(__name__)

CLIENTS_FILE = "clients.json"
OWNERS_FILE = "owners.json"
ACCOMMODATIONS_FILE = "accommodations.json"
RESERVATIONS_FILE = "reservations.json"


class BookingManager:
    """Service for every booking use case.

    Operations on existing entities report expected failures through outcome
    enums, ``create_*`` operations raise a typed ``*CreationError`` chained to
    the cause, and ``find_*`` operations return ``None`` when nothing matches.
    ``IdSpaceExhaustedError`` is never translated.
    """

    def __init__(self,
                 clients: ClientRepository,
                 owners: OwnerRepository,
                 accommodations: AccommodationRepository,
                 reservations: ReservationRepository,
                 id_generators: IdGenerators):
        self.clients = clients
        self.owners = owners
        self.accommodations = accommodations
        self.reservations = reservations
        self.id_generators = id_generators
        # Serializes availability checks with the calendar writes that follow them
        self._booking_lock = threading.RLock()

    # ==================== SNAPSHOTS ====================
    def _snapshot_files(self):
        return (
            (self.clients, CLIENTS_FILE),
            (self.owners, OWNERS_FILE),
            (self.accommodations, ACCOMMODATIONS_FILE),
            (self.reservations, RESERVATIONS_FILE),
        )

    def save_all(self, data_folder: str) -> None:
        """Save every repository into ``data_folder``, which must exist"""
        logger.info("Saving all data to %s", data_folder)
        for repository, file_name in self._snapshot_files():
            repository.save(os.path.join(data_folder, file_name))

    def load_all(self, data_folder: str) -> None:
        """Load every snapshot found in ``data_folder``; missing files are skipped"""
        logger.info("Loading all data from %s", data_folder)
        for repository, file_name in self._snapshot_files():
            file_path = os.path.join(data_folder, file_name)
            if not os.path.exists(file_path):
                logger.warning("Snapshot %s not found, skipping", file_path)
                continue
            repository.load(file_path)

    # ==================== CLIENT MANAGEMENT ====================
    def create_basic_client(self, first_name: str, last_name: str, email: str) -> Client:
        return self.create_complete_client(first_name, last_name, email)

    def create_complete_client(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        preferred_payment_method: PaymentMethod = PaymentMethod.NONE
    ) -> Client:
        """Create a client and add it to the system"""
        logger.info("Creating client %s %s", first_name, last_name)
        try:
            client = Client.create(
                self.id_generators.clients,
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone_number=phone_number,
                address=address,
                preferred_payment_method=preferred_payment_method
            )
        except DomainValidationError as e:
            logger.error("Client validation failed: %s", e)
            raise ClientCreationError(f"Failed to create client: {e}") from e

        if not self.clients.add(client):
            raise ClientCreationError(f"Client with ID {client.id} already exists.")

        logger.info("Created client %s", client.id)
        return client

    def find_client_by_id(self, client_id: int) -> Optional[Client]:
        client = self.clients.find_by_id(client_id)
        if client is None:
            logger.warning("Client with ID %s not found", client_id)
        return client

    def update_client(
        self,
        client_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        preferred_payment_method: PaymentMethod = PaymentMethod.UNCHANGED
    ) -> UpdateClientResult:
        """Update the supplied fields; nothing changes unless all of them are valid"""
        logger.info("Attempting to update client %s", client_id)

        client = self.clients.find_by_id(client_id)
        if client is None:
            logger.warning("Client with ID %s not found", client_id)
            return UpdateClientResult.CLIENT_NOT_FOUND

        if first_name is not None and not validators.is_valid_name(first_name):
            return UpdateClientResult.INVALID_FIRST_NAME
        if last_name is not None and not validators.is_valid_name(last_name):
            return UpdateClientResult.INVALID_LAST_NAME
        if email is not None and not validators.is_valid_email(email):
            return UpdateClientResult.INVALID_EMAIL
        if phone_number is not None and not validators.is_valid_phone_number(phone_number):
            return UpdateClientResult.INVALID_PHONE_NUMBER
        if address is not None and not validators.is_valid_address(address):
            return UpdateClientResult.INVALID_ADDRESS
        if preferred_payment_method != PaymentMethod.UNCHANGED and \
                not validators.is_valid_payment_method(preferred_payment_method, allow_none=True):
            return UpdateClientResult.INVALID_PAYMENT_METHOD

        try:
            if first_name is not None:
                client.first_name = first_name
            if last_name is not None:
                client.last_name = last_name
            if email is not None:
                client.email = email
            if phone_number is not None:
                client.phone_number = phone_number
            if address is not None:
                client.address = address
            if preferred_payment_method != PaymentMethod.UNCHANGED:
                client.preferred_payment_method = preferred_payment_method
        except Exception:
            logger.exception("Unexpected error while updating client %s", client_id)
            return UpdateClientResult.ERROR

        logger.info("Updated client %s", client_id)
        return UpdateClientResult.SUCCESS

    def remove_client(self, client_id: int) -> bool:
        client = self.clients.find_by_id(client_id)
        if client is None:
            logger.warning("Client with ID %s not found, nothing removed", client_id)
            return False
        self.clients.remove(client)
        logger.info("Removed client %s", client_id)
        return True

    def import_clients(self, data: str) -> ImportResult:
        return self.clients.import_json(data)

    def export_clients(self, file_path: str) -> None:
        write_text_atomic(file_path, self.clients.export_json())

    # ==================== OWNER MANAGEMENT ====================
    def create_basic_owner(self, first_name: str, last_name: str, email: str) -> Owner:
        return self.create_complete_owner(first_name, last_name, email)

    def create_complete_owner(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: Optional[str] = None,
        address: Optional[str] = None
    ) -> Owner:
        """Create an owner and add it to the system"""
        logger.info("Creating owner %s %s", first_name, last_name)
        try:
            owner = Owner.create(
                self.id_generators.owners,
                first_name=first_name,
                last_name=last_name,
                email=email,
                phone_number=phone_number,
                address=address
            )
        except DomainValidationError as e:
            logger.error("Owner validation failed: %s", e)
            raise OwnerCreationError(f"Failed to create owner: {e}") from e

        if not self.owners.add(owner):
            raise OwnerCreationError(f"Owner with ID {owner.id} already exists.")

        logger.info("Created owner %s", owner.id)
        return owner

    def find_owner_by_id(self, owner_id: int) -> Optional[Owner]:
        owner = self.owners.find_by_id(owner_id)
        if owner is None:
            logger.warning("Owner with ID %s not found", owner_id)
        return owner

    def update_owner(
        self,
        owner_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        phone_number: Optional[str] = None,
        address: Optional[str] = None
    ) -> UpdateOwnerResult:
        logger.info("Attempting to update owner %s", owner_id)

        owner = self.owners.find_by_id(owner_id)
        if owner is None:
            logger.warning("Owner with ID %s not found", owner_id)
            return UpdateOwnerResult.OWNER_NOT_FOUND

        if first_name is not None and not validators.is_valid_name(first_name):
            return UpdateOwnerResult.INVALID_FIRST_NAME
        if last_name is not None and not validators.is_valid_name(last_name):
            return UpdateOwnerResult.INVALID_LAST_NAME
        if email is not None and not validators.is_valid_email(email):
            return UpdateOwnerResult.INVALID_EMAIL
        if phone_number is not None and not validators.is_valid_phone_number(phone_number):
            return UpdateOwnerResult.INVALID_PHONE_NUMBER
        if address is not None and not validators.is_valid_address(address):
            return UpdateOwnerResult.INVALID_ADDRESS

        try:
            if first_name is not None:
                owner.first_name = first_name
            if last_name is not None:
                owner.last_name = last_name
            if email is not None:
                owner.email = email
            if phone_number is not None:
                owner.phone_number = phone_number
            if address is not None:
                owner.address = address
        except Exception:
            logger.exception("Unexpected error while updating owner %s", owner_id)
            return UpdateOwnerResult.ERROR

        logger.info("Updated owner %s", owner_id)
        return UpdateOwnerResult.SUCCESS

    def remove_owner(self, owner_id: int) -> bool:
        owner = self.owners.find_by_id(owner_id)
        if owner is None:
            logger.warning("Owner with ID %s not found, nothing removed", owner_id)
            return False
        self.owners.remove(owner)
        logger.info("Removed owner %s", owner_id)
        return True

    def import_owners(self, data: str) -> ImportResult:
        return self.owners.import_json(data)

    def export_owners(self, file_path: str) -> None:
        write_text_atomic(file_path, self.owners.export_json())

    # ==================== ACCOMMODATION MANAGEMENT ====================
    def create_accommodation(
        self,
        owner_id: int,
        accommodation_type: AccommodationType,
        name: str,
        address: str
    ) -> Accommodation:
        """Create an accommodation and link it to its owner"""
        logger.info("Creating accommodation '%s' for owner %s", name, owner_id)

        owner = self.owners.find_by_id(owner_id)
        if owner is None:
            logger.warning("Owner with ID %s not found", owner_id)
            raise AccommodationCreationError(f"Failed to create accommodation: owner {owner_id} not found.") \
                from EntityNotFoundError("Owner", owner_id)

        try:
            accommodation = Accommodation.create(
                self.id_generators.accommodations,
                owner_id=owner_id,
                accommodation_type=accommodation_type,
                name=name,
                address=address
            )
        except DomainValidationError as e:
            logger.error("Accommodation validation failed: %s", e)
            raise AccommodationCreationError(f"Failed to create accommodation: {e}") from e

        if not owner.add_accommodation(accommodation.id):
            raise AccommodationCreationError(f"Owner {owner_id} already references accommodation {accommodation.id}.")
        if not self.accommodations.add(accommodation):
            owner.remove_accommodation(accommodation.id)
            raise AccommodationCreationError(f"Accommodation with ID {accommodation.id} already exists.")

        logger.info("Created accommodation %s", accommodation.id)
        return accommodation

    def add_room(self, accommodation_id: int, room_type: RoomType, price_per_night) -> Room:
        """Create a room inside an existing accommodation"""
        logger.info("Adding %s room to accommodation %s", room_type, accommodation_id)

        accommodation = self.accommodations.find_by_id(accommodation_id)
        if accommodation is None:
            logger.warning("Accommodation with ID %s not found", accommodation_id)
            raise RoomCreationError(f"Failed to create room: accommodation {accommodation_id} not found.") \
                from EntityNotFoundError("Accommodation", accommodation_id)

        try:
            room = Room.create(self.id_generators.rooms, room_type=room_type, price_per_night=price_per_night)
        except DomainValidationError as e:
            logger.error("Room validation failed: %s", e)
            raise RoomCreationError(f"Failed to create room: {e}") from e

        accommodation.add_room(room)
        logger.info("Added room %s to accommodation %s", room.id, accommodation_id)
        return room

    def find_accommodation_by_id(self, accommodation_id: int) -> Optional[Accommodation]:
        accommodation = self.accommodations.find_by_id(accommodation_id)
        if accommodation is None:
            logger.warning("Accommodation with ID %s not found", accommodation_id)
        return accommodation

    def update_accommodation(
        self,
        accommodation_id: int,
        accommodation_type: Optional[AccommodationType] = None,
        name: Optional[str] = None,
        address: Optional[str] = None
    ) -> UpdateAccommodationResult:
        logger.info("Attempting to update accommodation %s", accommodation_id)

        accommodation = self.accommodations.find_by_id(accommodation_id)
        if accommodation is None:
            logger.warning("Accommodation with ID %s not found", accommodation_id)
            return UpdateAccommodationResult.ACCOMMODATION_NOT_FOUND

        if accommodation_type is not None and not validators.is_valid_accommodation_type(accommodation_type):
            return UpdateAccommodationResult.INVALID_TYPE
        if name is not None and not validators.is_valid_accommodation_name(name):
            return UpdateAccommodationResult.INVALID_NAME
        if address is not None and not validators.is_valid_address(address):
            return UpdateAccommodationResult.INVALID_ADDRESS

        try:
            if accommodation_type is not None:
                accommodation.type = accommodation_type
            if name is not None:
                accommodation.name = name
            if address is not None:
                accommodation.address = address
        except Exception:
            logger.exception("Unexpected error while updating accommodation %s", accommodation_id)
            return UpdateAccommodationResult.ERROR

        logger.info("Updated accommodation %s", accommodation_id)
        return UpdateAccommodationResult.SUCCESS

    def remove_accommodation(self, accommodation_id: int) -> RemoveAccommodationResult:
        """Remove an accommodation from the system and from its owner"""
        logger.info("Attempting to remove accommodation %s", accommodation_id)
        try:
            accommodation = self._find_accommodation(accommodation_id)
            owner = self._find_owner(accommodation.owner_id)

            if not self.accommodations.remove(accommodation):
                logger.error("Failed to remove accommodation %s from the system", accommodation_id)
                return RemoveAccommodationResult.ACCOMMODATION_REMOVAL_FAILED

            if not owner.remove_accommodation(accommodation_id):
                logger.error("Failed to detach accommodation %s from owner %s", accommodation_id, owner.id)
                return RemoveAccommodationResult.ACCOMMODATION_DISASSOCIATION_FAILED

            logger.info("Removed accommodation %s", accommodation_id)
            return RemoveAccommodationResult.SUCCESS
        except EntityNotFoundError as e:
            logger.warning("%s", e)
            if e.entity_type == "Owner":
                return RemoveAccommodationResult.OWNER_NOT_FOUND
            return RemoveAccommodationResult.ACCOMMODATION_NOT_FOUND
        except Exception:
            logger.exception("Unexpected error while removing accommodation %s", accommodation_id)
            return RemoveAccommodationResult.ERROR

    def check_availability(
        self,
        accommodation_id: int,
        start: date,
        end: date,
        room_id: Optional[int] = None
    ) -> bool:
        """True when the room (or, without one, any room) is free for [start, end)"""
        accommodation = self.accommodations.find_by_id(accommodation_id)
        if accommodation is None:
            logger.warning("Accommodation with ID %s not found", accommodation_id)
            return False
        if not validators.is_valid_date_range(start, end):
            logger.warning("Invalid date range %s - %s", start, end)
            return False

        if room_id:
            room = accommodation.find_room_by_id(room_id)
            return room is not None and room.is_available(start, end)
        return accommodation.is_available(start, end)

    def import_accommodations(self, data: str) -> ImportResult:
        return self.accommodations.import_json(data)

    def export_accommodations(self, file_path: str) -> None:
        write_text_atomic(file_path, self.accommodations.export_json())

    # ==================== RESERVATION MANAGEMENT ====================
    def create_reservation(
        self,
        client_id: int,
        accommodation_id: int,
        room_id: int,
        check_in: date,
        check_out: date,
        today: Optional[date] = None
    ) -> Reservation:
        """Book a room, or the whole accommodation when ``room_id`` is 0"""
        logger.info(
            "Creating reservation for client %s in accommodation %s, room %s, %s - %s",
            client_id, accommodation_id, room_id, check_in, check_out
        )

        try:
            self._find_client(client_id)
            accommodation = self._find_accommodation(accommodation_id)
            rooms = self._rooms_for(accommodation, room_id)
        except EntityNotFoundError as e:
            logger.warning("%s", e)
            raise ReservationCreationError(f"Failed to create reservation: {e}") from e

        if not validators.is_valid_date_range(check_in, check_out):
            raise ReservationCreationError("Failed to create reservation: check-out must be after check-in.")

        with self._booking_lock:
            if not all(room.is_available(check_in, check_out) for room in rooms):
                logger.warning("Accommodation %s room %s unavailable for %s - %s",
                               accommodation_id, room_id, check_in, check_out)
                raise ReservationCreationError("The selected dates are not available.")

            try:
                total_cost = sum(room.calculate_total_cost(check_in, check_out) for room in rooms)
            except ValueError as e:
                raise TotalCostError(f"Failed to calculate total cost: {e}") from e

            try:
                reservation = Reservation.create(
                    self.id_generators.reservations,
                    client_id=client_id,
                    accommodation_id=accommodation_id,
                    room_id=room_id,
                    accommodation_type=accommodation.type,
                    check_in_date=check_in,
                    check_out_date=check_out,
                    total_cost=total_cost,
                    today=today
                )
            except DomainValidationError as e:
                logger.error("Reservation validation failed: %s", e)
                raise ReservationCreationError(f"Failed to create reservation: {e}") from e

            for room in rooms:
                room.add_reservation(check_in, check_out)
            if not self.reservations.add(reservation):
                for room in rooms:
                    room.remove_reservation(check_in, check_out)
                raise ReservationCreationError(f"Reservation with ID {reservation.id} already exists.")

        logger.info("Created reservation %s with total cost %s", reservation.id, reservation.total_cost)
        return reservation

    def find_reservation_by_id(self, reservation_id: int) -> Optional[Reservation]:
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            logger.warning("Reservation with ID %s not found", reservation_id)
        return reservation

    def find_reservations_by_client(self, client_id: int) -> List[Reservation]:
        return self.reservations.find_by_client_id(client_id)

    def find_future_reservations(self, accommodation_id: int, today: Optional[date] = None) -> List[Reservation]:
        return self.reservations.find_future_reservations(accommodation_id, today)

    def update_reservation(
        self,
        reservation_id: int,
        new_check_in: Optional[date] = None,
        new_check_out: Optional[date] = None
    ) -> UpdateReservationResult:
        """Move a stay; its own current dates do not block the new ones"""
        logger.info("Attempting to update reservation %s", reservation_id)
        try:
            with self._booking_lock:
                reservation = self._find_reservation(reservation_id)
                accommodation, rooms = self._find_associated_entities(reservation)

                if not reservation.is_modifiable():
                    logger.warning("Reservation %s cannot be changed while %s", reservation_id, reservation.status.name)
                    return UpdateReservationResult.INVALID_STATUS

                check_in = new_check_in or reservation.check_in_date
                check_out = new_check_out or reservation.check_out_date
                if not validators.is_valid_date_range(check_in, check_out):
                    return UpdateReservationResult.INVALID_DATES

                current = reservation.date_range
                if not all(room.is_available(check_in, check_out, exclude=current) for room in rooms):
                    logger.warning("Accommodation %s unavailable for %s - %s", accommodation.id, check_in, check_out)
                    return UpdateReservationResult.DATES_UNAVAILABLE

                for room in rooms:
                    room.remove_reservation(current.start, current.end)
                    room.add_reservation(check_in, check_out)
                reservation.reschedule(check_in, check_out)

            logger.info("Updated reservation %s to %s - %s", reservation_id, check_in, check_out)
            return UpdateReservationResult.SUCCESS
        except EntityNotFoundError as e:
            logger.warning("%s", e)
            return {
                "Reservation": UpdateReservationResult.RESERVATION_NOT_FOUND,
                "Accommodation": UpdateReservationResult.ACCOMMODATION_NOT_FOUND,
            }.get(e.entity_type, UpdateReservationResult.ROOM_NOT_FOUND)
        except Exception:
            logger.exception("Unexpected error while updating reservation %s", reservation_id)
            return UpdateReservationResult.ERROR

    def cancel_reservation(self, reservation_id: int) -> CancellationResult:
        """Release the booked dates and mark the reservation cancelled"""
        logger.info("Attempting to cancel reservation %s", reservation_id)
        try:
            with self._booking_lock:
                reservation = self._find_reservation(reservation_id)
                _, rooms = self._find_associated_entities(reservation)

                if not reservation.is_cancellable():
                    logger.warning("Reservation %s cannot be cancelled while %s",
                                   reservation_id, reservation.status.name)
                    return CancellationResult.INVALID_STATUS

                self._release_dates(reservation, rooms)
                reservation.cancel()

            logger.info("Cancelled reservation %s", reservation_id)
            return CancellationResult.SUCCESS
        except EntityNotFoundError as e:
            logger.warning("%s", e)
            return {
                "Reservation": CancellationResult.RESERVATION_NOT_FOUND,
                "Accommodation": CancellationResult.ACCOMMODATION_NOT_FOUND,
            }.get(e.entity_type, CancellationResult.ROOM_NOT_FOUND)
        except Exception:
            logger.exception("Unexpected error while cancelling reservation %s", reservation_id)
            return CancellationResult.ERROR

    def check_in(self, reservation_id: int) -> StatusChangeResult:
        return self._change_status(reservation_id, "check_in")

    def check_out(self, reservation_id: int) -> StatusChangeResult:
        return self._change_status(reservation_id, "check_out")

    def mark_no_show(self, reservation_id: int) -> StatusChangeResult:
        return self._change_status(reservation_id, "mark_no_show", release=True)

    def decline_reservation(self, reservation_id: int) -> StatusChangeResult:
        return self._change_status(reservation_id, "decline", release=True)

    def make_payment(
        self,
        reservation_id: int,
        amount,
        method: PaymentMethod,
        paid_at: Optional[datetime] = None
    ) -> PaymentResult:
        logger.info("Attempting payment of %s on reservation %s", amount, reservation_id)

        with self._booking_lock:
            reservation = self.reservations.find_by_id(reservation_id)
            if reservation is None:
                logger.warning("Reservation with ID %s not found", reservation_id)
                return PaymentResult.RESERVATION_NOT_FOUND

            try:
                result = reservation.make_payment(amount, method, self.id_generators.payments, paid_at=paid_at)
            except DomainValidationError:
                logger.exception("Payment on reservation %s rejected", reservation_id)
                return PaymentResult.ERROR

        if result == PaymentResult.SUCCESS:
            logger.info("Payment recorded on reservation %s, remaining balance %s",
                        reservation_id, reservation.remaining_balance)
        else:
            logger.error("Payment on reservation %s failed: %s", reservation_id, result.value)
        return result

    def remove_reservation(self, reservation_id: int) -> bool:
        """Delete a reservation record, releasing its dates if it still holds any"""
        with self._booking_lock:
            reservation = self.reservations.find_by_id(reservation_id)
            if reservation is None:
                logger.warning("Reservation with ID %s not found, nothing removed", reservation_id)
                return False

            if reservation.is_active():
                accommodation = self.accommodations.find_by_id(reservation.accommodation_id)
                if accommodation is not None:
                    for room in self._booked_rooms(accommodation, reservation.room_id):
                        room.remove_reservation(reservation.check_in_date, reservation.check_out_date)

            self.reservations.remove(reservation)

        logger.info("Removed reservation %s", reservation_id)
        return True

    def import_reservations(self, data: str) -> ImportResult:
        return self.reservations.import_json(data)

    def export_reservations(self, file_path: str) -> None:
        write_text_atomic(file_path, self.reservations.export_json())

    # ==================== HELPERS ====================
    def _find_client(self, client_id: int) -> Client:
        client = self.clients.find_by_id(client_id)
        if client is None:
            raise EntityNotFoundError("Client", client_id)
        return client

    def _find_owner(self, owner_id: int) -> Owner:
        owner = self.owners.find_by_id(owner_id)
        if owner is None:
            raise EntityNotFoundError("Owner", owner_id)
        return owner

    def _find_accommodation(self, accommodation_id: int) -> Accommodation:
        accommodation = self.accommodations.find_by_id(accommodation_id)
        if accommodation is None:
            raise EntityNotFoundError("Accommodation", accommodation_id)
        return accommodation

    def _find_reservation(self, reservation_id: int) -> Reservation:
        reservation = self.reservations.find_by_id(reservation_id)
        if reservation is None:
            raise EntityNotFoundError("Reservation", reservation_id)
        return reservation

    @staticmethod
    def _booked_rooms(accommodation: Accommodation, room_id: int) -> List[Room]:
        if room_id == 0:
            return list(accommodation.rooms)
        room = accommodation.find_room_by_id(room_id)
        return [room] if room is not None else []

    def _rooms_for(self, accommodation: Accommodation, room_id: int) -> List[Room]:
        """Rooms a booking occupies; whole-accommodation bookings need at least one room"""
        rooms = self._booked_rooms(accommodation, room_id)
        if not rooms:
            raise EntityNotFoundError("Room", room_id)
        return rooms

    def _find_associated_entities(self, reservation: Reservation) -> Tuple[Accommodation, List[Room]]:
        accommodation = self._find_accommodation(reservation.accommodation_id)
        return accommodation, self._rooms_for(accommodation, reservation.room_id)

    @staticmethod
    def _release_dates(reservation: Reservation, rooms: List[Room]) -> None:
        for room in rooms:
            if not room.remove_reservation(reservation.check_in_date, reservation.check_out_date):
                logger.warning("Room %s held no booking for reservation %s", room.id, reservation.id)

    def _change_status(self, reservation_id: int, transition: str, release: bool = False) -> StatusChangeResult:
        """Apply a reservation transition; ``release`` frees the booked dates on success"""
        logger.info("Attempting %s on reservation %s", transition, reservation_id)
        try:
            with self._booking_lock:
                reservation = self._find_reservation(reservation_id)
                if not getattr(reservation, transition)():
                    logger.error("Cannot %s reservation %s while %s",
                                 transition, reservation_id, reservation.status.name)
                    return StatusChangeResult.INVALID_STATUS

                if release:
                    accommodation = self.accommodations.find_by_id(reservation.accommodation_id)
                    if accommodation is not None:
                        self._release_dates(reservation, self._booked_rooms(accommodation, reservation.room_id))

            logger.info("Reservation %s is now %s", reservation_id, reservation.status.name)
            return StatusChangeResult.SUCCESS
        except EntityNotFoundError as e:
            logger.warning("%s", e)
            return StatusChangeResult.RESERVATION_NOT_FOUND
        except Exception:
            logger.exception("Unexpected error during %s of reservation %s", transition, reservation_id)
            return StatusChangeResult.ERROR
