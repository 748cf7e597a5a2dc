from fastapi import FastAPI, HTTPException, Depends
from datetime import date
from typing import Dict, List, Optional

from api.schemas import (
    # Clients & owners
    CreateClientRequest, UpdateClientRequest, ClientResponse,
    CreateOwnerRequest, UpdateOwnerRequest, OwnerResponse,
    # Accommodations
    CreateAccommodationRequest, UpdateAccommodationRequest, AddRoomRequest,
    AccommodationResponse, RoomResponse, DateRangeResponse, AvailabilityResponse,
    # Reservations
    CreateReservationRequest, UpdateReservationRequest, MakePaymentRequest,
    ReservationResponse, PaymentResponse,
    # Common
    OperationResultResponse
)
from api.dependencies import get_booking_manager
from application.services import BookingManager
from domain.entities import Accommodation, Reservation, Room
from domain.enums import (
    AccommodationType, RoomType, ReservationStatus, PaymentMethod,
    PaymentResult, UpdateClientResult, UpdateOwnerResult, UpdateAccommodationResult,
    UpdateReservationResult, CancellationResult, RemoveAccommodationResult, StatusChangeResult
)
from domain.exceptions import DomainException, EntityNotFoundError, IdSpaceExhaustedError
from infrastructure.config import Config
from infrastructure.logging_config import setup_logging

setup_logging(Config.LOG_LEVEL)

app = FastAPI(
    title=Config.API_TITLE,
    description="Booking API for clients, owners, accommodations, reservations and payments",
    version=Config.API_VERSION
)

# ============================================================================
# OUTCOME -> HTTP STATUS MAPS
# ============================================================================

UPDATE_CLIENT_STATUS: Dict[UpdateClientResult, int] = {
    UpdateClientResult.SUCCESS: 200,
    UpdateClientResult.CLIENT_NOT_FOUND: 404,
    UpdateClientResult.INVALID_FIRST_NAME: 400,
    UpdateClientResult.INVALID_LAST_NAME: 400,
    UpdateClientResult.INVALID_EMAIL: 400,
    UpdateClientResult.INVALID_PHONE_NUMBER: 400,
    UpdateClientResult.INVALID_ADDRESS: 400,
    UpdateClientResult.INVALID_PAYMENT_METHOD: 400,
    UpdateClientResult.ERROR: 500,
}

UPDATE_OWNER_STATUS: Dict[UpdateOwnerResult, int] = {
    UpdateOwnerResult.SUCCESS: 200,
    UpdateOwnerResult.OWNER_NOT_FOUND: 404,
    UpdateOwnerResult.INVALID_FIRST_NAME: 400,
    UpdateOwnerResult.INVALID_LAST_NAME: 400,
    UpdateOwnerResult.INVALID_EMAIL: 400,
    UpdateOwnerResult.INVALID_PHONE_NUMBER: 400,
    UpdateOwnerResult.INVALID_ADDRESS: 400,
    UpdateOwnerResult.ERROR: 500,
}

UPDATE_ACCOMMODATION_STATUS: Dict[UpdateAccommodationResult, int] = {
    UpdateAccommodationResult.SUCCESS: 200,
    UpdateAccommodationResult.ACCOMMODATION_NOT_FOUND: 404,
    UpdateAccommodationResult.INVALID_TYPE: 400,
    UpdateAccommodationResult.INVALID_NAME: 400,
    UpdateAccommodationResult.INVALID_ADDRESS: 400,
    UpdateAccommodationResult.ERROR: 500,
}

REMOVE_ACCOMMODATION_STATUS: Dict[RemoveAccommodationResult, int] = {
    RemoveAccommodationResult.SUCCESS: 200,
    RemoveAccommodationResult.ACCOMMODATION_NOT_FOUND: 404,
    RemoveAccommodationResult.OWNER_NOT_FOUND: 409,
    RemoveAccommodationResult.ACCOMMODATION_REMOVAL_FAILED: 500,
    RemoveAccommodationResult.ACCOMMODATION_DISASSOCIATION_FAILED: 500,
    RemoveAccommodationResult.ERROR: 500,
}

UPDATE_RESERVATION_STATUS: Dict[UpdateReservationResult, int] = {
    UpdateReservationResult.SUCCESS: 200,
    UpdateReservationResult.RESERVATION_NOT_FOUND: 404,
    UpdateReservationResult.ACCOMMODATION_NOT_FOUND: 404,
    UpdateReservationResult.ROOM_NOT_FOUND: 404,
    UpdateReservationResult.INVALID_STATUS: 409,
    UpdateReservationResult.DATES_UNAVAILABLE: 409,
    UpdateReservationResult.INVALID_DATES: 400,
    UpdateReservationResult.ERROR: 500,
}

CANCELLATION_STATUS: Dict[CancellationResult, int] = {
    CancellationResult.SUCCESS: 200,
    CancellationResult.RESERVATION_NOT_FOUND: 404,
    CancellationResult.ACCOMMODATION_NOT_FOUND: 404,
    CancellationResult.ROOM_NOT_FOUND: 404,
    CancellationResult.INVALID_STATUS: 409,
    CancellationResult.ERROR: 500,
}

STATUS_CHANGE_STATUS: Dict[StatusChangeResult, int] = {
    StatusChangeResult.SUCCESS: 200,
    StatusChangeResult.RESERVATION_NOT_FOUND: 404,
    StatusChangeResult.INVALID_STATUS: 409,
    StatusChangeResult.ERROR: 500,
}

PAYMENT_STATUS: Dict[PaymentResult, int] = {
    PaymentResult.SUCCESS: 200,
    PaymentResult.INVALID_AMOUNT: 400,
    PaymentResult.ALREADY_FULLY_PAID: 409,
    PaymentResult.AMOUNT_EXCEEDS_TOTAL: 409,
    PaymentResult.INVALID_PAYMENT_METHOD: 400,
    PaymentResult.RESERVATION_NOT_FOUND: 404,
    PaymentResult.ERROR: 500,
}


def _outcome_response(result, status_map: Dict) -> OperationResultResponse:
    """Translate an outcome code, raising for every non-success member"""
    status_code = status_map[result]
    if status_code >= 400:
        raise HTTPException(status_code=status_code, detail=result.value)
    return OperationResultResponse(result=result.value, message=result.value.replace("_", " ").capitalize())


def _creation_error(e: DomainException) -> HTTPException:
    if isinstance(e.__cause__, EntityNotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


# ============================================================================
# HEALTH & ENUM REFERENCE ENDPOINTS
# ============================================================================

@app.get("/api/health", tags=["Health"])
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

@app.get("/api/enums/accommodation-type", tags=["Enum Reference"])
def get_accommodation_types():
    """Get all AccommodationType enum values"""
    return {"values": {item.name: item.value for item in AccommodationType}}

@app.get("/api/enums/room-type", tags=["Enum Reference"])
def get_room_types():
    """Get all RoomType enum values"""
    return {"values": {item.name: item.value for item in RoomType}}

@app.get("/api/enums/reservation-status", tags=["Enum Reference"])
def get_reservation_statuses():
    """Get all ReservationStatus enum values"""
    return {"values": {item.name: item.value for item in ReservationStatus}}

@app.get("/api/enums/payment-method", tags=["Enum Reference"])
def get_payment_methods():
    """Get all PaymentMethod enum values accepted for payments"""
    return {
        "values": {item.name: item.value for item in PaymentMethod
                   if item not in (PaymentMethod.NONE, PaymentMethod.UNCHANGED)}
    }

# ============================================================================
# CLIENT ENDPOINTS
# ============================================================================

@app.post("/api/clients", response_model=ClientResponse, status_code=201, tags=["Clients"])
def create_client(request: CreateClientRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Create new client"""
    try:
        client = manager.create_complete_client(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone_number=request.phone_number,
            address=request.address,
            preferred_payment_method=request.preferred_payment_method
        )
    except IdSpaceExhaustedError:
        raise
    except DomainException as e:
        raise _creation_error(e)
    return ClientResponse.model_validate(client)

@app.get("/api/clients", response_model=List[ClientResponse], tags=["Clients"])
def get_all_clients(manager: BookingManager = Depends(get_booking_manager)):
    """Get all clients"""
    return [ClientResponse.model_validate(c) for c in manager.clients.find_all()]

@app.get("/api/clients/{client_id}", response_model=ClientResponse, tags=["Clients"])
def get_client(client_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Get client by ID"""
    client = manager.find_client_by_id(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return ClientResponse.model_validate(client)

@app.put("/api/clients/{client_id}", response_model=OperationResultResponse, tags=["Clients"])
def update_client(client_id: int, request: UpdateClientRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Update client details"""
    result = manager.update_client(client_id, **request.model_dump())
    return _outcome_response(result, UPDATE_CLIENT_STATUS)

@app.delete("/api/clients/{client_id}", status_code=204, tags=["Clients"])
def delete_client(client_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Remove client"""
    if not manager.remove_client(client_id):
        raise HTTPException(status_code=404, detail="Client not found")

# ============================================================================
# OWNER ENDPOINTS
# ============================================================================

@app.post("/api/owners", response_model=OwnerResponse, status_code=201, tags=["Owners"])
def create_owner(request: CreateOwnerRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Create new owner"""
    try:
        owner = manager.create_complete_owner(**request.model_dump())
    except IdSpaceExhaustedError:
        raise
    except DomainException as e:
        raise _creation_error(e)
    return OwnerResponse.model_validate(owner)

@app.get("/api/owners", response_model=List[OwnerResponse], tags=["Owners"])
def get_all_owners(manager: BookingManager = Depends(get_booking_manager)):
    """Get all owners"""
    return [OwnerResponse.model_validate(o) for o in manager.owners.find_all()]

@app.get("/api/owners/{owner_id}", response_model=OwnerResponse, tags=["Owners"])
def get_owner(owner_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Get owner by ID"""
    owner = manager.find_owner_by_id(owner_id)
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")
    return OwnerResponse.model_validate(owner)

@app.put("/api/owners/{owner_id}", response_model=OperationResultResponse, tags=["Owners"])
def update_owner(owner_id: int, request: UpdateOwnerRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Update owner details"""
    result = manager.update_owner(owner_id, **request.model_dump())
    return _outcome_response(result, UPDATE_OWNER_STATUS)

@app.delete("/api/owners/{owner_id}", status_code=204, tags=["Owners"])
def delete_owner(owner_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Remove owner"""
    if not manager.remove_owner(owner_id):
        raise HTTPException(status_code=404, detail="Owner not found")

# ============================================================================
# ACCOMMODATION ENDPOINTS
# ============================================================================

@app.post("/api/accommodations", response_model=AccommodationResponse, status_code=201, tags=["Accommodations"])
def create_accommodation(request: CreateAccommodationRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Create new accommodation for an existing owner"""
    try:
        accommodation = manager.create_accommodation(
            owner_id=request.owner_id,
            accommodation_type=request.type,
            name=request.name,
            address=request.address
        )
    except IdSpaceExhaustedError:
        raise
    except DomainException as e:
        raise _creation_error(e)
    return _accommodation_to_response(accommodation)

@app.get("/api/accommodations", response_model=List[AccommodationResponse], tags=["Accommodations"])
def get_all_accommodations(manager: BookingManager = Depends(get_booking_manager)):
    """Get all accommodations"""
    return [_accommodation_to_response(a) for a in manager.accommodations.find_all()]

@app.get("/api/accommodations/{accommodation_id}", response_model=AccommodationResponse, tags=["Accommodations"])
def get_accommodation(accommodation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Get accommodation by ID"""
    accommodation = manager.find_accommodation_by_id(accommodation_id)
    if not accommodation:
        raise HTTPException(status_code=404, detail="Accommodation not found")
    return _accommodation_to_response(accommodation)

@app.put("/api/accommodations/{accommodation_id}", response_model=OperationResultResponse, tags=["Accommodations"])
def update_accommodation(
    accommodation_id: int,
    request: UpdateAccommodationRequest,
    manager: BookingManager = Depends(get_booking_manager)
):
    """Update accommodation details"""
    result = manager.update_accommodation(
        accommodation_id,
        accommodation_type=request.type,
        name=request.name,
        address=request.address
    )
    return _outcome_response(result, UPDATE_ACCOMMODATION_STATUS)

@app.delete("/api/accommodations/{accommodation_id}", response_model=OperationResultResponse, tags=["Accommodations"])
def delete_accommodation(accommodation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Remove accommodation and detach it from its owner"""
    result = manager.remove_accommodation(accommodation_id)
    return _outcome_response(result, REMOVE_ACCOMMODATION_STATUS)

@app.post("/api/accommodations/{accommodation_id}/rooms", response_model=RoomResponse, status_code=201,
          tags=["Accommodations"])
def add_room(accommodation_id: int, request: AddRoomRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Add a room to an accommodation"""
    try:
        room = manager.add_room(accommodation_id, room_type=request.type, price_per_night=request.price_per_night)
    except IdSpaceExhaustedError:
        raise
    except DomainException as e:
        raise _creation_error(e)
    return _room_to_response(room)

@app.get("/api/accommodations/{accommodation_id}/availability", response_model=AvailabilityResponse,
         tags=["Accommodations"])
def check_availability(
    accommodation_id: int,
    start: date,
    end: date,
    room_id: Optional[int] = None,
    manager: BookingManager = Depends(get_booking_manager)
):
    """Check whether a room, or any room, is free for [start, end)"""
    if manager.find_accommodation_by_id(accommodation_id) is None:
        raise HTTPException(status_code=404, detail="Accommodation not found")
    if end <= start:
        raise HTTPException(status_code=400, detail="End date must be after the start date")

    return AvailabilityResponse(
        accommodation_id=accommodation_id,
        room_id=room_id,
        start=start,
        end=end,
        available=manager.check_availability(accommodation_id, start, end, room_id=room_id)
    )

# ============================================================================
# RESERVATION ENDPOINTS
# ============================================================================

@app.post("/api/reservations", response_model=ReservationResponse, status_code=201, tags=["Reservations"])
def create_reservation(request: CreateReservationRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Create new reservation"""
    try:
        reservation = manager.create_reservation(
            client_id=request.client_id,
            accommodation_id=request.accommodation_id,
            room_id=request.room_id,
            check_in=request.check_in,
            check_out=request.check_out
        )
    except IdSpaceExhaustedError:
        raise
    except DomainException as e:
        raise _creation_error(e)
    return _reservation_to_response(reservation)

@app.get("/api/reservations", response_model=List[ReservationResponse], tags=["Reservations"])
def get_all_reservations(client_id: Optional[int] = None, manager: BookingManager = Depends(get_booking_manager)):
    """Get all reservations, optionally only those of one client"""
    if client_id is not None:
        reservations = manager.find_reservations_by_client(client_id)
    else:
        reservations = manager.reservations.find_all()
    return [_reservation_to_response(r) for r in reservations]

@app.get("/api/reservations/{reservation_id}", response_model=ReservationResponse, tags=["Reservations"])
def get_reservation(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Get reservation by ID"""
    reservation = manager.find_reservation_by_id(reservation_id)
    if not reservation:
        raise HTTPException(status_code=404, detail="Reservation not found")
    return _reservation_to_response(reservation)

@app.put("/api/reservations/{reservation_id}", response_model=OperationResultResponse, tags=["Reservations"])
def update_reservation(
    reservation_id: int,
    request: UpdateReservationRequest,
    manager: BookingManager = Depends(get_booking_manager)
):
    """Reschedule reservation"""
    result = manager.update_reservation(reservation_id, new_check_in=request.check_in, new_check_out=request.check_out)
    return _outcome_response(result, UPDATE_RESERVATION_STATUS)

@app.post("/api/reservations/{reservation_id}/cancel", response_model=OperationResultResponse, tags=["Reservations"])
def cancel_reservation(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Cancel reservation"""
    return _outcome_response(manager.cancel_reservation(reservation_id), CANCELLATION_STATUS)

@app.post("/api/reservations/{reservation_id}/check-in", response_model=OperationResultResponse, tags=["Reservations"])
def check_in_reservation(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Check in guest"""
    return _outcome_response(manager.check_in(reservation_id), STATUS_CHANGE_STATUS)

@app.post("/api/reservations/{reservation_id}/check-out", response_model=OperationResultResponse,
          tags=["Reservations"])
def check_out_reservation(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Check out guest"""
    return _outcome_response(manager.check_out(reservation_id), STATUS_CHANGE_STATUS)

@app.post("/api/reservations/{reservation_id}/no-show", response_model=OperationResultResponse, tags=["Reservations"])
def mark_no_show(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Mark reservation as no-show"""
    return _outcome_response(manager.mark_no_show(reservation_id), STATUS_CHANGE_STATUS)

@app.post("/api/reservations/{reservation_id}/decline", response_model=OperationResultResponse, tags=["Reservations"])
def decline_reservation(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Decline reservation"""
    return _outcome_response(manager.decline_reservation(reservation_id), STATUS_CHANGE_STATUS)

@app.post("/api/reservations/{reservation_id}/payments", response_model=OperationResultResponse,
          tags=["Reservations"])
def make_payment(reservation_id: int, request: MakePaymentRequest, manager: BookingManager = Depends(get_booking_manager)):
    """Record a payment against a reservation"""
    result = manager.make_payment(reservation_id, amount=request.amount, method=request.method)
    return _outcome_response(result, PAYMENT_STATUS)

@app.delete("/api/reservations/{reservation_id}", status_code=204, tags=["Reservations"])
def delete_reservation(reservation_id: int, manager: BookingManager = Depends(get_booking_manager)):
    """Remove reservation record"""
    if not manager.remove_reservation(reservation_id):
        raise HTTPException(status_code=404, detail="Reservation not found")

# ============================================================================
# SNAPSHOT ENDPOINTS
# ============================================================================

@app.post("/api/admin/save", tags=["Admin"])
def save_snapshots(manager: BookingManager = Depends(get_booking_manager)):
    """Write every repository to the configured data directory"""
    try:
        manager.save_all(Config.DATA_DIR)
    except (FileNotFoundError, PermissionError) as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "saved", "data_dir": Config.DATA_DIR}

@app.post("/api/admin/load", tags=["Admin"])
def load_snapshots(manager: BookingManager = Depends(get_booking_manager)):
    """Replace in-memory data with the snapshots in the configured data directory"""
    try:
        manager.load_all(Config.DATA_DIR)
    except PermissionError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"status": "loaded", "data_dir": Config.DATA_DIR}

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def _room_to_response(room: Room) -> RoomResponse:
    """Convert Room entity to RoomResponse"""
    return RoomResponse(
        id=room.id,
        type=room.type,
        price_per_night=room.price_per_night,
        reserved_dates=[DateRangeResponse(start=r.start, end=r.end) for r in room.reserved_dates]
    )

def _accommodation_to_response(accommodation: Accommodation) -> AccommodationResponse:
    """Convert Accommodation entity to AccommodationResponse"""
    return AccommodationResponse(
        id=accommodation.id,
        owner_id=accommodation.owner_id,
        type=accommodation.type,
        name=accommodation.name,
        address=accommodation.address,
        rooms=[_room_to_response(room) for room in accommodation.rooms]
    )

def _reservation_to_response(reservation: Reservation) -> ReservationResponse:
    """Convert Reservation entity to ReservationResponse"""
    return ReservationResponse(
        id=reservation.id,
        client_id=reservation.client_id,
        accommodation_id=reservation.accommodation_id,
        room_id=reservation.room_id,
        accommodation_type=reservation.accommodation_type,
        check_in=reservation.check_in_date,
        check_out=reservation.check_out_date,
        nights=reservation.get_nights(),
        status=reservation.status.name,
        total_cost=reservation.total_cost,
        amount_paid=reservation.amount_paid,
        remaining_balance=reservation.remaining_balance,
        is_fully_paid=reservation.is_fully_paid(),
        payment_method_used=reservation.payment_method_used,
        payments=[
            PaymentResponse(
                id=p.id,
                reservation_id=p.reservation_id,
                amount=p.amount,
                date=p.date,
                method=p.method,
                status=p.status
            )
            for p in reservation.payments
        ]
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
