"""API Schemas - Request and Response DTOs"""
from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from domain.enums import AccommodationType, PaymentMethod, PaymentStatus, ReservationStatus, RoomType


# ============================================================================
# CLIENT & OWNER SCHEMAS
# ============================================================================

class CreateClientRequest(BaseModel):
    """Create client request DTO"""
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None
    preferred_payment_method: PaymentMethod = PaymentMethod.NONE


class UpdateClientRequest(BaseModel):
    """Update client request DTO; omitted fields stay unchanged"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    preferred_payment_method: PaymentMethod = PaymentMethod.UNCHANGED


class ClientResponse(BaseModel):
    """Client response DTO"""
    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    preferred_payment_method: PaymentMethod

    class Config:
        from_attributes = True


class CreateOwnerRequest(BaseModel):
    """Create owner request DTO"""
    first_name: str
    last_name: str
    email: str
    phone_number: Optional[str] = None
    address: Optional[str] = None


class UpdateOwnerRequest(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None


class OwnerResponse(BaseModel):
    """Owner response DTO"""
    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    address: str
    accommodation_ids: List[int] = []

    class Config:
        from_attributes = True


# ============================================================================
# ACCOMMODATION SCHEMAS
# ============================================================================

class CreateAccommodationRequest(BaseModel):
    """Create accommodation request DTO"""
    owner_id: int = Field(gt=0)
    type: AccommodationType
    name: str
    address: str


class UpdateAccommodationRequest(BaseModel):
    type: Optional[AccommodationType] = None
    name: Optional[str] = None
    address: Optional[str] = None


class AddRoomRequest(BaseModel):
    """Add room request DTO"""
    type: RoomType
    price_per_night: Decimal = Field(ge=0)


class DateRangeResponse(BaseModel):
    start: date
    end: date


class RoomResponse(BaseModel):
    """Room response DTO"""
    id: int
    type: RoomType
    price_per_night: Decimal
    reserved_dates: List[DateRangeResponse] = []


class AccommodationResponse(BaseModel):
    """Accommodation response DTO"""
    id: int
    owner_id: int
    type: AccommodationType
    name: str
    address: str
    rooms: List[RoomResponse] = []


class AvailabilityResponse(BaseModel):
    accommodation_id: int
    room_id: Optional[int] = None
    start: date
    end: date
    available: bool


# ============================================================================
# RESERVATION SCHEMAS
# ============================================================================

class CreateReservationRequest(BaseModel):
    """Create reservation request DTO"""
    client_id: int = Field(gt=0)
    accommodation_id: int = Field(gt=0)
    room_id: int = Field(default=0, ge=0, description="0 books the whole accommodation")
    check_in: date
    check_out: date


class UpdateReservationRequest(BaseModel):
    """Update reservation request DTO"""
    check_in: Optional[date] = None
    check_out: Optional[date] = None


class MakePaymentRequest(BaseModel):
    """Make payment request DTO"""
    amount: Decimal
    method: PaymentMethod


class PaymentResponse(BaseModel):
    """Payment response DTO"""
    id: int
    reservation_id: int
    amount: Decimal
    date: datetime
    method: PaymentMethod
    status: PaymentStatus


class ReservationResponse(BaseModel):
    """Reservation response DTO"""
    id: int
    client_id: int
    accommodation_id: int
    room_id: int
    accommodation_type: AccommodationType
    check_in: date
    check_out: date
    nights: int
    status: str
    total_cost: Decimal
    amount_paid: Decimal
    remaining_balance: Decimal
    is_fully_paid: bool
    payment_method_used: PaymentMethod
    payments: List[PaymentResponse] = []


class OperationResultResponse(BaseModel):
    """Outcome of an operation on an existing entity"""
    result: str
    message: str


class ImportResultResponse(BaseModel):
    imported_count: int
    replaced_count: int
    total_count: int


class ErrorResponse(BaseModel):
    """Error response DTO"""
    error: str
    detail: Optional[str] = None
    status_code: int
