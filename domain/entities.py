"""Domain Entities - Aggregates"""
from bisect import bisect_left, insort
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain import validators
from domain.enums import AccommodationType, PaymentMethod, PaymentResult, PaymentStatus, ReservationStatus, RoomType
from domain.exceptions import DomainValidationError, ValidationErrorCode
from domain.identity import IdGenerator
from domain.value_objects import DateRange


def _as_decimal(value, code: ValidationErrorCode) -> Decimal:
    """Coerce a money value, rejecting anything that is not a finite number"""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise DomainValidationError(code) from None
    if not amount.is_finite():
        raise DomainValidationError(code)
    return amount


class Room(BaseModel):
    """Bookable unit of an accommodation, owning its occupancy calendar"""

    id: int = Field(gt=0)
    type: RoomType
    price_per_night: Decimal
    reserved_dates: List[DateRange] = Field(default_factory=list)

    class Config:
        validate_assignment = True
        from_attributes = True

    @field_validator("price_per_night")
    @classmethod
    def _check_price(cls, v: Decimal) -> Decimal:
        return validators.validate_price(v)

    @field_validator("reserved_dates")
    @classmethod
    def _check_calendar(cls, v: List[DateRange]) -> List[DateRange]:
        return validators.validate_calendar(sorted(v))

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(id_generator: IdGenerator, room_type: RoomType, price_per_night) -> "Room":
        """Create new room with validation"""
        room_type = validators.validate_room_type(room_type)
        price = validators.validate_price(_as_decimal(price_per_night, ValidationErrorCode.INVALID_PRICE))

        return Room(id=id_generator.next_id(), type=room_type, price_per_night=price)

    # ==================== QUERY METHODS ====================
    def is_available(self, start: date, end: date, exclude: Optional[DateRange] = None) -> bool:
        """Check that [start, end) does not overlap any booked stay.

        ``exclude`` is skipped during the scan, so a stay can be checked
        against everything but itself when it is being moved.
        """
        if end <= start:
            raise ValueError("End date must be after the start date.")

        # Stays are sorted and disjoint, so their ends are sorted as well:
        # walk back from the last stay starting before `end` until one ends
        # on or before `start`.
        index = bisect_left(self.reserved_dates, end, key=lambda r: r.start) - 1
        while index >= 0:
            existing = self.reserved_dates[index]
            if existing.end <= start:
                break
            if existing != exclude:
                return False
            index -= 1

        return True

    def calculate_total_cost(self, start: date, end: date) -> Decimal:
        """Nights in [start, end) times the nightly price"""
        if end <= start:
            raise ValueError("End date must be after the start date.")

        nights = (end - start).days
        return nights * self.price_per_night

    # ==================== MODIFICATION METHODS ====================
    def add_reservation(self, start: date, end: date) -> bool:
        """Book [start, end); back-to-back stays are kept as separate ranges"""
        if not self.is_available(start, end):
            return False

        insort(self.reserved_dates, DateRange(start=start, end=end))
        return True

    def remove_reservation(self, start: date, end: date) -> bool:
        """Remove the exactly matching stay"""
        target = DateRange(start=start, end=end)
        index = bisect_left(self.reserved_dates, target)
        if index < len(self.reserved_dates) and self.reserved_dates[index] == target:
            del self.reserved_dates[index]
            return True
        return False


class Accommodation(BaseModel):
    """Accommodation Aggregate Root Entity, composed of rooms"""

    id: int = Field(gt=0)
    owner_id: int
    type: AccommodationType
    name: str
    address: str
    rooms: List[Room] = Field(default_factory=list)

    class Config:
        validate_assignment = True
        from_attributes = True

    @field_validator("owner_id")
    @classmethod
    def _check_owner_id(cls, v: int) -> int:
        return validators.validate_id(v)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return validators.validate_accommodation_name(v)

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str) -> str:
        return validators.validate_address(v)

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        id_generator: IdGenerator,
        owner_id: int,
        accommodation_type: AccommodationType,
        name: str,
        address: str
    ) -> "Accommodation":
        """Create new accommodation with validation"""
        validators.validate_id(owner_id)
        accommodation_type = validators.validate_accommodation_type(accommodation_type)
        validators.validate_accommodation_name(name)
        validators.validate_address(address)

        return Accommodation(
            id=id_generator.next_id(),
            owner_id=owner_id,
            type=accommodation_type,
            name=name,
            address=address
        )

    # ==================== ROOM MANAGEMENT ====================
    def add_room(self, room: Room) -> bool:
        if room is None:
            raise ValueError("Room cannot be None")
        if self.find_room_by_id(room.id) is not None:
            return False
        self.rooms.append(room)
        return True

    def remove_room(self, room_id: int) -> bool:
        room = self.find_room_by_id(room_id)
        if room is None:
            return False
        self.rooms.remove(room)
        return True

    def find_room_by_id(self, room_id: int) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    # ==================== QUERY METHODS ====================
    def is_available(self, start: date, end: date) -> bool:
        """True when at least one room is free for [start, end)"""
        return any(room.is_available(start, end) for room in self.rooms)

    def is_fully_available(self, start: date, end: date) -> bool:
        """True when every room is free, as a whole-accommodation booking needs"""
        return bool(self.rooms) and all(room.is_available(start, end) for room in self.rooms)

    def calculate_total_cost(self, start: date, end: date) -> Decimal:
        """Cost of booking every room for [start, end)"""
        if not self.rooms:
            raise ValueError("Accommodation has no rooms to price.")
        return sum((room.calculate_total_cost(start, end) for room in self.rooms), Decimal("0"))


class Payment(BaseModel):
    """Audit record of a single transfer against a reservation"""

    id: int = Field(gt=0, frozen=True)
    reservation_id: int = Field(gt=0, frozen=True)
    amount: Decimal = Field(gt=0, frozen=True)
    date: datetime = Field(frozen=True)
    method: PaymentMethod = Field(frozen=True)
    status: PaymentStatus = PaymentStatus.PENDING

    class Config:
        validate_assignment = True
        from_attributes = True

    @staticmethod
    def create(
        id_generator: IdGenerator,
        reservation_id: int,
        amount,
        method: PaymentMethod,
        status: PaymentStatus = PaymentStatus.COMPLETED,
        paid_at: Optional[datetime] = None
    ) -> "Payment":
        validators.validate_id(reservation_id)
        amount = validators.validate_payment_amount(_as_decimal(amount, ValidationErrorCode.INVALID_PAYMENT_VALUE))
        method = validators.validate_payment_method(method)
        status = validators.validate_payment_status(status)

        return Payment(
            id=id_generator.next_id(),
            reservation_id=reservation_id,
            amount=amount,
            date=paid_at or datetime.now(),
            method=method,
            status=status
        )


class Reservation(BaseModel):
    """Reservation Aggregate Root Entity

    Pending -> CheckedIn -> CheckedOut is the happy path; Cancelled,
    CheckedOut, NoShow and Declined are terminal. ``amount_paid`` is a
    rollup of ``payments`` and always equals the sum of their amounts.
    """

    # Identity
    id: int = Field(gt=0)

    # References to other aggregates
    client_id: int
    accommodation_id: int
    room_id: int = Field(default=0, ge=0)  # 0 books the whole accommodation
    accommodation_type: AccommodationType = AccommodationType.NONE

    # Stay
    check_in_date: date
    check_out_date: date
    status: ReservationStatus = ReservationStatus.PENDING

    # Money
    total_cost: Decimal
    amount_paid: Decimal = Decimal("0")
    payments: List[Payment] = Field(default_factory=list)
    payment_method_used: PaymentMethod = PaymentMethod.NONE

    class Config:
        from_attributes = True

    @field_validator("client_id", "accommodation_id")
    @classmethod
    def _check_reference(cls, v: int) -> int:
        return validators.validate_id(v)

    @field_validator("total_cost")
    @classmethod
    def _check_total_cost(cls, v: Decimal) -> Decimal:
        return validators.validate_total_cost(v)

    @field_validator("payment_method_used")
    @classmethod
    def _check_payment_method(cls, v: PaymentMethod) -> PaymentMethod:
        return validators.validate_payment_method(v, allow_none=True)

    @model_validator(mode="after")
    def _check_consistency(self):
        validators.validate_date_range(self.check_in_date, self.check_out_date)
        validators.validate_amount_paid(self.amount_paid, self.total_cost)
        validators.validate_payment_ledger(self.id, self.amount_paid, self.payments)
        return self

    # ==================== FACTORY METHOD ====================
    @staticmethod
    def create(
        id_generator: IdGenerator,
        client_id: int,
        accommodation_id: int,
        check_in_date: date,
        check_out_date: date,
        total_cost,
        room_id: int = 0,
        accommodation_type: AccommodationType = AccommodationType.NONE,
        today: Optional[date] = None
    ) -> "Reservation":
        """Create new reservation with validation"""
        validators.validate_id(client_id)
        validators.validate_id(accommodation_id)
        if room_id:
            validators.validate_id(room_id)
        validators.validate_date_range(check_in_date, check_out_date)
        validators.validate_check_in_date(check_in_date, today)
        total_cost = validators.validate_total_cost(_as_decimal(total_cost, ValidationErrorCode.INVALID_TOTAL_COST))
        accommodation_type = validators.validate_accommodation_type(accommodation_type)

        return Reservation(
            id=id_generator.next_id(),
            client_id=client_id,
            accommodation_id=accommodation_id,
            room_id=room_id,
            accommodation_type=accommodation_type,
            check_in_date=check_in_date,
            check_out_date=check_out_date,
            total_cost=total_cost
        )

    # ==================== STATE TRANSITION METHODS ====================
    def check_in(self) -> bool:
        """Mark guest as checked in"""
        if self.status != ReservationStatus.PENDING:
            return False
        self.status = ReservationStatus.CHECKED_IN
        return True

    def check_out(self) -> bool:
        """Process guest check-out"""
        if self.status != ReservationStatus.CHECKED_IN:
            return False
        self.status = ReservationStatus.CHECKED_OUT
        return True

    def cancel(self) -> bool:
        """Cancel reservation, keeping it for the audit trail"""
        if not self.is_cancellable():
            return False
        self.status = ReservationStatus.CANCELLED
        return True

    def mark_no_show(self) -> bool:
        """Mark guest as no-show"""
        if self.status not in (ReservationStatus.PENDING, ReservationStatus.CHECKED_IN):
            return False
        self.status = ReservationStatus.NO_SHOW
        return True

    def decline(self) -> bool:
        if self.status not in (ReservationStatus.PENDING, ReservationStatus.CHECKED_IN):
            return False
        self.status = ReservationStatus.DECLINED
        return True

    # ==================== MODIFICATION METHODS ====================
    def reschedule(self, new_check_in: date, new_check_out: date) -> bool:
        """Move the stay; room calendars are the caller's responsibility"""
        if not self.is_modifiable():
            return False
        validators.validate_date_range(new_check_in, new_check_out)

        self.check_in_date = new_check_in
        self.check_out_date = new_check_out
        return True

    def make_payment(
        self,
        amount,
        method: PaymentMethod,
        id_generator: IdGenerator,
        paid_at: Optional[datetime] = None
    ) -> PaymentResult:
        """Record a payment; preconditions are checked in a fixed order"""
        try:
            amount = _as_decimal(amount, ValidationErrorCode.INVALID_PAYMENT_VALUE)
        except DomainValidationError:
            return PaymentResult.INVALID_AMOUNT

        if amount <= 0:
            return PaymentResult.INVALID_AMOUNT
        if self.is_fully_paid():
            return PaymentResult.ALREADY_FULLY_PAID
        if amount > self.remaining_balance:
            return PaymentResult.AMOUNT_EXCEEDS_TOTAL
        if not validators.is_valid_payment_method(method):
            return PaymentResult.INVALID_PAYMENT_METHOD

        payment = Payment.create(
            id_generator,
            reservation_id=self.id,
            amount=amount,
            method=method,
            status=PaymentStatus.COMPLETED,
            paid_at=paid_at
        )
        self.payments.append(payment)
        self.amount_paid += amount
        self.payment_method_used = PaymentMethod(method)

        return PaymentResult.SUCCESS

    # ==================== QUERY METHODS ====================
    def is_fully_paid(self) -> bool:
        return self.amount_paid >= self.total_cost

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_cost - self.amount_paid

    @property
    def date_range(self) -> DateRange:
        return DateRange(start=self.check_in_date, end=self.check_out_date)

    def is_whole_accommodation(self) -> bool:
        return self.room_id == 0

    def is_active(self) -> bool:
        """Whether the stay still occupies room calendars"""
        return self.status in (
            ReservationStatus.PENDING,
            ReservationStatus.CONFIRMED,
            ReservationStatus.CHECKED_IN
        )

    def is_modifiable(self) -> bool:
        return self.status in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

    def is_cancellable(self) -> bool:
        return self.status in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)

    def get_nights(self) -> int:
        return self.date_range.nights()


class Person(BaseModel):
    """Personal details shared by clients and owners"""

    id: int = Field(gt=0)
    first_name: str
    last_name: str
    email: str
    phone_number: str = ""
    address: str = ""

    class Config:
        validate_assignment = True
        from_attributes = True

    @field_validator("first_name", "last_name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        return validators.validate_name(v)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return validators.validate_email(v)

    @field_validator("phone_number")
    @classmethod
    def _check_phone_number(cls, v: str) -> str:
        # empty means "not provided" for basic records
        return v if v == "" else validators.validate_phone_number(v)

    @field_validator("address")
    @classmethod
    def _check_address(cls, v: str) -> str:
        return v if v == "" else validators.validate_address(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @staticmethod
    def _validate_details(
        first_name: str,
        last_name: str,
        email: str,
        phone_number: Optional[str],
        address: Optional[str]
    ) -> None:
        validators.validate_name(first_name)
        validators.validate_name(last_name)
        validators.validate_email(email)
        if phone_number is not None:
            validators.validate_phone_number(phone_number)
        if address is not None:
            validators.validate_address(address)


class Client(Person):
    """Guest making reservations"""

    preferred_payment_method: PaymentMethod = PaymentMethod.NONE

    @field_validator("preferred_payment_method")
    @classmethod
    def _check_payment_method(cls, v: PaymentMethod) -> PaymentMethod:
        return validators.validate_payment_method(v, allow_none=True)

    @staticmethod
    def create(
        id_generator: IdGenerator,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        preferred_payment_method: PaymentMethod = PaymentMethod.NONE
    ) -> "Client":
        """Create new client with validation"""
        Person._validate_details(first_name, last_name, email, phone_number, address)
        preferred_payment_method = validators.validate_payment_method(preferred_payment_method, allow_none=True)

        return Client(
            id=id_generator.next_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone_number=phone_number or "",
            address=address or "",
            preferred_payment_method=preferred_payment_method
        )


class Owner(Person):
    """Owner of one or more accommodations"""

    accommodation_ids: List[int] = Field(default_factory=list)

    @staticmethod
    def create(
        id_generator: IdGenerator,
        first_name: str,
        last_name: str,
        email: str,
        phone_number: Optional[str] = None,
        address: Optional[str] = None
    ) -> "Owner":
        """Create new owner with validation"""
        Person._validate_details(first_name, last_name, email, phone_number, address)

        return Owner(
            id=id_generator.next_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone_number=phone_number or "",
            address=address or ""
        )

    def add_accommodation(self, accommodation_id: int) -> bool:
        if not validators.is_valid_id(accommodation_id) or accommodation_id in self.accommodation_ids:
            return False
        self.accommodation_ids.append(accommodation_id)
        return True

    def remove_accommodation(self, accommodation_id: int) -> bool:
        if accommodation_id not in self.accommodation_ids:
            return False
        self.accommodation_ids.remove(accommodation_id)
        return True

    def owns(self, accommodation_id: int) -> bool:
        return accommodation_id in self.accommodation_ids
