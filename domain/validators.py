"""Field validators

Every rule comes in two flavours: ``is_valid_x`` answers the question and
``validate_x`` returns the value unchanged or raises
:class:`DomainValidationError` with the matching error code.
"""
import re
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence, Type

from domain.enums import AccommodationType, PaymentMethod, PaymentStatus, ReservationStatus, RoomType
from domain.exceptions import DomainValidationError, ValidationErrorCode

NAME_MAX_LENGTH = 50
ACCOMMODATION_NAME_MAX_LENGTH = 100

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_NUMBER_PATTERN = re.compile(r"^\+(\d{1,3})\d{7,15}$")


def _is_member(enum_cls: Type[Enum], value) -> bool:
    try:
        enum_cls(value)
    except (ValueError, TypeError):
        return False
    return True


def _require(valid: bool, code: ValidationErrorCode) -> None:
    if not valid:
        raise DomainValidationError(code)


# ==================== PEOPLE ====================

def is_valid_name(name: Optional[str]) -> bool:
    return bool(name and name.strip()) and len(name) <= NAME_MAX_LENGTH


def validate_name(name: str) -> str:
    _require(is_valid_name(name), ValidationErrorCode.INVALID_NAME)
    return name


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email and email.strip()) and EMAIL_PATTERN.match(email) is not None


def validate_email(email: str) -> str:
    _require(is_valid_email(email), ValidationErrorCode.INVALID_EMAIL)
    return email


def is_valid_phone_number(phone_number: Optional[str]) -> bool:
    return bool(phone_number and phone_number.strip()) and PHONE_NUMBER_PATTERN.match(phone_number) is not None


def validate_phone_number(phone_number: str) -> str:
    _require(is_valid_phone_number(phone_number), ValidationErrorCode.INVALID_PHONE_NUMBER)
    return phone_number


def is_valid_address(address: Optional[str]) -> bool:
    return bool(address and address.strip())


def validate_address(address: str) -> str:
    _require(is_valid_address(address), ValidationErrorCode.INVALID_ADDRESS)
    return address


# ==================== IDENTIFIERS ====================

def is_valid_id(entity_id) -> bool:
    return isinstance(entity_id, int) and not isinstance(entity_id, bool) and entity_id > 0


def validate_id(entity_id: int) -> int:
    _require(is_valid_id(entity_id), ValidationErrorCode.INVALID_ID)
    return entity_id


# ==================== ACCOMMODATION ====================

def is_valid_accommodation_name(name: Optional[str]) -> bool:
    return bool(name and name.strip()) and len(name) <= ACCOMMODATION_NAME_MAX_LENGTH


def validate_accommodation_name(name: str) -> str:
    _require(is_valid_accommodation_name(name), ValidationErrorCode.INVALID_ACCOMMODATION_NAME)
    return name


def is_valid_accommodation_type(accommodation_type) -> bool:
    return _is_member(AccommodationType, accommodation_type)


def validate_accommodation_type(accommodation_type) -> AccommodationType:
    _require(is_valid_accommodation_type(accommodation_type), ValidationErrorCode.INVALID_ACCOMMODATION_TYPE)
    return AccommodationType(accommodation_type)


def is_valid_room_type(room_type) -> bool:
    return _is_member(RoomType, room_type)


def validate_room_type(room_type) -> RoomType:
    _require(is_valid_room_type(room_type), ValidationErrorCode.INVALID_ROOM_TYPE)
    return RoomType(room_type)


# ==================== DATES ====================

def is_valid_date_range(check_in: date, check_out: date) -> bool:
    return check_in < check_out


def validate_date_range(check_in: date, check_out: date) -> None:
    _require(is_valid_date_range(check_in, check_out), ValidationErrorCode.INVALID_DATE_RANGE)


def is_valid_future_date(value: date, today: Optional[date] = None) -> bool:
    return value >= (today or date.today())


def validate_check_in_date(check_in: date, today: Optional[date] = None) -> date:
    _require(is_valid_future_date(check_in, today), ValidationErrorCode.INVALID_DATE)
    return check_in


def is_valid_calendar(ranges: Sequence) -> bool:
    """Ranges must be sorted by start, non-empty and pairwise disjoint"""
    if any(r.start >= r.end for r in ranges):
        return False
    return all(prev.end <= cur.start for prev, cur in zip(ranges, ranges[1:]))


def validate_calendar(ranges: Sequence) -> Sequence:
    _require(is_valid_calendar(ranges), ValidationErrorCode.INVALID_DATE_RANGE)
    return ranges


# ==================== MONEY ====================

def is_valid_price(price: Decimal) -> bool:
    return price.is_finite() and price >= 0


def validate_price(price: Decimal) -> Decimal:
    _require(is_valid_price(price), ValidationErrorCode.INVALID_PRICE)
    return price


def is_valid_total_cost(total_cost: Decimal) -> bool:
    return total_cost.is_finite() and total_cost >= 0


def validate_total_cost(total_cost: Decimal) -> Decimal:
    _require(is_valid_total_cost(total_cost), ValidationErrorCode.INVALID_TOTAL_COST)
    return total_cost


def is_valid_payment_amount(amount: Decimal) -> bool:
    return amount.is_finite() and amount > 0


def validate_payment_amount(amount: Decimal) -> Decimal:
    _require(is_valid_payment_amount(amount), ValidationErrorCode.INVALID_PAYMENT_VALUE)
    return amount


def is_valid_amount_paid(amount_paid: Decimal, total_cost: Decimal) -> bool:
    return amount_paid.is_finite() and 0 <= amount_paid <= total_cost


def validate_amount_paid(amount_paid: Decimal, total_cost: Decimal) -> Decimal:
    _require(is_valid_amount_paid(amount_paid, total_cost), ValidationErrorCode.INVALID_PAYMENT_VALUE)
    return amount_paid


def is_valid_payment_ledger(reservation_id: int, amount_paid: Decimal, payments: Sequence) -> bool:
    """The payments must all belong to the reservation and add up to ``amount_paid``"""
    if any(p.reservation_id != reservation_id for p in payments):
        return False
    return sum((p.amount for p in payments), Decimal("0")) == amount_paid


def validate_payment_ledger(reservation_id: int, amount_paid: Decimal, payments: Sequence) -> None:
    _require(is_valid_payment_ledger(reservation_id, amount_paid, payments), ValidationErrorCode.INVALID_PAYMENT_VALUE)


def is_valid_payment_method(payment_method, allow_none: bool = False) -> bool:
    """UNCHANGED is never a real method; NONE only where "no preference" makes sense."""
    if not _is_member(PaymentMethod, payment_method):
        return False
    method = PaymentMethod(payment_method)
    if method == PaymentMethod.UNCHANGED:
        return False
    return allow_none or method != PaymentMethod.NONE


def validate_payment_method(payment_method, allow_none: bool = False) -> PaymentMethod:
    _require(is_valid_payment_method(payment_method, allow_none), ValidationErrorCode.INVALID_PAYMENT_METHOD)
    return PaymentMethod(payment_method)


def is_valid_payment_status(status) -> bool:
    return _is_member(PaymentStatus, status)


def validate_payment_status(status) -> PaymentStatus:
    _require(is_valid_payment_status(status), ValidationErrorCode.INVALID_PAYMENT_STATUS)
    return PaymentStatus(status)


def is_valid_reservation_status(status) -> bool:
    return _is_member(ReservationStatus, status)


def validate_reservation_status(status) -> ReservationStatus:
    _require(is_valid_reservation_status(status), ValidationErrorCode.INVALID_RESERVATION_STATUS)
    return ReservationStatus(status)
