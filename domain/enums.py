"""Domain Enums"""
from enum import Enum


class AccommodationType(int, Enum):
    NONE = 0
    HOTEL = 1
    HOUSE = 2
    APARTMENT = 3
    VILLA = 4
    BED_AND_BREAKFAST = 5
    HOSTEL = 6
    RESORT = 7
    COTTAGE = 8
    CABIN = 9
    GUESTHOUSE = 10
    CHALET = 11
    LODGE = 12


class RoomType(int, Enum):
    NONE = 0
    SINGLE = 1
    DOUBLE = 2
    TWIN = 3
    SUITE = 4
    FAMILY = 5
    STUDIO = 6
    DELUXE = 7
    PENTHOUSE = 8
    DORMITORY = 9
    ACCESSIBLE = 10
    PRESIDENTIAL_SUITE = 11


class ReservationStatus(int, Enum):
    PENDING = 0
    CHECKED_IN = 1
    CHECKED_OUT = 2
    CANCELLED = 3
    NO_SHOW = 4
    CONFIRMED = 5
    DECLINED = 6


class PaymentMethod(int, Enum):
    NONE = 0
    PAYPAL = 1
    MULTIBANCO = 2
    BANK_TRANSFER = 3
    UNCHANGED = 99  # "leave as is" marker for partial updates


class PaymentStatus(int, Enum):
    UNPAID = 0
    PENDING = 1
    COMPLETED = 2
    PARTIALLY_PAID = 3
    REJECTED = 4
    REFUNDED = 5
    CANCELLED = 6


# ==================== OUTCOME CODES ====================

class PaymentResult(str, Enum):
    SUCCESS = "SUCCESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ALREADY_FULLY_PAID = "ALREADY_FULLY_PAID"
    AMOUNT_EXCEEDS_TOTAL = "AMOUNT_EXCEEDS_TOTAL"
    INVALID_PAYMENT_METHOD = "INVALID_PAYMENT_METHOD"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    ERROR = "ERROR"


class UpdateClientResult(str, Enum):
    SUCCESS = "SUCCESS"
    CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
    INVALID_FIRST_NAME = "INVALID_FIRST_NAME"
    INVALID_LAST_NAME = "INVALID_LAST_NAME"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_PAYMENT_METHOD = "INVALID_PAYMENT_METHOD"
    ERROR = "ERROR"


class UpdateOwnerResult(str, Enum):
    SUCCESS = "SUCCESS"
    OWNER_NOT_FOUND = "OWNER_NOT_FOUND"
    INVALID_FIRST_NAME = "INVALID_FIRST_NAME"
    INVALID_LAST_NAME = "INVALID_LAST_NAME"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PHONE_NUMBER = "INVALID_PHONE_NUMBER"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    ERROR = "ERROR"


class UpdateAccommodationResult(str, Enum):
    SUCCESS = "SUCCESS"
    ACCOMMODATION_NOT_FOUND = "ACCOMMODATION_NOT_FOUND"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_NAME = "INVALID_NAME"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    ERROR = "ERROR"


class UpdateReservationResult(str, Enum):
    SUCCESS = "SUCCESS"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    ACCOMMODATION_NOT_FOUND = "ACCOMMODATION_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    INVALID_STATUS = "INVALID_STATUS"
    DATES_UNAVAILABLE = "DATES_UNAVAILABLE"
    INVALID_DATES = "INVALID_DATES"
    ERROR = "ERROR"


class CancellationResult(str, Enum):
    SUCCESS = "SUCCESS"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    ACCOMMODATION_NOT_FOUND = "ACCOMMODATION_NOT_FOUND"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    INVALID_STATUS = "INVALID_STATUS"
    ERROR = "ERROR"


class RemoveAccommodationResult(str, Enum):
    SUCCESS = "SUCCESS"
    ACCOMMODATION_NOT_FOUND = "ACCOMMODATION_NOT_FOUND"
    OWNER_NOT_FOUND = "OWNER_NOT_FOUND"
    ACCOMMODATION_REMOVAL_FAILED = "ACCOMMODATION_REMOVAL_FAILED"
    ACCOMMODATION_DISASSOCIATION_FAILED = "ACCOMMODATION_DISASSOCIATION_FAILED"
    ERROR = "ERROR"


class StatusChangeResult(str, Enum):
    SUCCESS = "SUCCESS"
    RESERVATION_NOT_FOUND = "RESERVATION_NOT_FOUND"
    INVALID_STATUS = "INVALID_STATUS"
    ERROR = "ERROR"
