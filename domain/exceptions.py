"""Domain Exceptions"""
from enum import Enum
from typing import Any


class ValidationErrorCode(int, Enum):
    INVALID_NAME = 1001
    INVALID_EMAIL = 1002
    INVALID_PHONE_NUMBER = 1003
    INVALID_ADDRESS = 1004
    INVALID_PAYMENT_METHOD = 1005
    INVALID_ACCOMMODATION_TYPE = 1006
    INVALID_ID = 1007
    INVALID_DATE_RANGE = 1008
    INVALID_DATE = 1009
    INVALID_TOTAL_COST = 1010
    INVALID_PAYMENT_VALUE = 1011
    INVALID_RESERVATION_STATUS = 1012
    INVALID_ACCOMMODATION_NAME = 1013
    INVALID_PRICE = 1014
    INVALID_PAYMENT_STATUS = 1015
    INVALID_ROOM_TYPE = 1016


VALIDATION_ERROR_MESSAGES = {
    ValidationErrorCode.INVALID_NAME: "Name must be non-empty and at most 50 characters long",
    ValidationErrorCode.INVALID_EMAIL: "Email address format is invalid",
    ValidationErrorCode.INVALID_PHONE_NUMBER: "Phone number must be in international format, e.g. +351912345678",
    ValidationErrorCode.INVALID_ADDRESS: "Address must not be empty",
    ValidationErrorCode.INVALID_PAYMENT_METHOD: "Payment method is not valid",
    ValidationErrorCode.INVALID_ACCOMMODATION_TYPE: "Accommodation type is not valid",
    ValidationErrorCode.INVALID_ID: "ID must be a positive integer",
    ValidationErrorCode.INVALID_DATE_RANGE: "Check-out must be after check-in",
    ValidationErrorCode.INVALID_DATE: "Check-in date must be today or later",
    ValidationErrorCode.INVALID_TOTAL_COST: "Total cost must not be negative",
    ValidationErrorCode.INVALID_PAYMENT_VALUE: "Payment value is not valid",
    ValidationErrorCode.INVALID_RESERVATION_STATUS: "Reservation status is not valid",
    ValidationErrorCode.INVALID_ACCOMMODATION_NAME: "Accommodation name must be non-empty and at most 100 characters long",
    ValidationErrorCode.INVALID_PRICE: "Price must not be negative",
    ValidationErrorCode.INVALID_PAYMENT_STATUS: "Payment status is not valid",
    ValidationErrorCode.INVALID_ROOM_TYPE: "Room type is not valid",
}


class DomainException(Exception):
    """Base class for every booking domain error"""


class DomainValidationError(DomainException, ValueError):
    """Raised when a value supplied to the domain is malformed"""

    def __init__(self, code: ValidationErrorCode):
        self.code = code
        super().__init__(VALIDATION_ERROR_MESSAGES[code])


class EntityNotFoundError(DomainException):
    """Raised when a referenced entity is not present in its repository"""

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class IdSpaceExhaustedError(DomainException, RuntimeError):
    """Raised when an ID counter reaches its upper bound"""


class ClientCreationError(DomainException):
    pass


class OwnerCreationError(DomainException):
    pass


class AccommodationCreationError(DomainException):
    pass


class RoomCreationError(DomainException):
    pass


class ReservationCreationError(DomainException):
    pass


class TotalCostError(DomainException):
    """Raised when the cost of a stay cannot be computed"""
