"""
Reservation Service Exceptions

Every business failure has a stable ``error_code`` and an HTTP status used
by the API exception handler.
"""

from rest_framework import status

from shared.common.clients import ExternalServiceError
from shared.common.exceptions import ServiceError


class ReservationServiceError(ServiceError):
    """Base exception for reservation service errors."""


# Request validation

class InvalidRangeError(ReservationServiceError):
    """Start or end missing, or start not before end."""
    error_code = 'INVALID_RANGE'
    default_message = 'Start and end are required and start must be before end.'


class AlreadyEndedError(ReservationServiceError):
    """Requested window ends in the past."""
    error_code = 'ALREADY_ENDED'
    default_message = 'Cannot book a time window that has already ended.'


class DurationOutOfBoundsError(ReservationServiceError):
    """Requested window is shorter or longer than allowed."""
    error_code = 'DURATION_OUT_OF_BOUNDS'
    default_message = 'Reservation duration is out of the allowed bounds.'


class TooFarAheadError(ReservationServiceError):
    """Requested window starts beyond the advance-booking horizon."""
    error_code = 'TOO_FAR_AHEAD'
    default_message = 'Reservations cannot start that far in the future.'


# Lookups

class UserNotFoundError(ReservationServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = 'USER_NOT_FOUND'
    default_message = 'User not found.'


class RoomNotFoundError(ReservationServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = 'ROOM_NOT_FOUND'
    default_message = 'Room not found.'


class ReservationNotFoundError(ReservationServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = 'RESERVATION_NOT_FOUND'
    default_message = 'Reservation not found.'


# Business rules

class SlotConflictError(ReservationServiceError):
    """Window overlaps an existing reservation of the same room."""
    status_code = status.HTTP_409_CONFLICT
    error_code = 'SLOT_CONFLICT'
    default_message = 'The room is already reserved during the requested time.'


class WeeklyLimitExceededError(ReservationServiceError):
    """Student already holds the weekly quota of reservations."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = 'WEEKLY_LIMIT_EXCEEDED'
    default_message = 'Weekly reservation limit reached.'


class ForbiddenError(ReservationServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = 'FORBIDDEN'
    default_message = 'You do not have permission to perform this action.'


class RoomInUseError(ReservationServiceError):
    """Room still has reservations that have not ended."""
    status_code = status.HTTP_409_CONFLICT
    error_code = 'ROOM_IN_USE'
    default_message = 'The room has upcoming reservations and cannot be deleted.'


class LockTimeoutError(ReservationServiceError):
    """Room lock not obtained in time."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = 'LOCK_TIMEOUT'
    default_message = 'The room is busy. Please retry.'


# External calendar

class CalendarError(ExternalServiceError):
    """Calendar sync or credential refresh failed. Never surfaced to clients."""
