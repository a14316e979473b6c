"""
Room Reservation Business Logic
"""

from .exceptions import (
    ReservationServiceError,
    InvalidRangeError,
    AlreadyEndedError,
    DurationOutOfBoundsError,
    TooFarAheadError,
    UserNotFoundError,
    RoomNotFoundError,
    ReservationNotFoundError,
    SlotConflictError,
    WeeklyLimitExceededError,
    ForbiddenError,
    RoomInUseError,
    LockTimeoutError,
    CalendarError,
)
from .clock import Clock, FixedClock
from .calendar_service import CalendarService, CalendarSyncResult
from .credentials_service import CredentialsService, Credential
from .user_service import UserService
from .room_service import RoomService
from .availability_service import AvailabilityService, AvailabilityCell
from .reservation_service import ReservationService


__all__ = [
    # Services
    'Clock',
    'FixedClock',
    'CalendarService',
    'CalendarSyncResult',
    'CredentialsService',
    'Credential',
    'UserService',
    'RoomService',
    'AvailabilityService',
    'AvailabilityCell',
    'ReservationService',

    # Exceptions
    'ReservationServiceError',
    'InvalidRangeError',
    'AlreadyEndedError',
    'DurationOutOfBoundsError',
    'TooFarAheadError',
    'UserNotFoundError',
    'RoomNotFoundError',
    'ReservationNotFoundError',
    'SlotConflictError',
    'WeeklyLimitExceededError',
    'ForbiddenError',
    'RoomInUseError',
    'LockTimeoutError',
    'CalendarError',
]
