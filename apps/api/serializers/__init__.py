"""
Room Reservation API Serializers
"""

from .room_serializers import RoomSerializer
from .user_serializers import UserSerializer
from .reservation_serializers import (
    ReservationDetailSerializer,
    ReservationCreateSerializer,
    ReservationOnBehalfSerializer,
    MyReservationsSerializer,
)
from .availability_serializers import (
    TimeSlotSerializer,
    AvailabilityCellSerializer,
    DailyAvailabilitySerializer,
    AvailabilityQuerySerializer,
)

__all__ = [
    'RoomSerializer',
    'UserSerializer',
    'ReservationDetailSerializer',
    'ReservationCreateSerializer',
    'ReservationOnBehalfSerializer',
    'MyReservationsSerializer',
    'TimeSlotSerializer',
    'AvailabilityCellSerializer',
    'DailyAvailabilitySerializer',
    'AvailabilityQuerySerializer',
]
