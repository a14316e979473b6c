"""
Room Reservation API Views
"""

from .reservation_views import ReservationViewSet
from .availability_views import DailyAvailabilityView
from .room_views import RoomViewSet
from .user_views import CurrentUserView

__all__ = [
    'ReservationViewSet',
    'DailyAvailabilityView',
    'RoomViewSet',
    'CurrentUserView',
]
