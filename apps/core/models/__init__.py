"""
Room Reservation Models
"""

from .user import User, UserRole
from .room import Room
from .reservation import Reservation, overlaps

__all__ = [
    'User',
    'UserRole',
    'Room',
    'Reservation',
    'overlaps',
]
