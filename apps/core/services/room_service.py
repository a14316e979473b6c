"""
Room Service

Administration of the bookable rooms.
"""

import logging
from typing import Any, Dict, List

from django.db import transaction

from apps.core.models import Room, Reservation
from .clock import Clock
from .exceptions import RoomInUseError, RoomNotFoundError

logger = logging.getLogger(__name__)


class RoomService:
    """Create, read, update and delete rooms."""

    updatable_fields = ('name', 'capacity', 'floor', 'equipment', 'image_url')

    def __init__(self, clock: Clock = None):
        self.clock = clock or Clock()

    def list_rooms(self) -> List[Room]:
        return list(Room.objects.order_by('id'))

    def get_room(self, room_id) -> Room:
        try:
            return Room.objects.get(pk=room_id)
        except (Room.DoesNotExist, ValueError, TypeError):
            raise RoomNotFoundError(f"Room {room_id} not found.")

    def create_room(self, **fields) -> Room:
        room = Room.objects.create(**{k: v for k, v in fields.items() if k in self.updatable_fields})
        logger.info(f"Created room {room.id}: {room.name}")
        return room

    def update_room(self, room_id, **fields) -> Room:
        """Partial update; unknown keys are ignored."""
        room = self.get_room(room_id)
        changes: Dict[str, Any] = {k: v for k, v in fields.items() if k in self.updatable_fields}
        for field, value in changes.items():
            setattr(room, field, value)
        if changes:
            room.save(update_fields=list(changes) + ['updated_at'])
            logger.info(f"Updated room {room.id}: {', '.join(changes)}")
        return room

    @transaction.atomic
    def delete_room(self, room_id) -> None:
        """
        Delete a room together with its past reservations.

        Refused with ``RoomInUseError`` while any reservation of the room
        has not ended yet.
        """
        room = self.get_room(room_id)
        if Reservation.objects.for_room(room.id).ending_after(self.clock.now()).exists():
            raise RoomInUseError(f"Room {room.id} has reservations that have not ended.")
        room.delete()
        logger.info(f"Deleted room {room_id}")
