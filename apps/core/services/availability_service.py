"""
Availability Service

Builds the daily room-by-slot availability matrix.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List

from apps.core.models import Room, Reservation
from apps.core.slots import TimeSlot, get_slots
from .clock import Clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityCell:
    room_id: str
    slot_id: str
    available: bool


class AvailabilityService:
    """Read-only view over reservations; takes no locks."""

    def __init__(self, clock: Clock = None):
        self.clock = clock or Clock()

    def get_daily_availability(self, target_date: date) -> Dict[str, Any]:
        """
        Availability of every room in every slot on ``target_date``.

        Returns a dict with ``date``, ``rooms`` (ordered by id), ``slots``
        (catalog order) and ``availability``: one cell per (room, slot),
        rooms outer and slots inner. A slot is unavailable when any
        reservation of the room overlaps it.
        """
        zone = self.clock.zone()
        day_start = datetime.combine(target_date, time.min, tzinfo=zone)
        day_end = datetime.combine(target_date + timedelta(days=1), time.min, tzinfo=zone)

        rooms = list(Room.objects.order_by('id'))
        slots = get_slots()

        by_room: Dict[int, List[Reservation]] = defaultdict(list)
        for reservation in Reservation.objects.overlapping(day_start, day_end):
            by_room[reservation.room_id].append(reservation)

        cells = [
            AvailabilityCell(
                room_id=str(room.id),
                slot_id=slot.id,
                available=self._is_free(by_room[room.id], slot, target_date, zone),
            )
            for room in rooms
            for slot in slots
        ]

        logger.debug(f"Availability for {target_date}: {len(rooms)} rooms x {len(slots)} slots")

        return {
            'date': target_date,
            'rooms': rooms,
            'slots': slots,
            'availability': cells,
        }

    @staticmethod
    def _is_free(reservations: List[Reservation], slot: TimeSlot, day: date, zone) -> bool:
        slot_start, slot_end = slot.bounds(day, zone)
        return not any(r.overlaps(slot_start, slot_end) for r in reservations)
