"""
Class-period slot catalog.

The day is divided into eleven fixed blocks; availability is reported per
room and per block. Identifiers are zero-padded "HH:MM-HH:MM" strings so
they sort in time order as plain text.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import List, Tuple


@dataclass(frozen=True)
class TimeSlot:
    period: str
    start: time
    end: time

    @property
    def id(self) -> str:
        return f"{self.start:%H:%M}-{self.end:%H:%M}"

    @property
    def label(self) -> str:
        return f"{self.period} ({self.id})"

    def bounds(self, day: date, zone: tzinfo) -> Tuple[datetime, datetime]:
        """Absolute instants of this slot on ``day`` in ``zone``."""
        return (
            datetime.combine(day, self.start, tzinfo=zone),
            datetime.combine(day, self.end, tzinfo=zone),
        )


SLOT_CATALOG: Tuple[TimeSlot, ...] = (
    TimeSlot('1°', time(8, 30), time(9, 30)),
    TimeSlot('2°', time(9, 40), time(10, 40)),
    TimeSlot('3°', time(10, 50), time(11, 50)),
    TimeSlot('4°', time(12, 0), time(13, 0)),
    TimeSlot('Alm.', time(13, 10), time(14, 10)),
    TimeSlot('5°', time(14, 30), time(15, 30)),
    TimeSlot('6°', time(15, 40), time(16, 40)),
    TimeSlot('7°', time(16, 50), time(17, 50)),
    TimeSlot('8°', time(18, 0), time(19, 0)),
    TimeSlot('9°', time(19, 10), time(20, 10)),
    TimeSlot('10°', time(20, 20), time(21, 20)),
)


def get_slots() -> List[TimeSlot]:
    """Return the slot catalog in chronological order."""
    return list(SLOT_CATALOG)
