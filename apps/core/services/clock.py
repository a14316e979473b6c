"""
Clock

Single source of the current instant and of the zone used to interpret
calendar days, weeks and slot times.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


class Clock:
    """Wall clock in the configured reservation zone."""

    def __init__(self, zone_name: Optional[str] = None):
        self._zone = ZoneInfo(zone_name or settings.RESERVATION_TIME_ZONE)

    def zone(self) -> ZoneInfo:
        return self._zone

    def now(self) -> datetime:
        return timezone.now().astimezone(self._zone)

    def today(self) -> date:
        return self.now().date()


class FixedClock(Clock):
    """
    Clock frozen at a given instant, for tests and replays.

    Naive instants are read as wall time in the clock's zone.
    """

    def __init__(self, instant: datetime, zone_name: Optional[str] = None):
        super().__init__(zone_name)
        if timezone.is_naive(instant):
            instant = instant.replace(tzinfo=self.zone())
        self._instant = instant

    def now(self) -> datetime:
        return self._instant.astimezone(self.zone())

    def advance(self, **kwargs) -> None:
        """Move the clock forward by ``timedelta(**kwargs)``."""
        self._instant = self._instant + timedelta(**kwargs)
