"""
Reservation Service

Booking, cancellation and lookup of room reservations.

Bookings run inside ``room_lock`` so that the conflict check and the insert
for one room are never interleaved with another booking of the same room.
Calendar sync happens after the lock is released and can never undo a
committed booking.
"""

import logging
from datetime import datetime, time, timedelta
from typing import Dict, List, Tuple

from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.utils import timezone

from apps.core import locks
from apps.core.models import Reservation, Room, User, UserRole
from .calendar_service import CalendarService
from .clock import Clock
from .credentials_service import CredentialsService
from .exceptions import (
    AlreadyEndedError,
    DurationOutOfBoundsError,
    ForbiddenError,
    InvalidRangeError,
    ReservationNotFoundError,
    RoomNotFoundError,
    SlotConflictError,
    TooFarAheadError,
    WeeklyLimitExceededError,
)
from .user_service import UserService

logger = logging.getLogger(__name__)


class ReservationService:
    """
    Service for room reservations.

    Collaborators are injectable so tests can freeze time and replace the
    Google clients.
    """

    def __init__(
        self,
        clock: Clock = None,
        calendar_service: CalendarService = None,
        credentials_service: CredentialsService = None,
        user_service: UserService = None,
    ):
        self.clock = clock or Clock()
        self.calendar_service = calendar_service or CalendarService()
        self.credentials_service = credentials_service or CredentialsService(clock=self.clock)
        self.user_service = user_service or UserService()

    # ==========================================================================
    # Booking
    # ==========================================================================

    def create_reservation(
        self,
        user_email: str,
        room_id,
        start_at: datetime,
        end_at: datetime,
        add_to_calendar: bool = False
    ) -> Reservation:
        """
        Book ``room_id`` for the requester over [start_at, end_at).

        Checks run in a fixed order and the first failure is raised: window
        shape, requester, room, overlap, then the student weekly quota.
        """
        start_at, end_at = self._validate_window(start_at, end_at)

        reservation = self._book(user_email, room_id, start_at, end_at, apply_weekly_limit=True)

        if add_to_calendar:
            result = self.calendar_service.sync_reservation(reservation, self.credentials_service)
            if not result.ok:
                logger.error(
                    f"Calendar sync failed for reservation {reservation.pk}; booking kept: {result.error}"
                )
        else:
            logger.debug(f"Calendar sync not requested for reservation {reservation.pk}")

        return reservation

    def create_reservation_on_behalf(
        self,
        requester_email: str,
        beneficiary_email: str,
        room_id,
        start_at: datetime,
        end_at: datetime
    ) -> Reservation:
        """
        Book a room for another user.

        The beneficiary must exist; the weekly quota is not applied and no
        calendar event is created.
        """
        start_at, end_at = self._validate_window(start_at, end_at)

        reservation = self._book(beneficiary_email, room_id, start_at, end_at, apply_weekly_limit=False)
        logger.info(
            f"Reservation {reservation.pk} created by {requester_email} on behalf of {beneficiary_email}"
        )
        return reservation

    def _book(
        self,
        user_email: str,
        room_id,
        start_at: datetime,
        end_at: datetime,
        apply_weekly_limit: bool
    ) -> Reservation:
        with locks.room_lock(room_id):
            user = self.user_service.get_user_by_email(user_email)
            room = self._get_room_for_update(room_id)

            self._check_conflicts(room, start_at, end_at)
            if apply_weekly_limit and self._weekly_limit_applies(user.user_role):
                self._check_weekly_limit(user, start_at)

            reservation = Reservation.objects.create(
                room=room,
                user=user,
                start_at=start_at,
                end_at=end_at,
            )

        logger.info(
            f"Created reservation {reservation.pk}: room {room.pk} for {user.email} "
            f"{start_at.isoformat()} - {end_at.isoformat()}"
        )
        return reservation

    # ==========================================================================
    # Cancellation
    # ==========================================================================

    def cancel_reservation(self, reservation_id, user_email: str) -> None:
        """
        Cancel a reservation. Owners may cancel their own, admins any.

        The calendar event is removed best-effort before the row is deleted.
        """
        reservation = self.get_reservation(reservation_id)
        requester = self.user_service.get_user_by_email(user_email)

        if not self._may_cancel(requester, reservation):
            logger.warning(f"{user_email} may not cancel reservation {reservation.pk}")
            raise ForbiddenError("You can only cancel your own reservations.")

        if reservation.google_event_id:
            result = self.calendar_service.remove_reservation_event(reservation, self.credentials_service)
            if not result.ok:
                logger.error(
                    f"Calendar event removal failed for reservation {reservation.pk}; "
                    f"cancelling anyway: {result.error}"
                )

        reservation_pk = reservation.pk
        reservation.delete()
        logger.info(f"Reservation {reservation_pk} cancelled by {user_email}")

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_reservation(self, reservation_id) -> Reservation:
        try:
            return Reservation.objects.select_related('room', 'user').get(pk=reservation_id)
        except (Reservation.DoesNotExist, ValueError, TypeError):
            raise ReservationNotFoundError(f"Reservation {reservation_id} not found.")

    def get_my_reservations(self, user_email: str) -> Dict[str, List[Reservation]]:
        """
        Split a user's reservations into ``current``, ``future`` and ``past``.

        Future reservations start after now, past ones ended before now, and
        everything else (including one ending exactly now) is current. Each
        list is ordered by start.
        """
        now = self.clock.now()
        buckets: Dict[str, List[Reservation]] = {'current': [], 'future': [], 'past': []}

        reservations = (
            Reservation.objects.for_user_email(user_email)
            .select_related('room', 'user')
            .order_by('start_at', 'id')
        )
        for reservation in reservations:
            if reservation.start_at > now:
                buckets['future'].append(reservation)
            elif reservation.end_at < now:
                buckets['past'].append(reservation)
            else:
                buckets['current'].append(reservation)

        return buckets

    def get_reservations_by_room(self, room_id, user_email: str) -> List[Reservation]:
        """All reservations of a room, ordered by start. Admins only."""
        requester = self.user_service.get_user_by_email(user_email)
        if not self._is_admin(requester.user_role):
            raise ForbiddenError("Only administrators can list a room's reservations.")

        return list(
            Reservation.objects.for_room(room_id)
            .select_related('room', 'user')
            .order_by('start_at', 'id')
        )

    # ==========================================================================
    # Rules
    # ==========================================================================

    def _validate_window(self, start_at: datetime, end_at: datetime) -> Tuple[datetime, datetime]:
        if start_at is None or end_at is None:
            raise InvalidRangeError("Start and end are required.")

        start_at = self._aware(start_at)
        end_at = self._aware(end_at)

        if start_at >= end_at:
            raise InvalidRangeError("Start must be before end.")

        now = self.clock.now()
        if end_at < now:
            raise AlreadyEndedError()

        # Whole minutes, seconds truncated
        minutes = int((end_at - start_at).total_seconds() // 60)
        min_minutes = settings.RESERVATION_MIN_DURATION_MINUTES
        max_minutes = settings.RESERVATION_MAX_DURATION_MINUTES
        if minutes < min_minutes or minutes > max_minutes:
            raise DurationOutOfBoundsError(
                f"Reservations must last between {min_minutes} and {max_minutes} minutes."
            )

        horizon = now + relativedelta(months=settings.RESERVATION_MAX_ADVANCE_MONTHS)
        if start_at > horizon:
            raise TooFarAheadError(
                f"Reservations can be made at most {settings.RESERVATION_MAX_ADVANCE_MONTHS} months ahead."
            )

        return start_at, end_at

    def _aware(self, value: datetime) -> datetime:
        if timezone.is_naive(value):
            return value.replace(tzinfo=self.clock.zone())
        return value

    def _get_room_for_update(self, room_id) -> Room:
        try:
            return Room.objects.get_for_update(room_id)
        except (Room.DoesNotExist, ValueError, TypeError):
            raise RoomNotFoundError(f"Room {room_id} not found.")

    def _check_conflicts(self, room: Room, start_at: datetime, end_at: datetime):
        conflict = Reservation.objects.for_room(room.pk).overlapping(start_at, end_at).first()
        if conflict is not None:
            logger.info(
                f"Slot conflict on room {room.pk}: requested {start_at.isoformat()} - "
                f"{end_at.isoformat()} overlaps reservation {conflict.pk}"
            )
            raise SlotConflictError()

    def week_bounds(self, instant: datetime) -> Tuple[datetime, datetime]:
        """
        Quota window for a reservation starting at ``instant``: Monday 00:00
        on or before its day through Friday 23:59:59.999999 on or after it,
        in the reservation zone. A weekend start therefore spans into the
        following Friday.
        """
        zone = self.clock.zone()
        local_day = instant.astimezone(zone).date()
        monday = local_day - timedelta(days=local_day.weekday())
        friday = local_day + timedelta(days=(4 - local_day.weekday()) % 7)
        return (
            datetime.combine(monday, time.min, tzinfo=zone),
            datetime.combine(friday, time.max, tzinfo=zone),
        )

    def _check_weekly_limit(self, user: User, start_at: datetime):
        week_start, week_end = self.week_bounds(start_at)
        count = Reservation.objects.filter(user=user).starting_between(week_start, week_end).count()
        if count >= settings.RESERVATION_WEEKLY_LIMIT:
            logger.info(f"Weekly limit reached for {user.email} in week of {week_start.date()}")
            raise WeeklyLimitExceededError(
                f"Students may hold {settings.RESERVATION_WEEKLY_LIMIT} reservation(s) per week."
            )

    @staticmethod
    def _weekly_limit_applies(role: UserRole) -> bool:
        if role == UserRole.STUDENT:
            return True
        if role == UserRole.ADMIN:
            return False
        raise ValueError(f"Unhandled role {role!r}")

    @staticmethod
    def _is_admin(role: UserRole) -> bool:
        if role == UserRole.ADMIN:
            return True
        if role == UserRole.STUDENT:
            return False
        raise ValueError(f"Unhandled role {role!r}")

    def _may_cancel(self, requester: User, reservation: Reservation) -> bool:
        if reservation.user_id == requester.pk:
            return True
        return self._is_admin(requester.user_role)
