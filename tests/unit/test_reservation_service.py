"""
Unit Tests for Reservation Service

Booking rules, cancellation authority and reservation queries.
"""

from datetime import timedelta

import pytest

from apps.core.models import Reservation, UserRole
from apps.core.services import (
    AlreadyEndedError,
    CalendarSyncResult,
    DurationOutOfBoundsError,
    ForbiddenError,
    InvalidRangeError,
    ReservationNotFoundError,
    ReservationService,
    RoomNotFoundError,
    SlotConflictError,
    TooFarAheadError,
    UserNotFoundError,
    WeeklyLimitExceededError,
)


@pytest.mark.django_db
class TestCreateReservation:
    """Tests for ReservationService.create_reservation."""

    def test_create_reservation_success(self, reservation_service, student, room, at, calendar_service):
        """A valid window is persisted without a calendar event."""
        start = at(2025, 6, 16, 10, 0)

        reservation = reservation_service.create_reservation(
            student.email, room.id, start, start + timedelta(hours=1)
        )

        assert reservation.pk is not None
        assert reservation.user == student
        assert reservation.room == room
        assert reservation.google_event_id is None
        assert Reservation.objects.count() == 1
        calendar_service.sync_reservation.assert_not_called()

    def test_ids_increase(self, reservation_service, student, other_student, room, at):
        first = reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )
        second = reservation_service.create_reservation(
            other_student.email, room.id, at(2025, 6, 16, 11), at(2025, 6, 16, 12)
        )

        assert second.pk > first.pk

    def test_calendar_sync_requested(
        self, reservation_service, student, room, at, calendar_service, credentials_service
    ):
        reservation = reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11), add_to_calendar=True
        )

        calendar_service.sync_reservation.assert_called_once_with(reservation, credentials_service)

    def test_calendar_failure_keeps_booking(self, reservation_service, student, room, at, calendar_service):
        """A failed sync is logged and the reservation stands."""
        calendar_service.sync_reservation.return_value = CalendarSyncResult.failure('token revoked')

        reservation = reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11), add_to_calendar=True
        )

        assert Reservation.objects.filter(pk=reservation.pk).exists()

    @pytest.mark.parametrize('start_offset,end_offset', [(None, 60), (0, None), (None, None)])
    def test_missing_bound_is_invalid_range(
        self, reservation_service, student, room, at, start_offset, end_offset
    ):
        base = at(2025, 6, 16, 10)
        start = base + timedelta(minutes=start_offset) if start_offset is not None else None
        end = base + timedelta(minutes=end_offset) if end_offset is not None else None

        with pytest.raises(InvalidRangeError):
            reservation_service.create_reservation(student.email, room.id, start, end)

    def test_start_not_before_end(self, reservation_service, student, room, at):
        start = at(2025, 6, 16, 10)

        with pytest.raises(InvalidRangeError):
            reservation_service.create_reservation(student.email, room.id, start, start)
        with pytest.raises(InvalidRangeError):
            reservation_service.create_reservation(student.email, room.id, start, start - timedelta(minutes=30))

    def test_window_in_the_past(self, reservation_service, student, room, at):
        with pytest.raises(AlreadyEndedError):
            reservation_service.create_reservation(
                student.email, room.id, at(2025, 6, 10, 10), at(2025, 6, 10, 11)
            )

    def test_started_window_is_bookable(self, reservation_service, student, room, at):
        """Now is 09:00; a window from 08:30 to 09:30 has not ended yet."""
        reservation = reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 11, 8, 30), at(2025, 6, 11, 9, 30)
        )

        assert reservation.pk is not None

    @pytest.mark.parametrize('minutes', [14, 61, 120])
    def test_duration_out_of_bounds(self, reservation_service, student, room, at, minutes):
        start = at(2025, 6, 16, 10)

        with pytest.raises(DurationOutOfBoundsError):
            reservation_service.create_reservation(
                student.email, room.id, start, start + timedelta(minutes=minutes)
            )

    @pytest.mark.parametrize('minutes', [15, 60])
    def test_duration_bounds_inclusive(self, reservation_service, create_user, room, at, minutes):
        user = create_user()
        start = at(2025, 6, 16, 10)

        reservation = reservation_service.create_reservation(
            user.email, room.id, start, start + timedelta(minutes=minutes)
        )

        assert reservation.pk is not None

    def test_advance_horizon(self, reservation_service, student, other_student, room, at):
        """Three calendar months from 2025-06-11 09:00 is 2025-09-11 09:00."""
        limit = at(2025, 9, 11, 9, 0)

        reservation = reservation_service.create_reservation(
            student.email, room.id, limit, limit + timedelta(minutes=30)
        )
        assert reservation.pk is not None

        late = limit + timedelta(minutes=1)
        with pytest.raises(TooFarAheadError):
            reservation_service.create_reservation(
                other_student.email, room.id, late, late + timedelta(minutes=30)
            )

    def test_unknown_user(self, reservation_service, room, at):
        with pytest.raises(UserNotFoundError):
            reservation_service.create_reservation(
                'ghost@school.test', room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
            )

    def test_unknown_room(self, reservation_service, student, at):
        with pytest.raises(RoomNotFoundError):
            reservation_service.create_reservation(
                student.email, 9999, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
            )

    def test_window_checked_before_lookups(self, reservation_service, at):
        """Unknown user and room, but the bad window is reported first."""
        start = at(2025, 6, 16, 10)

        with pytest.raises(InvalidRangeError):
            reservation_service.create_reservation('ghost@school.test', 9999, start, start)

    def test_user_checked_before_room(self, reservation_service, at):
        with pytest.raises(UserNotFoundError):
            reservation_service.create_reservation(
                'ghost@school.test', 9999, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
            )

    def test_overlap_rejected(self, reservation_service, student, other_student, room, at, create_reservation):
        create_reservation(student, room, at(2025, 6, 16, 10))

        with pytest.raises(SlotConflictError):
            reservation_service.create_reservation(
                other_student.email, room.id, at(2025, 6, 16, 10, 30), at(2025, 6, 16, 11, 30)
            )
        assert Reservation.objects.count() == 1

    def test_contained_window_rejected(self, reservation_service, student, other_student, room, at, create_reservation):
        create_reservation(student, room, at(2025, 6, 16, 10))

        with pytest.raises(SlotConflictError):
            reservation_service.create_reservation(
                other_student.email, room.id, at(2025, 6, 16, 10, 15), at(2025, 6, 16, 10, 45)
            )

    def test_touching_windows_allowed(self, reservation_service, student, other_student, room, at, create_reservation):
        """Intervals are half-open: [10:00, 11:00) and [11:00, 12:00) do not overlap."""
        create_reservation(student, room, at(2025, 6, 16, 10))

        reservation = reservation_service.create_reservation(
            other_student.email, room.id, at(2025, 6, 16, 11), at(2025, 6, 16, 12)
        )

        assert reservation.pk is not None

    def test_same_window_other_room(self, reservation_service, student, other_student, create_room, at, create_reservation):
        first_room = create_room()
        second_room = create_room()
        create_reservation(student, first_room, at(2025, 6, 16, 10))

        reservation = reservation_service.create_reservation(
            other_student.email, second_room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )

        assert reservation.room == second_room

    def test_conflict_reported_before_weekly_limit(
        self, reservation_service, student, room, at, create_reservation
    ):
        create_reservation(student, room, at(2025, 6, 16, 10))

        with pytest.raises(SlotConflictError):
            reservation_service.create_reservation(
                student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
            )


@pytest.mark.django_db
class TestWeeklyLimit:
    """Students hold at most one reservation per Monday-Friday week."""

    def test_second_booking_same_week_rejected(self, reservation_service, student, room, at):
        reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )

        with pytest.raises(WeeklyLimitExceededError):
            reservation_service.create_reservation(
                student.email, room.id, at(2025, 6, 20, 10), at(2025, 6, 20, 11)
            )

    def test_limit_counts_all_rooms(self, reservation_service, student, create_room, at, create_reservation):
        create_reservation(student, create_room(), at(2025, 6, 17, 15))

        with pytest.raises(WeeklyLimitExceededError):
            reservation_service.create_reservation(
                student.email, create_room().id, at(2025, 6, 19, 10), at(2025, 6, 19, 11)
            )

    def test_next_week_allowed(self, reservation_service, student, room, at):
        reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 20, 10), at(2025, 6, 20, 11)
        )

        reservation = reservation_service.create_reservation(
            student.email, room.id, at(2025, 6, 23, 10), at(2025, 6, 23, 11)
        )

        assert reservation.pk is not None

    def test_past_reservation_in_week_counts(self, reservation_service, student, room, at, create_reservation):
        """Monday of the current week has passed but still uses the quota."""
        create_reservation(student, room, at(2025, 6, 9, 10))

        with pytest.raises(WeeklyLimitExceededError):
            reservation_service.create_reservation(
                student.email, room.id, at(2025, 6, 12, 10), at(2025, 6, 12, 11)
            )

    def test_admin_exempt(self, reservation_service, admin, room, at):
        reservation_service.create_reservation(
            admin.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )
        second = reservation_service.create_reservation(
            admin.email, room.id, at(2025, 6, 17, 10), at(2025, 6, 17, 11)
        )

        assert second.pk is not None
        assert Reservation.objects.filter(user=admin).count() == 2

    def test_week_bounds(self, reservation_service, at):
        week_start, week_end = reservation_service.week_bounds(at(2025, 6, 18, 13, 45))

        assert week_start == at(2025, 6, 16, 0, 0)
        assert week_end == at(2025, 6, 20, 23, 59).replace(second=59, microsecond=999999)

    def test_week_bounds_for_weekend_start(self, reservation_service, at):
        week_start, week_end = reservation_service.week_bounds(at(2025, 6, 21, 10))

        assert week_start == at(2025, 6, 16, 0, 0)
        assert week_end == at(2025, 6, 27, 23, 59).replace(second=59, microsecond=999999)

    def test_weekend_booking_counts_following_week(self, reservation_service, student, room, at, create_reservation):
        create_reservation(student, room, at(2025, 6, 23, 10))

        with pytest.raises(WeeklyLimitExceededError):
            reservation_service.create_reservation(
                student.email, room.id, at(2025, 6, 21, 10), at(2025, 6, 21, 11)
            )


@pytest.mark.django_db
class TestCreateReservationOnBehalf:
    """Tests for admin bookings made for another user."""

    def test_books_for_beneficiary(self, reservation_service, admin, student, room, at):
        reservation = reservation_service.create_reservation_on_behalf(
            admin.email, student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )

        assert reservation.user == student

    def test_weekly_limit_skipped(self, reservation_service, admin, student, room, at, create_reservation):
        create_reservation(student, room, at(2025, 6, 16, 10))

        reservation = reservation_service.create_reservation_on_behalf(
            admin.email, student.email, room.id, at(2025, 6, 17, 10), at(2025, 6, 17, 11)
        )

        assert Reservation.objects.filter(user=student).count() == 2
        assert reservation.pk is not None

    def test_requester_need_not_exist(self, reservation_service, student, room, at):
        reservation = reservation_service.create_reservation_on_behalf(
            'unknown-admin@school.test', student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )

        assert reservation.user == student

    def test_unknown_beneficiary(self, reservation_service, admin, room, at):
        with pytest.raises(UserNotFoundError):
            reservation_service.create_reservation_on_behalf(
                admin.email, 'ghost@school.test', room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
            )

    def test_still_checks_conflicts(self, reservation_service, admin, student, other_student, room, at, create_reservation):
        create_reservation(other_student, room, at(2025, 6, 16, 10))

        with pytest.raises(SlotConflictError):
            reservation_service.create_reservation_on_behalf(
                admin.email, student.email, room.id, at(2025, 6, 16, 10, 30), at(2025, 6, 16, 11)
            )

    def test_never_synced(self, reservation_service, admin, student, room, at, calendar_service):
        reservation_service.create_reservation_on_behalf(
            admin.email, student.email, room.id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
        )

        calendar_service.sync_reservation.assert_not_called()


@pytest.mark.django_db
class TestCancelReservation:
    """Tests for ReservationService.cancel_reservation."""

    def test_owner_cancels(self, reservation_service, student, room, at, create_reservation):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10))

        reservation_service.cancel_reservation(reservation.pk, student.email)

        assert not Reservation.objects.filter(pk=reservation.pk).exists()

    def test_admin_cancels_any(self, reservation_service, admin, student, room, at, create_reservation):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10))

        reservation_service.cancel_reservation(reservation.pk, admin.email)

        assert not Reservation.objects.filter(pk=reservation.pk).exists()

    def test_other_student_forbidden(self, reservation_service, student, other_student, room, at, create_reservation):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10))

        with pytest.raises(ForbiddenError):
            reservation_service.cancel_reservation(reservation.pk, other_student.email)

        assert Reservation.objects.filter(pk=reservation.pk).exists()

    def test_unknown_reservation(self, reservation_service, student):
        with pytest.raises(ReservationNotFoundError):
            reservation_service.cancel_reservation(424242, student.email)

    def test_unknown_requester(self, reservation_service, student, room, at, create_reservation):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10))

        with pytest.raises(UserNotFoundError):
            reservation_service.cancel_reservation(reservation.pk, 'ghost@school.test')

    def test_removes_calendar_event(
        self, reservation_service, student, room, at, create_reservation, calendar_service, credentials_service
    ):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10), google_event_id='evt-9')
        reservation_id = reservation.pk

        reservation_service.cancel_reservation(reservation.pk, student.email)

        calendar_service.remove_reservation_event.assert_called_once()
        removed, provider = calendar_service.remove_reservation_event.call_args.args
        assert removed is reservation
        assert removed.google_event_id == 'evt-9'
        assert not Reservation.objects.filter(pk=reservation_id).exists()
        assert provider is credentials_service

    def test_calendar_failure_does_not_block_cancel(
        self, reservation_service, student, room, at, create_reservation, calendar_service
    ):
        calendar_service.remove_reservation_event.return_value = CalendarSyncResult.failure('boom')
        reservation = create_reservation(student, room, at(2025, 6, 16, 10), google_event_id='evt-9')

        reservation_service.cancel_reservation(reservation.pk, student.email)

        assert not Reservation.objects.filter(pk=reservation.pk).exists()

    def test_no_event_no_calendar_call(self, reservation_service, student, room, at, create_reservation, calendar_service):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10))

        reservation_service.cancel_reservation(reservation.pk, student.email)

        calendar_service.remove_reservation_event.assert_not_called()


@pytest.mark.django_db
class TestReservationQueries:
    """Tests for lookups and listings."""

    def test_get_reservation(self, reservation_service, student, room, at, create_reservation):
        reservation = create_reservation(student, room, at(2025, 6, 16, 10))

        assert reservation_service.get_reservation(reservation.pk) == reservation

    def test_get_reservation_not_found(self, reservation_service):
        with pytest.raises(ReservationNotFoundError):
            reservation_service.get_reservation(424242)

    def test_my_reservations_buckets(self, reservation_service, student, create_room, at, create_reservation):
        """Now is Wednesday 2025-06-11 09:00."""
        past = create_reservation(student, create_room(), at(2025, 6, 10, 10))
        ends_now = create_reservation(student, create_room(), at(2025, 6, 11, 8, 0))
        ongoing = create_reservation(student, create_room(), at(2025, 6, 11, 8, 30))
        future_late = create_reservation(student, create_room(), at(2025, 6, 20, 10))
        future_soon = create_reservation(student, create_room(), at(2025, 6, 16, 10))

        buckets = reservation_service.get_my_reservations(student.email)

        assert buckets['past'] == [past]
        assert buckets['current'] == [ends_now, ongoing]
        assert buckets['future'] == [future_soon, future_late]

    def test_my_reservations_only_own(self, reservation_service, student, other_student, room, at, create_reservation):
        create_reservation(other_student, room, at(2025, 6, 16, 10))

        buckets = reservation_service.get_my_reservations(student.email)

        assert buckets == {'current': [], 'future': [], 'past': []}

    def test_room_reservations_for_admin(self, reservation_service, admin, student, other_student, create_room, at, create_reservation):
        room = create_room()
        later = create_reservation(student, room, at(2025, 6, 18, 10))
        earlier = create_reservation(other_student, room, at(2025, 6, 16, 10))
        create_reservation(student, create_room(), at(2025, 6, 16, 10))

        assert reservation_service.get_reservations_by_room(room.id, admin.email) == [earlier, later]

    def test_room_reservations_forbidden_for_student(self, reservation_service, student, room):
        with pytest.raises(ForbiddenError):
            reservation_service.get_reservations_by_room(room.id, student.email)

    def test_room_reservations_unknown_requester(self, reservation_service, room):
        with pytest.raises(UserNotFoundError):
            reservation_service.get_reservations_by_room(room.id, 'ghost@school.test')


def test_role_rules_cover_every_role():
    """Every role has an explicit answer for the quota and admin checks."""
    for role in UserRole:
        assert isinstance(ReservationService._weekly_limit_applies(role), bool)
        assert isinstance(ReservationService._is_admin(role), bool)
