"""
Reservation Model

A room held by one user over the half-open interval [start_at, end_at).
"""

from datetime import datetime

from django.db import models


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open interval overlap: touching endpoints do not overlap."""
    return a_start < b_end and a_end > b_start


class ReservationQuerySet(models.QuerySet):

    def overlapping(self, start: datetime, end: datetime):
        """Reservations sharing any instant with [start, end)."""
        return self.filter(start_at__lt=end, end_at__gt=start)

    def for_room(self, room_id):
        return self.filter(room_id=room_id)

    def for_user_email(self, email: str):
        return self.filter(user__email=email)

    def starting_between(self, first: datetime, last: datetime):
        """Reservations whose start lies in [first, last], both ends inclusive."""
        return self.filter(start_at__gte=first, start_at__lte=last)

    def ending_after(self, instant: datetime):
        return self.filter(end_at__gt=instant)


class Reservation(models.Model):
    """
    Reservation of a room.

    Rows are never edited after creation except to attach the Google
    Calendar event id once sync succeeds.
    """

    room = models.ForeignKey(
        'core.Room',
        on_delete=models.CASCADE,
        related_name='reservations'
    )
    user = models.ForeignKey(
        'core.User',
        on_delete=models.CASCADE,
        related_name='reservations'
    )
    start_at = models.DateTimeField()
    end_at = models.DateTimeField()
    google_event_id = models.CharField(max_length=255, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ReservationQuerySet.as_manager()

    class Meta:
        db_table = 'reservations'
        ordering = ['start_at', 'id']
        indexes = [
            models.Index(fields=['room', 'start_at', 'end_at'], name='reservation_room_window_idx'),
            models.Index(fields=['user', 'start_at'], name='reservation_user_start_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_at__gt=models.F('start_at')),
                name='valid_reservation_times'
            ),
        ]

    def __str__(self):
        return f"Reservation {self.pk}: room {self.room_id} {self.start_at} - {self.end_at}"

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return overlaps(self.start_at, self.end_at, start, end)

    def attach_calendar_event(self, event_id: str):
        """Record the external event id; the only update a reservation ever gets."""
        self.google_event_id = event_id
        Reservation.objects.filter(pk=self.pk).update(google_event_id=event_id)
