"""
Google Calendar Service

Creates and removes calendar events for reservations through the Google
Calendar v3 REST API. Calendar sync is best-effort: the ``sync_reservation``
and ``remove_reservation_event`` wrappers never raise, they return a
``CalendarSyncResult`` that the caller logs and moves past.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from django.conf import settings

from shared.common.clients import BaseServiceClient, ExternalServiceError

from apps.core.models import Reservation
from .credentials_service import Credential, CredentialsService
from .exceptions import CalendarError

logger = logging.getLogger(__name__)

GONE_STATUSES = (404, 410)


@dataclass(frozen=True)
class CalendarSyncResult:
    ok: bool
    event_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, event_id: Optional[str] = None) -> 'CalendarSyncResult':
        return cls(ok=True, event_id=event_id)

    @classmethod
    def failure(cls, error: str) -> 'CalendarSyncResult':
        return cls(ok=False, error=error)


class CalendarService(BaseServiceClient):
    """Thin Google Calendar client scoped to reservation events."""

    calendar_id = 'primary'

    def __init__(self, base_url: str = None, transport=None):
        super().__init__(
            'google-calendar',
            base_url or settings.GOOGLE_CALENDAR_API_URL,
            timeout=settings.GOOGLE_HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    # ==========================================================================
    # Raw API operations
    # ==========================================================================

    def create_event(self, reservation: Reservation, credential: Credential) -> str:
        """Create the event for ``reservation`` and return its id."""
        zone = settings.RESERVATION_TIME_ZONE
        body = {
            'summary': f"Room reservation: {reservation.room.name}",
            'description': (
                f"Room {reservation.room.name}, floor {reservation.room.floor}. "
                f"Reservation #{reservation.pk}."
            ),
            'start': {'dateTime': reservation.start_at.isoformat(), 'timeZone': zone},
            'end': {'dateTime': reservation.end_at.isoformat(), 'timeZone': zone},
        }
        try:
            data = self._request(
                'POST',
                f'/calendars/{self.calendar_id}/events',
                data=body,
                headers=credential.authorization_header(),
            )
        except ExternalServiceError as e:
            raise CalendarError(f"Event creation failed: {e}", status_code=e.status_code) from e

        event_id = data.get('id')
        if not event_id:
            raise CalendarError("Calendar API returned an event without id")
        return event_id

    def delete_event(self, event_id: str, credential: Credential) -> None:
        """Delete an event. An event that is already gone counts as deleted."""
        try:
            self._request(
                'DELETE',
                f'/calendars/{self.calendar_id}/events/{event_id}',
                headers=credential.authorization_header(),
            )
        except ExternalServiceError as e:
            if e.status_code in GONE_STATUSES:
                logger.warning(f"Calendar event {event_id} was already deleted")
                return
            raise CalendarError(f"Event deletion failed: {e}", status_code=e.status_code) from e

    # ==========================================================================
    # Best-effort wrappers
    # ==========================================================================

    def sync_reservation(
        self,
        reservation: Reservation,
        credentials_service: CredentialsService
    ) -> CalendarSyncResult:
        """Create the event and store its id on the reservation."""
        try:
            credential = credentials_service.get_credential(reservation.user)
            event_id = self.create_event(reservation, credential)
        except CalendarError as e:
            return CalendarSyncResult.failure(str(e))

        reservation.attach_calendar_event(event_id)
        logger.info(f"Reservation {reservation.pk} synced to calendar event {event_id}")
        return CalendarSyncResult.success(event_id)

    def remove_reservation_event(
        self,
        reservation: Reservation,
        credentials_service: CredentialsService
    ) -> CalendarSyncResult:
        """Delete the reservation's event using its owner's credential."""
        if not reservation.google_event_id:
            return CalendarSyncResult.success()
        try:
            credential = credentials_service.get_credential(reservation.user)
            self.delete_event(reservation.google_event_id, credential)
        except CalendarError as e:
            return CalendarSyncResult.failure(str(e))

        logger.info(f"Calendar event {reservation.google_event_id} removed")
        return CalendarSyncResult.success(reservation.google_event_id)
