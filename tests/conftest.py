"""
Pytest Configuration and Fixtures

Provides common fixtures for reservation service tests.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest
from rest_framework.test import APIClient

from shared.common.authentication import TokenUser

from apps.core.models import Reservation, Room, User, UserRole
from apps.core.services import (
    CalendarService,
    CalendarSyncResult,
    CredentialsService,
    FixedClock,
    ReservationService,
)

ZONE = ZoneInfo('America/Santiago')


def local(year, month, day, hour=0, minute=0):
    """Aware datetime in the reservation zone."""
    return datetime(year, month, day, hour, minute, tzinfo=ZONE)


@pytest.fixture
def at():
    """Build aware datetimes in the reservation zone."""
    return local


@pytest.fixture
def now():
    """Wednesday 2025-06-11 09:00 in Santiago."""
    return local(2025, 6, 11, 9, 0)


@pytest.fixture
def clock(now):
    """Clock frozen at ``now``."""
    return FixedClock(now)


@pytest.fixture
def calendar_service():
    """Calendar client double whose calls succeed."""
    service = MagicMock(spec=CalendarService)
    service.sync_reservation.return_value = CalendarSyncResult.success('evt-1')
    service.remove_reservation_event.return_value = CalendarSyncResult.success('evt-1')
    return service


@pytest.fixture
def credentials_service():
    """Credential provider double."""
    return MagicMock(spec=CredentialsService)


@pytest.fixture
def reservation_service(clock, calendar_service, credentials_service):
    """Reservation service wired to the frozen clock and calendar doubles."""
    return ReservationService(
        clock=clock,
        calendar_service=calendar_service,
        credentials_service=credentials_service,
    )


@pytest.fixture
def create_user(db):
    """Factory fixture for users."""
    counter = {'n': 0}

    def _create_user(email=None, role=UserRole.STUDENT, **kwargs):
        counter['n'] += 1
        return User.objects.create(
            email=email or f"user{counter['n']}@school.test",
            name=kwargs.pop('name', f"User {counter['n']}"),
            role=role,
            **kwargs
        )

    return _create_user


@pytest.fixture
def student(create_user):
    return create_user(email='student@school.test', name='Ana Student')


@pytest.fixture
def other_student(create_user):
    return create_user(email='other@school.test', name='Bruno Student')


@pytest.fixture
def admin(create_user):
    return create_user(email='admin@school.test', name='Carla Admin', role=UserRole.ADMIN)


@pytest.fixture
def create_room(db):
    """Factory fixture for rooms."""
    counter = {'n': 0}

    def _create_room(**kwargs):
        counter['n'] += 1
        defaults = {
            'name': f"Room {counter['n']}",
            'capacity': 6,
            'floor': 1,
            'equipment': ['projector', 'whiteboard'],
        }
        defaults.update(kwargs)
        return Room.objects.create(**defaults)

    return _create_room


@pytest.fixture
def room(create_room):
    return create_room(name='Sala Azul')


@pytest.fixture
def create_reservation(db):
    """Factory fixture inserting reservations directly, bypassing booking rules."""

    def _create_reservation(user, room, start_at, minutes=60, **kwargs):
        return Reservation.objects.create(
            user=user,
            room=room,
            start_at=start_at,
            end_at=start_at + timedelta(minutes=minutes),
            **kwargs
        )

    return _create_reservation


@pytest.fixture
def api_client():
    """Provide API client for testing."""
    return APIClient()


@pytest.fixture
def authenticate():
    """Authenticate an API client as a stored user."""

    def _authenticate(client, user):
        client.force_authenticate(user=TokenUser({
            'sub': str(user.pk),
            'email': user.email,
            'roles': [user.role],
        }))
        return client

    return _authenticate
