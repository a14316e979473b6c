"""
Per-room write serialization.

``room_lock`` holds a process-local lease for the room and an open database
transaction for the duration of the block. Callers re-read the room with
``Room.objects.get_for_update`` inside the block so that PostgreSQL's row
lock also serializes writers running in other processes. Bookings for
different rooms never wait on each other.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Optional

from django.conf import settings
from django.db import OperationalError, connection, transaction

from apps.core.services.exceptions import LockTimeoutError

logger = logging.getLogger(__name__)

# SQLSTATE for lock_not_available
PG_LOCK_NOT_AVAILABLE = '55P03'


class RoomLeaseRegistry:
    """
    One ``threading.Lock`` per room id in use.

    Entries are reference counted: ``checkout`` registers a holder or waiter
    and ``checkin`` drops the entry once none remain.
    """

    def __init__(self):
        self._leases: Dict[str, threading.Lock] = {}
        self._users: Dict[str, int] = {}
        self._guard = threading.Lock()

    def checkout(self, room_id) -> threading.Lock:
        key = str(room_id)
        with self._guard:
            lease = self._leases.get(key)
            if lease is None:
                lease = self._leases[key] = threading.Lock()
            self._users[key] = self._users.get(key, 0) + 1
            return lease

    def checkin(self, room_id):
        key = str(room_id)
        with self._guard:
            remaining = self._users[key] - 1
            if remaining:
                self._users[key] = remaining
            else:
                del self._users[key]
                del self._leases[key]

    def __len__(self):
        with self._guard:
            return len(self._leases)


_registry = RoomLeaseRegistry()


def is_lock_timeout(exc: OperationalError) -> bool:
    """True when the database gave up waiting for a row lock."""
    cause = exc.__cause__
    code = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    return code == PG_LOCK_NOT_AVAILABLE


@contextmanager
def room_lock(room_id, timeout: Optional[float] = None):
    """
    Serialize writers on ``room_id`` and run the block in one transaction.

    Raises ``LockTimeoutError`` when the lease is not obtained within
    ``timeout`` seconds (default ``RESERVATION_LOCK_TIMEOUT_SECONDS``), or
    when the database reports a lock timeout inside the block.
    """
    if timeout is None:
        timeout = settings.RESERVATION_LOCK_TIMEOUT_SECONDS

    lease = _registry.checkout(room_id)
    if not lease.acquire(timeout=timeout):
        _registry.checkin(room_id)
        logger.warning(f"Timed out after {timeout}s waiting for room {room_id}")
        raise LockTimeoutError(f"Timed out waiting for room {room_id}.")

    try:
        with transaction.atomic():
            if connection.vendor == 'postgresql':
                with connection.cursor() as cursor:
                    cursor.execute(f"SET LOCAL lock_timeout = '{int(timeout * 1000)}ms'")
            try:
                yield
            except OperationalError as e:
                if is_lock_timeout(e):
                    logger.warning(f"Database lock timeout on room {room_id}")
                    raise LockTimeoutError(f"Timed out waiting for room {room_id}.") from e
                raise
    finally:
        lease.release()
        _registry.checkin(room_id)
