"""
Concurrency tests for room locking.

These run with real transactions so that worker threads, each on its own
database connection, see committed data.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import connection

from apps.core import locks
from apps.core.locks import room_lock
from apps.core.models import Reservation
from apps.core.services import LockTimeoutError, RoomNotFoundError, SlotConflictError

WORKERS = 8


def _in_thread(func):
    """Run ``func`` and close the thread's database connection afterwards."""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        finally:
            connection.close()
    return wrapper


@pytest.mark.django_db(transaction=True)
class TestConcurrentBooking:

    def test_single_winner_for_same_window(self, reservation_service, create_user, room, at):
        users = [create_user() for _ in range(WORKERS)]
        barrier = threading.Barrier(WORKERS)
        start, end = at(2025, 6, 16, 10), at(2025, 6, 16, 11)

        @_in_thread
        def book(user):
            barrier.wait()
            try:
                reservation_service.create_reservation(user.email, room.id, start, end)
                return 'created'
            except SlotConflictError:
                return 'conflict'

        with ThreadPoolExecutor(max_workers=WORKERS) as pool:
            outcomes = list(pool.map(book, users))

        assert outcomes.count('created') == 1
        assert outcomes.count('conflict') == WORKERS - 1
        assert Reservation.objects.filter(room=room).count() == 1


@pytest.mark.django_db(transaction=True)
class TestRoomLock:

    def test_timeout_when_room_held(self):
        held = threading.Event()
        release = threading.Event()

        @_in_thread
        def holder():
            with room_lock(101):
                held.set()
                release.wait(5)

        @_in_thread
        def contender():
            with room_lock(101, timeout=0.1):
                pass

        with ThreadPoolExecutor(max_workers=2) as pool:
            holding = pool.submit(holder)
            assert held.wait(5)
            with pytest.raises(LockTimeoutError):
                pool.submit(contender).result()
            release.set()
            holding.result()

    def test_other_rooms_not_blocked(self):
        held = threading.Event()
        release = threading.Event()

        @_in_thread
        def holder():
            with room_lock(201):
                held.set()
                release.wait(5)

        @_in_thread
        def other_room():
            with room_lock(202, timeout=0.5):
                return 'entered'

        with ThreadPoolExecutor(max_workers=2) as pool:
            holding = pool.submit(holder)
            assert held.wait(5)
            assert pool.submit(other_room).result() == 'entered'
            release.set()
            holding.result()

    def test_lock_released_after_error(self):
        with pytest.raises(RuntimeError):
            with room_lock(301):
                raise RuntimeError('boom')

        with room_lock(301, timeout=0.1):
            pass

    def test_registry_empty_after_block(self):
        with room_lock(401):
            assert len(locks._registry) == 1

        assert len(locks._registry) == 0

    def test_timed_out_waiter_leaves_holder_entry(self):
        held = threading.Event()
        release = threading.Event()

        @_in_thread
        def holder():
            with room_lock(501):
                held.set()
                release.wait(5)

        with ThreadPoolExecutor(max_workers=1) as pool:
            holding = pool.submit(holder)
            assert held.wait(5)
            with pytest.raises(LockTimeoutError):
                with room_lock(501, timeout=0.1):
                    pass
            assert len(locks._registry) == 1
            release.set()
            holding.result()

        assert len(locks._registry) == 0

    def test_unknown_rooms_leave_no_entries(self, reservation_service, student, at):
        for room_id in range(10000, 10050):
            with pytest.raises(RoomNotFoundError):
                reservation_service.create_reservation(
                    student.email, room_id, at(2025, 6, 16, 10), at(2025, 6, 16, 11)
                )

        assert len(locks._registry) == 0
