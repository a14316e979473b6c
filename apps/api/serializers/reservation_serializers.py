"""
Reservation Serializers
"""

from rest_framework import serializers

from apps.core.models import Reservation
from .room_serializers import RoomSerializer
from .user_serializers import UserSerializer


class ReservationDetailSerializer(serializers.ModelSerializer):
    """Reservation with its room and owner."""

    room = RoomSerializer(read_only=True)
    user = UserSerializer(read_only=True)
    duration_minutes = serializers.SerializerMethodField()
    synced_to_calendar = serializers.SerializerMethodField()

    class Meta:
        model = Reservation
        fields = [
            'id', 'start_at', 'end_at', 'duration_minutes',
            'room', 'user', 'synced_to_calendar', 'created_at',
        ]
        read_only_fields = fields

    def get_duration_minutes(self, obj) -> int:
        return int((obj.end_at - obj.start_at).total_seconds() // 60)

    def get_synced_to_calendar(self, obj) -> bool:
        return bool(obj.google_event_id)


class ReservationCreateSerializer(serializers.Serializer):
    """
    Booking request.

    Start and end are optional here so that a missing bound is reported by
    the booking rules as INVALID_RANGE like any other bad window.
    """

    room_id = serializers.IntegerField()
    start_at = serializers.DateTimeField(required=False, allow_null=True)
    end_at = serializers.DateTimeField(required=False, allow_null=True)
    add_to_google_calendar = serializers.BooleanField(required=False, default=False)


class ReservationOnBehalfSerializer(serializers.Serializer):
    """Booking request made by an administrator for another user."""

    user_email = serializers.EmailField()
    room_id = serializers.IntegerField()
    start_at = serializers.DateTimeField(required=False, allow_null=True)
    end_at = serializers.DateTimeField(required=False, allow_null=True)


class MyReservationsSerializer(serializers.Serializer):
    """Reservations of the requester grouped relative to now."""

    current = ReservationDetailSerializer(many=True, read_only=True)
    future = ReservationDetailSerializer(many=True, read_only=True)
    past = ReservationDetailSerializer(many=True, read_only=True)
