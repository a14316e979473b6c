"""
Availability Serializers
"""

from rest_framework import serializers

from .room_serializers import RoomSerializer


class TimeSlotSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    label = serializers.CharField(read_only=True)
    start = serializers.TimeField(format='%H:%M', read_only=True)
    end = serializers.TimeField(format='%H:%M', read_only=True)


class AvailabilityCellSerializer(serializers.Serializer):
    room_id = serializers.CharField(read_only=True)
    slot_id = serializers.CharField(read_only=True)
    available = serializers.BooleanField(read_only=True)


class DailyAvailabilitySerializer(serializers.Serializer):
    """Rooms, slots and the full room-by-slot matrix for one day."""

    date = serializers.DateField(read_only=True)
    rooms = RoomSerializer(many=True, read_only=True)
    slots = TimeSlotSerializer(many=True, read_only=True)
    availability = AvailabilityCellSerializer(many=True, read_only=True)


class AvailabilityQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False, input_formats=['%Y-%m-%d'])
