"""
Room Serializers
"""

from rest_framework import serializers

from apps.core.models import Room


class RoomSerializer(serializers.ModelSerializer):
    """Room as exposed to clients; also validates admin writes."""

    capacity = serializers.IntegerField(min_value=1)
    equipment = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        default=list
    )

    class Meta:
        model = Room
        fields = ['id', 'name', 'capacity', 'floor', 'equipment', 'image_url']
        read_only_fields = ['id']
