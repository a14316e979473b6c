"""
User Serializers
"""

from rest_framework import serializers

from apps.core.models import User


class UserSerializer(serializers.ModelSerializer):
    """Public profile of a user."""

    calendar_linked = serializers.BooleanField(source='has_calendar_credentials', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'role', 'calendar_linked']
        read_only_fields = fields
