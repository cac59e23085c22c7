# services/room-booking-service/src/apps/api/serializers/room_serializers.py
"""
Room Serializers
"""

from rest_framework import serializers

from apps.core.models import Room
from .fields import ClockTimeField


class RoomSerializer(serializers.ModelSerializer):
    """Base room serializer."""

    status_display = serializers.CharField(
        source='get_status_display',
        read_only=True
    )
    is_bookable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Room
        fields = [
            'id', 'name', 'capacity', 'location', 'floor', 'room_number',
            'description', 'image_url', 'amenities',
            'status', 'status_display', 'is_bookable',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class RoomSearchSerializer(serializers.Serializer):
    """Query parameters for room search."""

    capacity = serializers.IntegerField(required=False, min_value=1)
    location = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateField(required=False)
    start_time = ClockTimeField(required=False)
    end_time = ClockTimeField(required=False)

    def validate(self, attrs):
        time_fields = [attrs.get('date'), attrs.get('start_time'), attrs.get('end_time')]

        if any(time_fields) and not all(time_fields):
            raise serializers.ValidationError(
                "date, start_time and end_time must be given together"
            )

        return attrs
