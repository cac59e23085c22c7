# services/room-booking-service/src/apps/api/serializers/availability_serializers.py
"""
Availability Serializers
"""

from rest_framework import serializers

from .booking_serializers import ConflictSerializer
from .fields import ClockTimeField


class AvailabilityCheckSerializer(serializers.Serializer):
    """Request body for an availability check."""

    date = serializers.DateField()
    start_time = ClockTimeField()
    end_time = ClockTimeField()
    exclude_booking_id = serializers.UUIDField(required=False, allow_null=True)


class AvailabilityResultSerializer(serializers.Serializer):
    """Outcome of an availability check."""

    available = serializers.BooleanField()
    conflicts = ConflictSerializer(many=True)


class SlotQuerySerializer(serializers.Serializer):
    """Query parameters for available slots."""

    date = serializers.DateField()
    slot_minutes = serializers.IntegerField(
        required=False,
        min_value=15,
        max_value=480
    )


class TimeSlotSerializer(serializers.Serializer):
    """Bookable slot of a day."""

    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    is_available = serializers.BooleanField()
