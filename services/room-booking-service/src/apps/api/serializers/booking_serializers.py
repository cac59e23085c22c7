# services/room-booking-service/src/apps/api/serializers/booking_serializers.py
"""
Booking Serializers

Serializers for booking operations.
"""

from rest_framework import serializers

from apps.core.models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Base booking serializer."""

    room_name = serializers.CharField(source='room.name', read_only=True)
    meeting_type_display = serializers.CharField(
        source='get_meeting_type_display',
        read_only=True
    )
    status_display = serializers.CharField(
        source='get_status_display',
        read_only=True
    )
    duration_minutes = serializers.IntegerField(read_only=True)
    is_recurring = serializers.BooleanField(read_only=True)
    can_cancel = serializers.BooleanField(read_only=True)
    can_modify = serializers.BooleanField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            'id', 'room', 'room_name', 'user_id',
            'title', 'description',
            'meeting_type', 'meeting_type_display',
            'attendees', 'equipment_needed', 'special_requests',
            'start_time', 'end_time', 'duration_minutes',
            'status', 'status_display',
            'recurring_pattern', 'is_recurring',
            'cancelled_at', 'cancellation_reason',
            'can_cancel', 'can_modify',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class BookingListSerializer(BookingSerializer):
    """Compact serializer for booking lists."""

    class Meta(BookingSerializer.Meta):
        fields = [
            'id', 'room', 'room_name', 'title',
            'start_time', 'end_time', 'duration_minutes',
            'status', 'status_display', 'is_recurring',
        ]
        read_only_fields = fields


class BookingCreateSerializer(serializers.Serializer):
    """Serializer for creating bookings."""

    room_id = serializers.UUIDField()
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    meeting_type = serializers.ChoiceField(
        choices=Booking.MeetingType.choices,
        required=False
    )
    attendees = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False
    )
    equipment_needed = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False
    )
    special_requests = serializers.CharField(required=False, allow_blank=True)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()

    def validate(self, attrs):
        if attrs['start_time'] >= attrs['end_time']:
            raise serializers.ValidationError({
                'end_time': 'End time must be after start time'
            })
        return attrs


class BookingUpdateSerializer(serializers.Serializer):
    """Serializer for partial booking updates."""

    room_id = serializers.UUIDField(required=False)
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    meeting_type = serializers.ChoiceField(
        choices=Booking.MeetingType.choices,
        required=False
    )
    attendees = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False
    )
    equipment_needed = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False
    )
    special_requests = serializers.CharField(required=False, allow_blank=True)
    start_time = serializers.DateTimeField(required=False)
    end_time = serializers.DateTimeField(required=False)


class BookingCancelSerializer(serializers.Serializer):
    """Serializer for cancelling a booking."""

    reason = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=1000
    )


class ConflictSerializer(serializers.Serializer):
    """A booking that blocks the requested window."""

    id = serializers.UUIDField()
    title = serializers.CharField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    status = serializers.CharField()
