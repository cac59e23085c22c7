# services/room-booking-service/src/apps/api/serializers/recurring_serializers.py
"""
Recurring Pattern Serializers

Serializers for recurrence rules and recurring booking series.
"""

from rest_framework import serializers

from apps.core.models import Booking, RecurringPattern
from apps.core.services import CancelScope, Frequency, RecurrenceRule
from .fields import ClockTimeField


class RecurrenceRuleSerializer(serializers.Serializer):
    """Recurrence rule fields."""

    start_date = serializers.DateField()
    frequency = serializers.ChoiceField(choices=[f.value for f in Frequency])
    interval = serializers.IntegerField(default=1, min_value=1)
    days_of_week = serializers.ListField(
        child=serializers.IntegerField(min_value=1, max_value=7),
        required=False,
        help_text="ISO weekdays, 1=Monday ... 7=Sunday"
    )
    end_date = serializers.DateField(required=False, allow_null=True)
    max_occurrences = serializers.IntegerField(
        required=False,
        allow_null=True,
        min_value=1
    )

    def validate(self, attrs):
        end_date = attrs.get('end_date')
        if end_date and end_date < attrs['start_date']:
            raise serializers.ValidationError({
                'end_date': 'End date cannot be before start date'
            })
        return attrs

    def to_rule(self) -> RecurrenceRule:
        data = self.validated_data
        return RecurrenceRule(
            start_date=data['start_date'],
            frequency=data['frequency'],
            interval=data.get('interval', 1),
            days_of_week=frozenset(data.get('days_of_week') or []),
            end_date=data.get('end_date'),
            max_occurrences=data.get('max_occurrences'),
        )


class RecurrenceExpandResultSerializer(serializers.Serializer):
    """Expanded occurrence dates of a rule."""

    occurrences = serializers.ListField(child=serializers.DateField())
    count = serializers.IntegerField()
    description = serializers.CharField()


class RecurringPreviewSerializer(RecurrenceRuleSerializer):
    """Request body for previewing a recurring booking."""

    room_id = serializers.UUIDField()
    start_time = ClockTimeField()
    end_time = ClockTimeField()
    excluded_dates = serializers.ListField(
        child=serializers.DateField(),
        required=False,
        default=list
    )


class RecurringBookingCreateSerializer(RecurringPreviewSerializer):
    """Request body for creating a recurring booking."""

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


class RecurringInstanceSerializer(serializers.Serializer):
    """One previewed occurrence."""

    date = serializers.DateField()
    start = serializers.DateTimeField()
    end = serializers.DateTimeField()
    available = serializers.BooleanField()
    conflict_id = serializers.UUIDField(allow_null=True)
    excluded = serializers.BooleanField()


class RecurringPatternSerializer(serializers.ModelSerializer):
    """Stored recurring pattern."""

    frequency_display = serializers.CharField(
        source='get_frequency_display',
        read_only=True
    )
    description = serializers.CharField(read_only=True)
    booking_count = serializers.SerializerMethodField()

    class Meta:
        model = RecurringPattern
        fields = [
            'id', 'user_id', 'room',
            'frequency', 'frequency_display', 'interval', 'days_of_week',
            'start_date', 'end_date', 'max_occurrences',
            'start_time', 'end_time',
            'description', 'booking_count',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_booking_count(self, obj) -> int:
        """Count of confirmed bookings in the series."""
        return obj.bookings.filter(status=Booking.Status.CONFIRMED).count()


class RecurringCancelSerializer(serializers.Serializer):
    """Request body for cancelling part of a series."""

    scope = serializers.ChoiceField(choices=[s.value for s in CancelScope])
    instance_id = serializers.UUIDField(required=False, allow_null=True)
    reason = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=1000
    )

    def validate(self, attrs):
        if attrs['scope'] != CancelScope.ALL.value and not attrs.get('instance_id'):
            raise serializers.ValidationError({
                'instance_id': 'Required unless scope is "all"'
            })
        return attrs
