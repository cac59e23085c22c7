# services/room-booking-service/src/apps/api/views/filters.py
"""
API Filters

Django Filter classes for the room booking API.
"""

import django_filters
from django.utils import timezone

from apps.core.models import Booking, Room


class RoomFilter(django_filters.FilterSet):
    """Filter for room queries."""

    capacity = django_filters.NumberFilter(
        field_name='capacity',
        lookup_expr='gte'
    )
    location = django_filters.CharFilter(
        lookup_expr='icontains'
    )
    status = django_filters.ChoiceFilter(
        choices=Room.Status.choices
    )
    amenity = django_filters.CharFilter(
        method='filter_amenity'
    )

    class Meta:
        model = Room
        fields = ['capacity', 'location', 'status', 'floor']

    def filter_amenity(self, queryset, name, value):
        """Rooms listing the given amenity."""
        matching = [
            room.id for room in queryset
            if value.lower() in [a.lower() for a in room.amenities or []]
        ]
        return queryset.filter(id__in=matching)


class BookingFilter(django_filters.FilterSet):
    """Filter for booking queries."""

    # Date filters
    date = django_filters.DateFilter(
        field_name='start_time',
        lookup_expr='date'
    )
    date_from = django_filters.DateFilter(
        field_name='start_time',
        lookup_expr='date__gte'
    )
    date_to = django_filters.DateFilter(
        field_name='start_time',
        lookup_expr='date__lte'
    )

    # Status filters
    status = django_filters.ChoiceFilter(
        choices=Booking.Status.choices
    )
    upcoming = django_filters.BooleanFilter(
        method='filter_upcoming'
    )

    # Resource filters
    room = django_filters.UUIDFilter(field_name='room_id')
    recurring_pattern = django_filters.UUIDFilter(field_name='recurring_pattern_id')

    meeting_type = django_filters.ChoiceFilter(
        choices=Booking.MeetingType.choices
    )

    class Meta:
        model = Booking
        fields = ['status', 'room', 'meeting_type', 'recurring_pattern']

    def filter_upcoming(self, queryset, name, value):
        """Bookings that have not ended yet."""
        if value:
            return queryset.filter(end_time__gte=timezone.now())
        return queryset.filter(end_time__lt=timezone.now())
