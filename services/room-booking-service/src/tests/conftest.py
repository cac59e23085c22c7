# services/room-booking-service/src/tests/conftest.py
"""
Pytest Configuration and Fixtures

Provides common fixtures for room booking service tests.
"""

import uuid
from datetime import datetime, date, time

import pytest
from django.utils import timezone
from rest_framework.test import APIClient


# A Monday far enough ahead that bookings never lie in the past
BOOKING_DAY = date(2030, 3, 4)


def at(day: date, hour: int, minute: int = 0) -> datetime:
    """Aware datetime on a day at the given time."""
    return timezone.make_aware(datetime.combine(day, time(hour, minute)))


@pytest.fixture
def api_client():
    """Provide API client for testing."""
    return APIClient()


@pytest.fixture
def user_id():
    """Provide a test user ID."""
    return uuid.uuid4()


@pytest.fixture
def user_headers(user_id):
    """Provide identity headers for API requests."""
    return {
        'HTTP_X_USER_ID': str(user_id),
    }


@pytest.fixture
def booking_day():
    return BOOKING_DAY


@pytest.fixture
def create_room():
    """Factory fixture for creating rooms."""
    from apps.core.models import Room

    def _create_room(**kwargs):
        defaults = {
            'name': 'Fjord',
            'capacity': 8,
            'location': 'Oslo HQ',
            'floor': '3',
            'amenities': ['projector', 'whiteboard'],
            'status': Room.Status.AVAILABLE,
        }
        defaults.update(kwargs)

        return Room.objects.create(**defaults)

    return _create_room


@pytest.fixture
def room(create_room):
    return create_room()


@pytest.fixture
def create_booking(room, user_id):
    """Factory fixture for creating bookings."""
    from apps.core.models import Booking

    def _create_booking(**kwargs):
        defaults = {
            'room': room,
            'user_id': user_id,
            'title': 'Team sync',
            'status': Booking.Status.CONFIRMED,
            'start_time': at(BOOKING_DAY, 10),
            'end_time': at(BOOKING_DAY, 11),
        }
        defaults.update(kwargs)

        return Booking.objects.create(**defaults)

    return _create_booking


@pytest.fixture
def create_recurring_pattern(room, user_id):
    """Factory fixture for creating recurring patterns."""
    from apps.core.models import RecurringPattern

    def _create_pattern(**kwargs):
        defaults = {
            'user_id': user_id,
            'room': room,
            'frequency': RecurringPattern.Frequency.WEEKLY,
            'interval': 1,
            'days_of_week': [1],
            'start_date': BOOKING_DAY,
            'max_occurrences': 4,
            'start_time': time(10, 0),
            'end_time': time(11, 0),
        }
        defaults.update(kwargs)

        return RecurringPattern.objects.create(**defaults)

    return _create_pattern
