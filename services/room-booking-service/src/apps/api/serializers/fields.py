# services/room-booking-service/src/apps/api/serializers/fields.py
"""
Custom serializer fields.
"""

from rest_framework import serializers


class ClockTimeField(serializers.RegexField):
    """Time of day as an 'HH:MM' string."""

    default_error_messages = {
        'invalid': 'Enter a valid time in HH:MM format.',
    }

    def __init__(self, **kwargs):
        super().__init__(r'^([01]\d|2[0-3]):[0-5]\d$', **kwargs)
