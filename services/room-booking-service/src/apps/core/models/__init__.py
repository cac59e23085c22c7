# services/room-booking-service/src/apps/core/models/__init__.py
"""
Room Booking Service Models
"""

from .room import Room
from .booking import Booking
from .recurring_pattern import RecurringPattern

__all__ = [
    'Room',
    'Booking',
    'RecurringPattern',
]
