# services/room-booking-service/src/apps/api/views/__init__.py
"""
Room Booking API Views
"""

from .room_views import (
    RoomViewSet,
)

from .booking_views import (
    BookingViewSet,
)

from .recurring_views import (
    RecurrenceExpandView,
    RecurringPatternViewSet,
)


__all__ = [
    # Rooms
    'RoomViewSet',

    # Bookings
    'BookingViewSet',

    # Recurring
    'RecurrenceExpandView',
    'RecurringPatternViewSet',
]
