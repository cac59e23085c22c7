# services/room-booking-service/src/apps/api/serializers/__init__.py
"""
Room Booking API Serializers
"""

from .fields import ClockTimeField

from .room_serializers import (
    RoomSerializer,
    RoomSearchSerializer,
)

from .booking_serializers import (
    BookingSerializer,
    BookingListSerializer,
    BookingCreateSerializer,
    BookingUpdateSerializer,
    BookingCancelSerializer,
    ConflictSerializer,
)

from .availability_serializers import (
    AvailabilityCheckSerializer,
    AvailabilityResultSerializer,
    SlotQuerySerializer,
    TimeSlotSerializer,
)

from .recurring_serializers import (
    RecurrenceRuleSerializer,
    RecurrenceExpandResultSerializer,
    RecurringPreviewSerializer,
    RecurringBookingCreateSerializer,
    RecurringInstanceSerializer,
    RecurringPatternSerializer,
    RecurringCancelSerializer,
)


__all__ = [
    'ClockTimeField',

    # Room
    'RoomSerializer',
    'RoomSearchSerializer',

    # Booking
    'BookingSerializer',
    'BookingListSerializer',
    'BookingCreateSerializer',
    'BookingUpdateSerializer',
    'BookingCancelSerializer',
    'ConflictSerializer',

    # Availability
    'AvailabilityCheckSerializer',
    'AvailabilityResultSerializer',
    'SlotQuerySerializer',
    'TimeSlotSerializer',

    # Recurring
    'RecurrenceRuleSerializer',
    'RecurrenceExpandResultSerializer',
    'RecurringPreviewSerializer',
    'RecurringBookingCreateSerializer',
    'RecurringInstanceSerializer',
    'RecurringPatternSerializer',
    'RecurringCancelSerializer',
]
