# services/room-booking-service/src/apps/core/services/__init__.py
"""
Room Booking Service Business Logic
"""

from .exceptions import (
    BookingServiceError,
    InvalidWindowError,
    InvalidRecurrenceRuleError,
    DataSourceUnavailableError,
    BookingNotFoundError,
    RoomNotFoundError,
    RoomUnavailableError,
    BookingConflictError,
    BookingValidationError,
    BookingStateError,
)
from .recurrence import (
    Frequency,
    RecurrenceRule,
    expand_recurrence,
    describe_recurrence,
)
from .booking_sources import (
    BookingSource,
    DjangoBookingSource,
    InMemoryBookingSource,
)
from .availability_service import (
    AvailabilityService,
    AvailabilityResult,
    TimeWindow,
    TimeSlot,
    validate_booking_times,
)
from .room_service import RoomService
from .booking_service import (
    BookingService,
    CancelScope,
    RecurringInstance,
    RecurringBookingResult,
)


__all__ = [
    # Services
    'BookingService',
    'AvailabilityService',
    'RoomService',

    # Availability
    'AvailabilityResult',
    'TimeWindow',
    'TimeSlot',
    'validate_booking_times',
    'BookingSource',
    'DjangoBookingSource',
    'InMemoryBookingSource',

    # Recurrence
    'Frequency',
    'RecurrenceRule',
    'expand_recurrence',
    'describe_recurrence',
    'CancelScope',
    'RecurringInstance',
    'RecurringBookingResult',

    # Exceptions
    'BookingServiceError',
    'InvalidWindowError',
    'InvalidRecurrenceRuleError',
    'DataSourceUnavailableError',
    'BookingNotFoundError',
    'RoomNotFoundError',
    'RoomUnavailableError',
    'BookingConflictError',
    'BookingValidationError',
    'BookingStateError',
]
