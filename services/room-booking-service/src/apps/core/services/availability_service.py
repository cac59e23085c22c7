# services/room-booking-service/src/apps/core/services/availability_service.py
"""
Availability Service

Decides whether a room is free for a time window and finds free slots.
"""

import uuid
import logging
from dataclasses import dataclass, field
from datetime import datetime, date, time, timedelta
from typing import Optional, Any, List

from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils import timezone

from shared.common.validators import validate_time_slot
from apps.core.models import Booking
from .booking_sources import BookingSource, DjangoBookingSource
from .exceptions import InvalidWindowError, BookingValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeWindow:
    """Half-open time interval [start, end)."""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidWindowError(
                details={
                    'start': self.start.isoformat(),
                    'end': self.end.isoformat(),
                }
            )

    @classmethod
    def from_strings(
        cls,
        target_date: date,
        start_time: str,
        end_time: str,
        tz=None
    ) -> 'TimeWindow':
        """Build a window from a date and 'HH:MM' start/end strings."""
        start = timezone.make_aware(
            datetime.combine(target_date, parse_clock_time(start_time)), tz
        )
        end = timezone.make_aware(
            datetime.combine(target_date, parse_clock_time(end_time)), tz
        )
        return cls(start=start, end=end)

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Strict overlap; touching intervals do not overlap."""
        return start < self.end and end > self.start

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() / 60)


@dataclass
class AvailabilityResult:
    """Outcome of an availability check."""
    available: bool
    conflicts: List[Any] = field(default_factory=list)

    @property
    def earliest_conflict(self) -> Optional[Any]:
        if not self.conflicts:
            return None
        return min(self.conflicts, key=lambda b: b.start_time)


@dataclass
class TimeSlot:
    """Bookable slot of a day."""
    start: datetime
    end: datetime
    is_available: bool


def parse_clock_time(value: str) -> time:
    """Parse an 'HH:MM' string."""
    try:
        return datetime.strptime(value, '%H:%M').time()
    except (TypeError, ValueError):
        raise InvalidWindowError(f"Invalid time '{value}', expected HH:MM")


def get_business_hours() -> tuple:
    return (
        getattr(settings, 'BOOKING_BUSINESS_START_HOUR', 8),
        getattr(settings, 'BOOKING_BUSINESS_END_HOUR', 18),
    )


def validate_booking_times(start: datetime, end: datetime) -> None:
    """
    Validate a proposed booking period.

    The booking must lie within business hours of a single day and last
    at least the minimum duration.
    """
    if start >= end:
        raise InvalidWindowError()

    start_hour, end_hour = get_business_hours()
    min_minutes = getattr(settings, 'BOOKING_MIN_DURATION_MINUTES', 30)

    local_start = timezone.localtime(start) if timezone.is_aware(start) else start
    local_end = timezone.localtime(end) if timezone.is_aware(end) else end

    if local_start.date() != local_end.date():
        raise BookingValidationError(
            "Bookings must start and end on the same day", field='end_time'
        )

    if local_start.hour < start_hour:
        raise BookingValidationError(
            f"Bookings cannot start before {start_hour:02d}:00", field='start_time'
        )

    if local_end.hour > end_hour or (local_end.hour == end_hour and local_end.minute > 0):
        raise BookingValidationError(
            f"Bookings must end by {end_hour:02d}:00", field='end_time'
        )

    try:
        validate_time_slot(
            start,
            end,
            min_duration_minutes=min_minutes,
            max_duration_hours=max(end_hour - start_hour, 1),
        )
    except ValidationError as e:
        raise BookingValidationError(e.messages[0], field='end_time')


class AvailabilityService:
    """
    Service for room availability.

    Handles:
    - Conflict checks for a room and time window
    - Free slot finding for a day
    """

    def __init__(self, booking_source: BookingSource = None):
        self.booking_source = booking_source or DjangoBookingSource()

    # ==========================================================================
    # Availability Checks
    # ==========================================================================

    def check_availability(
        self,
        room_id: uuid.UUID,
        window: TimeWindow,
        exclude_booking_id: uuid.UUID = None
    ) -> AvailabilityResult:
        """
        Check whether a room is free for a window.

        Conflicts keep the source's order. DataSourceUnavailableError from
        the source propagates unchanged.
        """
        if window.start >= window.end:
            raise InvalidWindowError()

        bookings = self.booking_source.fetch_for_room(room_id, window)

        conflicts = [
            b for b in bookings
            if b.status != Booking.Status.CANCELLED
            and (exclude_booking_id is None or str(b.id) != str(exclude_booking_id))
            and window.overlaps(b.start_time, b.end_time)
        ]

        if conflicts:
            logger.info(
                f"Room {room_id} has {len(conflicts)} conflict(s) for "
                f"{window.start.isoformat()} - {window.end.isoformat()}"
            )

        return AvailabilityResult(available=not conflicts, conflicts=conflicts)

    def is_room_available(
        self,
        room_id: uuid.UUID,
        window: TimeWindow,
        exclude_booking_id: uuid.UUID = None
    ) -> bool:
        return self.check_availability(room_id, window, exclude_booking_id).available

    # ==========================================================================
    # Available Slots
    # ==========================================================================

    def find_available_slots(
        self,
        room_id: uuid.UUID,
        target_date: date,
        slot_minutes: int = None,
        start_hour: int = None,
        end_hour: int = None
    ) -> List[TimeSlot]:
        """Split a business day into slots and flag the free ones."""
        default_start, default_end = get_business_hours()
        start_hour = default_start if start_hour is None else start_hour
        end_hour = default_end if end_hour is None else end_hour
        slot_minutes = slot_minutes or getattr(settings, 'BOOKING_SLOT_MINUTES', 60)

        if slot_minutes <= 0:
            raise BookingValidationError(
                "Slot length must be positive", field='slot_minutes'
            )

        day_window = TimeWindow(
            start=timezone.make_aware(datetime.combine(target_date, time(start_hour))),
            end=timezone.make_aware(datetime.combine(target_date, time(end_hour))),
        )
        bookings = [
            b for b in self.booking_source.fetch_for_room(room_id, day_window)
            if b.status != Booking.Status.CANCELLED
        ]

        slots = []
        step = timedelta(minutes=slot_minutes)
        current = day_window.start

        while current + step <= day_window.end:
            slot = TimeWindow(start=current, end=current + step)
            is_blocked = any(
                slot.overlaps(b.start_time, b.end_time) for b in bookings
            )
            slots.append(TimeSlot(
                start=slot.start,
                end=slot.end,
                is_available=not is_blocked,
            ))
            current += step

        return slots
