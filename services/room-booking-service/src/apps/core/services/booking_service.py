# services/room-booking-service/src/apps/core/services/booking_service.py
"""
Booking Service

Core business logic for room reservations, including recurring series.
"""

import uuid
import logging
from dataclasses import dataclass, field
from datetime import datetime, date, time
from enum import Enum
from typing import Optional, List, Iterable

from django.db import transaction
from django.utils import timezone

from apps.core.models import Booking, RecurringPattern
from .availability_service import (
    AvailabilityService,
    TimeWindow,
    validate_booking_times,
)
from .booking_sources import InMemoryBookingSource
from .exceptions import (
    BookingNotFoundError,
    BookingConflictError,
    BookingStateError,
    BookingValidationError,
)
from .recurrence import RecurrenceRule, expand_recurrence
from .room_service import RoomService

logger = logging.getLogger(__name__)


class CancelScope(str, Enum):
    """Which bookings of a recurring series to cancel."""
    SINGLE = 'single'
    FUTURE = 'future'
    ALL = 'all'


@dataclass
class RecurringInstance:
    """One occurrence of a recurring booking with its availability."""
    date: date
    start: datetime
    end: datetime
    available: bool
    conflict_id: Optional[uuid.UUID] = None
    excluded: bool = False


@dataclass
class RecurringBookingResult:
    """Outcome of creating a recurring booking."""
    pattern: RecurringPattern
    bookings: List[Booking] = field(default_factory=list)
    skipped: List[RecurringInstance] = field(default_factory=list)


class BookingService:
    """
    Service for managing bookings.

    Handles:
    - Booking CRUD
    - Conflict checks before writes
    - Status transitions
    - Recurring series preview, creation and cancellation
    """

    UPDATABLE_FIELDS = [
        'title', 'description', 'meeting_type', 'attendees',
        'equipment_needed', 'special_requests',
        'start_time', 'end_time', 'room_id',
    ]

    def __init__(
        self,
        availability_service: AvailabilityService = None,
        room_service: RoomService = None
    ):
        self.availability_service = availability_service or AvailabilityService()
        self.room_service = room_service or RoomService(self.availability_service)

    # ==========================================================================
    # Booking CRUD
    # ==========================================================================

    @transaction.atomic
    def create_booking(
        self,
        room_id: uuid.UUID,
        user_id: uuid.UUID,
        title: str,
        start_time: datetime,
        end_time: datetime,
        **kwargs
    ) -> Booking:
        """Create a confirmed booking after validation and a conflict check."""
        # 1. Basic time validation
        validate_booking_times(start_time, end_time)

        # 2. Room must accept bookings
        room = self.room_service.get_bookable_room(room_id, for_update=True)

        # 3. Check for conflicts
        window = TimeWindow(start=start_time, end=end_time)
        result = self.availability_service.check_availability(room.id, window)

        if not result.available:
            raise BookingConflictError(conflicts=result.conflicts)

        # 4. Create booking
        booking = Booking.objects.create(
            room=room,
            user_id=user_id,
            title=title,
            start_time=start_time,
            end_time=end_time,
            status=Booking.Status.CONFIRMED,
            **kwargs
        )

        logger.info(
            f"Created booking {booking.id} for room {room.id} at "
            f"{start_time.strftime('%Y-%m-%d %H:%M')}"
        )

        return booking

    def get_booking(self, booking_id: uuid.UUID) -> Booking:
        """Get a booking by ID."""
        try:
            return Booking.objects.select_related('room').get(id=booking_id)
        except Booking.DoesNotExist:
            raise BookingNotFoundError(booking_id)

    def list_user_bookings(
        self,
        user_id: uuid.UUID,
        status: str = None,
        start_date: date = None,
        end_date: date = None,
        room_id: uuid.UUID = None
    ) -> List[Booking]:
        """List a user's bookings with filters."""
        queryset = Booking.objects.select_related('room').filter(user_id=user_id)

        if status:
            queryset = queryset.filter(status=status)

        if start_date:
            start_dt = timezone.make_aware(datetime.combine(start_date, time.min))
            queryset = queryset.filter(start_time__gte=start_dt)

        if end_date:
            end_dt = timezone.make_aware(datetime.combine(end_date, time.max))
            queryset = queryset.filter(end_time__lte=end_dt)

        if room_id:
            queryset = queryset.filter(room_id=room_id)

        return list(queryset.order_by('start_time'))

    def get_room_bookings(
        self,
        room_id: uuid.UUID,
        start: datetime,
        end: datetime
    ) -> List[Booking]:
        """Confirmed bookings of a room lying inside [start, end]."""
        return list(
            Booking.objects.filter(
                room_id=room_id,
                status=Booking.Status.CONFIRMED,
                start_time__gte=start,
                end_time__lte=end,
            ).order_by('start_time')
        )

    @transaction.atomic
    def update_booking(
        self,
        booking_id: uuid.UUID,
        **kwargs
    ) -> Booking:
        """Update a booking, rechecking availability when it moves."""
        booking = self.get_booking(booking_id)

        if not booking.can_modify:
            raise BookingStateError(
                f"Cannot update booking in {booking.status} status",
                current_status=booking.status
            )

        new_start = kwargs.get('start_time', booking.start_time)
        new_end = kwargs.get('end_time', booking.end_time)
        new_room_id = kwargs.get('room_id', booking.room_id)

        if (new_start != booking.start_time or
                new_end != booking.end_time or
                str(new_room_id) != str(booking.room_id)):

            validate_booking_times(new_start, new_end)
            room = self.room_service.get_bookable_room(new_room_id, for_update=True)

            result = self.availability_service.check_availability(
                room.id,
                TimeWindow(start=new_start, end=new_end),
                exclude_booking_id=booking.id,
            )
            if not result.available:
                raise BookingConflictError(conflicts=result.conflicts)

        for field_name, value in kwargs.items():
            if field_name in self.UPDATABLE_FIELDS:
                setattr(booking, field_name, value)

        booking.save()

        logger.info(f"Updated booking {booking.id}")
        return booking

    # ==========================================================================
    # Status Transitions
    # ==========================================================================

    def cancel_booking(self, booking_id: uuid.UUID, reason: str = "") -> Booking:
        """Cancel a booking."""
        booking = self.get_booking(booking_id)

        if not booking.can_cancel:
            raise BookingStateError(
                f"Cannot cancel booking in {booking.status} status",
                current_status=booking.status
            )

        booking.cancel(reason=reason)

        logger.info(f"Cancelled booking {booking.id}")
        return booking

    def complete_booking(self, booking_id: uuid.UUID) -> Booking:
        """Mark a confirmed booking as completed."""
        booking = self.get_booking(booking_id)

        if booking.status != Booking.Status.CONFIRMED:
            raise BookingStateError(
                f"Cannot complete booking in {booking.status} status",
                current_status=booking.status
            )

        booking.complete()
        return booking

    # ==========================================================================
    # Recurring Bookings
    # ==========================================================================

    def preview_recurring(
        self,
        room_id: uuid.UUID,
        rule: RecurrenceRule,
        start_time: str,
        end_time: str,
        excluded_dates: Iterable[date] = ()
    ) -> List[RecurringInstance]:
        """
        Expand a rule and check each occurrence against the room's bookings.

        The room's bookings for the whole series span are read once.
        """
        room_id = self.room_service.get_room(room_id).id

        windows = [
            (occurrence, TimeWindow.from_strings(occurrence, start_time, end_time))
            for occurrence in expand_recurrence(rule)
        ]

        span = TimeWindow(start=windows[0][1].start, end=windows[-1][1].end)
        bookings = self.availability_service.booking_source.fetch_for_room(room_id, span)
        checker = AvailabilityService(InMemoryBookingSource(bookings))

        excluded = set(excluded_dates)
        instances = []

        for occurrence, window in windows:
            result = checker.check_availability(room_id, window)
            conflict = result.earliest_conflict
            instances.append(RecurringInstance(
                date=occurrence,
                start=window.start,
                end=window.end,
                available=result.available,
                conflict_id=conflict.id if conflict else None,
                excluded=occurrence in excluded,
            ))

        return instances

    @transaction.atomic
    def create_recurring_booking(
        self,
        room_id: uuid.UUID,
        user_id: uuid.UUID,
        title: str,
        rule: RecurrenceRule,
        start_time: str,
        end_time: str,
        excluded_dates: Iterable[date] = (),
        **kwargs
    ) -> RecurringBookingResult:
        """
        Create a recurring pattern and a booking for each free occurrence.

        Occurrences that conflict or were excluded are skipped. Nothing is
        written when no occurrence can be booked.
        """
        first = TimeWindow.from_strings(rule.start_date, start_time, end_time)
        validate_booking_times(first.start, first.end)

        room = self.room_service.get_bookable_room(room_id, for_update=True)
        instances = self.preview_recurring(
            room.id, rule, start_time, end_time, excluded_dates
        )

        pattern = RecurringPattern.objects.create(
            user_id=user_id,
            room=room,
            frequency=rule.frequency.value,
            interval=rule.interval,
            days_of_week=sorted(rule.days_of_week) if rule.days_of_week else [],
            start_date=rule.start_date,
            end_date=rule.end_date,
            max_occurrences=rule.max_occurrences,
            start_time=first.start.time(),
            end_time=first.end.time(),
        )

        result = RecurringBookingResult(pattern=pattern)

        for instance in instances:
            if instance.excluded or not instance.available:
                result.skipped.append(instance)
                continue

            result.bookings.append(Booking.objects.create(
                room=room,
                user_id=user_id,
                title=title,
                start_time=instance.start,
                end_time=instance.end,
                status=Booking.Status.CONFIRMED,
                recurring_pattern=pattern,
                **kwargs
            ))

        if not result.bookings:
            raise BookingConflictError(
                "No occurrence of the recurring booking is available"
            )

        logger.info(
            f"Created recurring pattern {pattern.id} with "
            f"{len(result.bookings)} booking(s), skipped {len(result.skipped)}"
        )

        return result

    @transaction.atomic
    def cancel_recurring(
        self,
        pattern_id: uuid.UUID,
        scope: str,
        instance_id: uuid.UUID = None,
        reason: str = ""
    ) -> int:
        """Cancel one, the remaining, or all bookings of a recurring series."""
        try:
            scope = CancelScope(scope)
        except ValueError:
            raise BookingValidationError(f"Unknown cancel scope: {scope}", field='scope')

        series = Booking.objects.filter(
            recurring_pattern_id=pattern_id,
            status=Booking.Status.CONFIRMED,
        )

        if scope == CancelScope.ALL:
            return self._cancel_queryset(series, reason)

        if instance_id is None:
            raise BookingValidationError(
                f"instance_id is required for scope '{scope.value}'",
                field='instance_id'
            )

        instance = self.get_booking(instance_id)
        if str(instance.recurring_pattern_id) != str(pattern_id):
            raise BookingValidationError(
                f"Booking {instance_id} is not part of pattern {pattern_id}",
                field='instance_id'
            )

        if scope == CancelScope.SINGLE:
            self.cancel_booking(instance.id, reason)
            return 1

        return self._cancel_queryset(
            series.filter(start_time__gte=instance.start_time), reason
        )

    def _cancel_queryset(self, queryset, reason: str) -> int:
        now = timezone.now()
        count = queryset.update(
            status=Booking.Status.CANCELLED,
            cancelled_at=now,
            cancellation_reason=reason or None,
            updated_at=now,
        )

        logger.info(f"Cancelled {count} recurring booking(s)")
        return count
