# services/room-booking-service/src/apps/core/services/booking_sources.py
"""
Booking Sources

Read access to a room's bookings for the availability checker. The ORM
source is the production implementation; the in-memory source backs
previews and tests.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from django.db import DatabaseError
from django.db.models import Q

from apps.core.models import Booking
from .exceptions import DataSourceUnavailableError

logger = logging.getLogger(__name__)


class BookingSource(ABC):
    """Source of bookings for a room."""

    @abstractmethod
    def fetch_for_room(self, room_id: uuid.UUID, window=None) -> List[Any]:
        """
        Return the non-cancelled bookings of a room.

        When a window is given the source may narrow the result to bookings
        near it. Raises DataSourceUnavailableError when the read fails.
        """


class DjangoBookingSource(BookingSource):
    """Reads bookings through the Django ORM."""

    def fetch_for_room(self, room_id: uuid.UUID, window=None) -> List[Booking]:
        try:
            queryset = Booking.objects.filter(room_id=room_id).exclude(
                status=Booking.Status.CANCELLED
            )

            if window is not None:
                queryset = queryset.filter(
                    Q(start_time__lt=window.end) & Q(end_time__gt=window.start)
                )

            return list(queryset.order_by('start_time'))
        except DatabaseError as e:
            logger.error(f"Failed to fetch bookings for room {room_id}: {e}")
            raise DataSourceUnavailableError(
                f"Could not read bookings for room {room_id}",
                details={'room_id': str(room_id)}
            ) from e


class InMemoryBookingSource(BookingSource):
    """
    Serves bookings from a list.

    Items need room_id, start_time, end_time and status attributes.
    Bookings come back in insertion order.
    """

    def __init__(self, bookings: Optional[Iterable[Any]] = None):
        self.bookings = list(bookings or [])

    def add(self, booking: Any):
        self.bookings.append(booking)

    def fetch_for_room(self, room_id: uuid.UUID, window=None) -> List[Any]:
        return [
            b for b in self.bookings
            if str(b.room_id) == str(room_id)
            and b.status != Booking.Status.CANCELLED
        ]
