# services/room-booking-service/src/apps/core/services/room_service.py
"""
Room Service

Room lookup and search, optionally filtered by availability.
"""

import uuid
import logging
from datetime import date
from typing import List

from django.core.exceptions import ValidationError as DjangoValidationError

from apps.core.models import Room
from .availability_service import AvailabilityService, TimeWindow
from .exceptions import RoomNotFoundError, RoomUnavailableError

logger = logging.getLogger(__name__)


class RoomService:
    """
    Service for rooms.

    Handles:
    - Room lookup
    - Search by capacity, location and free time window
    """

    def __init__(self, availability_service: AvailabilityService = None):
        self.availability_service = availability_service or AvailabilityService()

    def get_room(self, room_id: uuid.UUID) -> Room:
        """Get a room by ID."""
        try:
            return Room.objects.get(id=room_id)
        except (Room.DoesNotExist, DjangoValidationError):
            raise RoomNotFoundError(room_id)

    def get_bookable_room(self, room_id: uuid.UUID, for_update: bool = False) -> Room:
        """Get a room that accepts bookings."""
        queryset = Room.objects.select_for_update() if for_update else Room.objects

        try:
            room = queryset.get(id=room_id)
        except (Room.DoesNotExist, DjangoValidationError):
            raise RoomNotFoundError(room_id)

        if not room.is_bookable:
            raise RoomUnavailableError(room.id, room.status)

        return room

    def search_rooms(
        self,
        capacity: int = None,
        location: str = None,
        target_date: date = None,
        start_time: str = None,
        end_time: str = None,
        queryset=None
    ) -> List[Room]:
        """
        Search listed rooms.

        When a date and both times are given, only rooms that are free for
        that window are returned. A queryset narrows and orders the
        candidates; it defaults to listed rooms by name. Data source
        failures propagate.
        """
        if queryset is None:
            queryset = Room.get_listed().order_by('name')

        if capacity:
            queryset = queryset.filter(capacity__gte=capacity)

        if location:
            queryset = queryset.filter(location__icontains=location)

        rooms = list(queryset)

        if not (target_date and start_time and end_time):
            return rooms

        window = TimeWindow.from_strings(target_date, start_time, end_time)

        available = [
            room for room in rooms
            if room.is_bookable
            and self.availability_service.is_room_available(room.id, window)
        ]

        logger.info(
            f"Room search for {target_date} {start_time}-{end_time}: "
            f"{len(available)} of {len(rooms)} rooms free"
        )

        return available
