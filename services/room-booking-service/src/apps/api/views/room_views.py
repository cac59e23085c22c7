# services/room-booking-service/src/apps/api/views/room_views.py
"""
Room API Views

Room listing, search, availability checks and free slots.
"""

import logging

from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.models import Room
from apps.core.services import (
    AvailabilityService,
    RoomService,
    TimeWindow,
    BookingServiceError,
)
from apps.api.serializers import (
    RoomSerializer,
    RoomSearchSerializer,
    AvailabilityCheckSerializer,
    AvailabilityResultSerializer,
    SlotQuerySerializer,
    TimeSlotSerializer,
)
from .errors import service_error_response
from .filters import RoomFilter
from .pagination import StandardResultsSetPagination

logger = logging.getLogger(__name__)


class RoomViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for rooms.

    Lists bookable rooms and answers availability questions for them.
    """

    serializer_class = RoomSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = RoomFilter
    search_fields = ['name', 'location', 'room_number', 'description']
    ordering_fields = ['name', 'capacity', 'location']
    ordering = ['name']

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.availability_service = AvailabilityService()
        self.room_service = RoomService(self.availability_service)

    def get_queryset(self):
        return Room.get_listed()

    def list(self, request, *args, **kwargs):
        """List rooms, optionally only those free for a time window."""
        search = RoomSearchSerializer(data=request.query_params)
        search.is_valid(raise_exception=True)
        params = search.validated_data

        if 'date' not in params:
            return super().list(request, *args, **kwargs)

        try:
            rooms = self.room_service.search_rooms(
                target_date=params['date'],
                start_time=params['start_time'],
                end_time=params['end_time'],
                queryset=self.filter_queryset(self.get_queryset()),
            )
        except BookingServiceError as e:
            return service_error_response(e)

        page = self.paginate_queryset(rooms)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(rooms, many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['post'])
    def availability(self, request, pk=None):
        """Check whether the room is free for a window."""
        room = self.get_object()

        serializer = AvailabilityCheckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            window = TimeWindow.from_strings(
                data['date'], data['start_time'], data['end_time']
            )
            result = self.availability_service.check_availability(
                room.id,
                window,
                exclude_booking_id=data.get('exclude_booking_id'),
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response(AvailabilityResultSerializer(result).data)

    @action(detail=True, methods=['get'])
    def slots(self, request, pk=None):
        """Slots of a day with their availability."""
        room = self.get_object()

        serializer = SlotQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            slots = self.availability_service.find_available_slots(
                room.id,
                data['date'],
                slot_minutes=data.get('slot_minutes'),
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response({
            'room_id': str(room.id),
            'date': data['date'].isoformat(),
            'slots': TimeSlotSerializer(slots, many=True).data,
        })
