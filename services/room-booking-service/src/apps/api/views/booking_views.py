# services/room-booking-service/src/apps/api/views/booking_views.py
"""
Booking API Views

Views for booking management.
"""

import logging

from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.models import Booking
from apps.core.services import BookingService, BookingServiceError
from apps.api.serializers import (
    BookingSerializer,
    BookingListSerializer,
    BookingCreateSerializer,
    BookingUpdateSerializer,
    BookingCancelSerializer,
)
from .errors import (
    service_error_response,
    get_request_user_id,
    user_id_required_response,
)
from .filters import BookingFilter
from .pagination import StandardResultsSetPagination

logger = logging.getLogger(__name__)


class BookingViewSet(viewsets.ModelViewSet):
    """
    ViewSet for booking management.

    Provides create, read and partial update plus cancel/complete actions.
    Bookings are never deleted; cancelling keeps them for history.
    """

    queryset = Booking.objects.select_related('room')
    serializer_class = BookingSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_class = BookingFilter
    search_fields = ['title', 'description']
    ordering_fields = ['start_time', 'created_at', 'status']
    ordering = ['start_time']
    http_method_names = ['get', 'post', 'patch', 'head', 'options']

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.booking_service = BookingService()

    def get_queryset(self):
        """Limit to the caller's bookings when X-User-ID is sent."""
        queryset = super().get_queryset()
        user_id = get_request_user_id(self.request)

        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return queryset

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'list':
            return BookingListSerializer
        elif self.action == 'create':
            return BookingCreateSerializer
        elif self.action == 'partial_update':
            return BookingUpdateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):
        """Create a new booking."""
        user_id = get_request_user_id(request)
        if not user_id:
            return user_id_required_response()

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = self.booking_service.create_booking(
                user_id=user_id,
                **serializer.validated_data
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response(
            BookingSerializer(booking).data,
            status=status.HTTP_201_CREATED
        )

    def partial_update(self, request, *args, **kwargs):
        """Update a booking."""
        instance = self.get_object()

        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            booking = self.booking_service.update_booking(
                booking_id=instance.id,
                **serializer.validated_data
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel a booking."""
        instance = self.get_object()

        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            booking = self.booking_service.cancel_booking(
                booking_id=instance.id,
                reason=serializer.validated_data.get('reason', '')
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """Complete a booking."""
        instance = self.get_object()

        try:
            booking = self.booking_service.complete_booking(instance.id)
        except BookingServiceError as e:
            return service_error_response(e)

        return Response(BookingSerializer(booking).data)
