# services/room-booking-service/src/apps/api/views/recurring_views.py
"""
Recurring Pattern API Views

Views for recurrence expansion and recurring booking series.
"""

import logging

from rest_framework import mixins, viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.models import RecurringPattern
from apps.core.services import (
    BookingService,
    BookingServiceError,
    expand_recurrence,
    describe_recurrence,
)
from apps.api.serializers import (
    BookingListSerializer,
    RecurrenceRuleSerializer,
    RecurrenceExpandResultSerializer,
    RecurringPreviewSerializer,
    RecurringBookingCreateSerializer,
    RecurringInstanceSerializer,
    RecurringPatternSerializer,
    RecurringCancelSerializer,
)
from .errors import (
    service_error_response,
    get_request_user_id,
    user_id_required_response,
)
from .pagination import StandardResultsSetPagination

logger = logging.getLogger(__name__)


RULE_FIELDS = [
    'start_date', 'frequency', 'interval', 'days_of_week',
    'end_date', 'max_occurrences',
]


class RecurrenceExpandView(APIView):
    """Expand a recurrence rule into its occurrence dates."""

    def post(self, request):
        serializer = RecurrenceRuleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            rule = serializer.to_rule()
            occurrences = expand_recurrence(rule)
        except BookingServiceError as e:
            return service_error_response(e)

        result = {
            'occurrences': occurrences,
            'count': len(occurrences),
            'description': describe_recurrence(rule),
        }
        return Response(RecurrenceExpandResultSerializer(result).data)


class RecurringPatternViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for recurring booking series.

    Creating a pattern books every free occurrence; conflicting and
    excluded dates are skipped and reported back.
    """

    queryset = RecurringPattern.objects.select_related('room')
    serializer_class = RecurringPatternSerializer
    pagination_class = StandardResultsSetPagination
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['frequency', 'room']
    ordering_fields = ['start_date', 'created_at']
    ordering = ['-start_date']

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.booking_service = BookingService()

    def get_queryset(self):
        """Limit to the caller's patterns when X-User-ID is sent."""
        queryset = super().get_queryset()
        user_id = get_request_user_id(self.request)

        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return queryset

    def get_serializer_class(self):
        """Return appropriate serializer based on action."""
        if self.action == 'create':
            return RecurringBookingCreateSerializer
        elif self.action == 'preview':
            return RecurringPreviewSerializer
        elif self.action == 'cancel':
            return RecurringCancelSerializer
        return RecurringPatternSerializer

    def create(self, request, *args, **kwargs):
        """Create a recurring pattern and its bookings."""
        user_id = get_request_user_id(request)
        if not user_id:
            return user_id_required_response()

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        for field_name in RULE_FIELDS:
            data.pop(field_name, None)

        try:
            result = self.booking_service.create_recurring_booking(
                user_id=user_id,
                rule=serializer.to_rule(),
                **data
            )
        except BookingServiceError as e:
            return service_error_response(e)

        response_data = RecurringPatternSerializer(result.pattern).data
        response_data['bookings'] = BookingListSerializer(result.bookings, many=True).data
        response_data['skipped'] = RecurringInstanceSerializer(result.skipped, many=True).data

        return Response(response_data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'])
    def preview(self, request):
        """Occurrences of a prospective series with their availability."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            rule = serializer.to_rule()
            instances = self.booking_service.preview_recurring(
                room_id=data['room_id'],
                rule=rule,
                start_time=data['start_time'],
                end_time=data['end_time'],
                excluded_dates=data.get('excluded_dates', []),
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response({
            'description': describe_recurrence(rule),
            'total': len(instances),
            'available': sum(1 for i in instances if i.available and not i.excluded),
            'occurrences': RecurringInstanceSerializer(instances, many=True).data,
        })

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel one, the remaining, or all bookings of the series."""
        pattern = self.get_object()

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            cancelled = self.booking_service.cancel_recurring(
                pattern.id,
                scope=data['scope'],
                instance_id=data.get('instance_id'),
                reason=data.get('reason', ''),
            )
        except BookingServiceError as e:
            return service_error_response(e)

        return Response({
            'pattern_id': str(pattern.id),
            'scope': data['scope'],
            'cancelled': cancelled,
        })
