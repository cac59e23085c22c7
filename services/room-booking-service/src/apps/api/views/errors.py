# services/room-booking-service/src/apps/api/views/errors.py
"""
Service error responses.

Maps service exceptions to HTTP responses for the API views.
"""

import logging
import uuid
from typing import Optional

from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.response import Response

from shared.common.validators import validate_uuid
from apps.core.services import (
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
from apps.api.serializers import ConflictSerializer

logger = logging.getLogger(__name__)


ERROR_STATUS_CODES = [
    (InvalidWindowError, status.HTTP_400_BAD_REQUEST),
    (InvalidRecurrenceRuleError, status.HTTP_400_BAD_REQUEST),
    (BookingValidationError, status.HTTP_400_BAD_REQUEST),
    (BookingStateError, status.HTTP_400_BAD_REQUEST),
    (BookingNotFoundError, status.HTTP_404_NOT_FOUND),
    (RoomNotFoundError, status.HTTP_404_NOT_FOUND),
    (BookingConflictError, status.HTTP_409_CONFLICT),
    (RoomUnavailableError, status.HTTP_409_CONFLICT),
    (DataSourceUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def service_error_response(error: BookingServiceError) -> Response:
    """Build the API response for a service exception."""
    status_code = next(
        (code for error_class, code in ERROR_STATUS_CODES if isinstance(error, error_class)),
        status.HTTP_500_INTERNAL_SERVER_ERROR
    )

    body = error.to_dict()

    if isinstance(error, BookingConflictError):
        body['conflicts'] = ConflictSerializer(error.conflicts, many=True).data

    if isinstance(error, DataSourceUnavailableError):
        # Availability is unknown; the client may retry
        body['retryable'] = True
        logger.warning(f"Data source unavailable: {error.message}")

    return Response(body, status=status_code)


def get_request_user_id(request) -> Optional[uuid.UUID]:
    """Caller identity from the X-User-ID header."""
    user_id = request.headers.get('X-User-ID')

    if not user_id:
        return None

    try:
        return validate_uuid(user_id, 'X-User-ID')
    except ValidationError:
        return None


def user_id_required_response() -> Response:
    return Response(
        {'error': 'USER_ID_REQUIRED', 'message': 'A valid X-User-ID header is required'},
        status=status.HTTP_400_BAD_REQUEST
    )
