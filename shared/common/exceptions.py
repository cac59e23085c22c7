# shared/common/exceptions.py
"""
Exception Handler

Formats every error DRF raises into one response shape:
{'success': False, 'error': {'code', 'message', 'request_id', 'details'?}}
"""

import logging
import traceback
from typing import Optional
from rest_framework import status
from rest_framework.views import exception_handler
from rest_framework.response import Response
from django.core.exceptions import ValidationError as DjangoValidationError
from django.conf import settings

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Custom exception handler for DRF.
    Provides consistent error response format across the service.
    """

    # Get the request ID for tracing
    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    # If DRF handled it, format the response
    if response is not None:
        return format_error_response(exc, response, request_id)

    # Handle Django ValidationError
    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'error_dict') else {'detail': exc.messages}
        return Response(
            {
                'success': False,
                'error': {
                    'code': 'VALIDATION_ERROR',
                    'message': 'Validation error',
                    'details': errors,
                    'request_id': request_id,
                }
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    # Log unexpected exceptions
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            'request_id': request_id,
            'exception_type': type(exc).__name__,
        }
    )

    # Return generic error in production, detailed in debug
    if settings.DEBUG:
        return Response(
            {
                'success': False,
                'error': {
                    'code': 'INTERNAL_ERROR',
                    'message': str(exc),
                    'type': type(exc).__name__,
                    'traceback': traceback.format_exc().split('\n'),
                    'request_id': request_id,
                }
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(
        {
            'success': False,
            'error': {
                'code': 'INTERNAL_ERROR',
                'message': 'An unexpected error occurred. Please try again later.',
                'request_id': request_id,
            }
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Format error response in consistent structure"""

    default_code = getattr(exc, 'default_code', 'error')

    error_data = {
        'success': False,
        'error': {
            'code': str(default_code).upper(),
            'message': get_error_message(exc, response),
            'request_id': request_id,
        }
    }

    # Field-level validation errors from DRF
    if isinstance(response.data, dict) and 'detail' not in response.data:
        error_data['error']['details'] = response.data

    response.data = error_data
    return response


def get_error_message(exc, response: Response) -> str:
    """Extract error message from exception or response"""

    if hasattr(exc, 'detail'):
        if isinstance(exc.detail, str):
            return exc.detail
        if isinstance(exc.detail, list) and exc.detail:
            return str(exc.detail[0])
        if isinstance(exc.detail, dict):
            if 'detail' in exc.detail:
                return str(exc.detail['detail'])
            if 'non_field_errors' in exc.detail:
                return str(exc.detail['non_field_errors'][0])
            return 'Invalid input.'

    if isinstance(response.data, dict):
        return response.data.get('detail', str(response.data))

    return str(response.data)
