# shared/common/exceptions.py
"""
Service Exception Base and DRF Exception Handler
"""

import logging
import traceback
from typing import Optional

from rest_framework import status
from rest_framework.views import exception_handler
from rest_framework.response import Response
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from django.conf import settings

logger = logging.getLogger(__name__)

# DRF default_code -> envelope code
DRF_ERROR_CODES = {
    'invalid': 'VALIDATION_ERROR',
    'parse_error': 'VALIDATION_ERROR',
    'not_authenticated': 'UNAUTHORIZED',
    'authentication_failed': 'UNAUTHORIZED',
    'permission_denied': 'FORBIDDEN',
    'not_found': 'NOT_FOUND',
    'method_not_allowed': 'METHOD_NOT_ALLOWED',
}


# =============================================================================
# BASE EXCEPTIONS
# =============================================================================

class ServiceError(Exception):
    """
    Base class for business errors raised by the service layer.

    Subclasses set ``error_code`` and ``status_code``; the exception handler
    turns them into the standard error envelope.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = 'ERROR'
    default_message = 'The request could not be processed.'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# =============================================================================
# EXCEPTION HANDLER
# =============================================================================

def custom_exception_handler(exc, context) -> Optional[Response]:
    """
    Custom exception handler for DRF.
    Provides consistent error response format across all endpoints.
    """

    request = context.get('request')
    request_id = getattr(request, 'request_id', None) if request else None

    if isinstance(exc, ServiceError):
        log_method = logger.error if exc.status_code >= 500 else logger.info
        log_method(
            f"Service error {exc.error_code}: {exc.message}",
            extra={'request_id': request_id, 'error_code': exc.error_code}
        )
        return error_response(exc.error_code, exc.message, exc.status_code, request_id)

    # Call DRF's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        return format_error_response(exc, response, request_id)

    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        response = error_response('VALIDATION_ERROR', 'Validation error', status.HTTP_400_BAD_REQUEST, request_id)
        response.data['error']['details'] = errors
        return response

    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            'request_id': request_id,
            'exception_type': type(exc).__name__,
            'traceback': traceback.format_exc(),
        }
    )

    if settings.DEBUG:
        return error_response('INTERNAL_ERROR', str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, request_id)

    return error_response(
        'INTERNAL_ERROR',
        'An unexpected error occurred. Please try again later.',
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id,
    )


def error_response(code: str, message: str, status_code: int, request_id: str = None) -> Response:
    """Build a response carrying the standard error envelope"""
    return Response(
        {
            'success': False,
            'error': {
                'code': code,
                'message': message,
                'request_id': request_id,
            }
        },
        status=status_code
    )


def format_error_response(exc, response: Response, request_id: str = None) -> Response:
    """Rewrap a DRF-produced response in the standard error envelope"""

    default_code = 'not_found' if isinstance(exc, Http404) else getattr(exc, 'default_code', 'error')
    error_code = DRF_ERROR_CODES.get(default_code, str(default_code).upper())

    error_data = {
        'success': False,
        'error': {
            'code': error_code,
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
            return str(exc.detail.get('detail', 'Validation error'))

    if isinstance(response.data, dict):
        return str(response.data.get('detail', response.data))

    return str(response.data)
