"""
Error taxonomy and the centralized API error formatter.

Every view lets failures propagate; ``api_exception_handler`` turns them into
``{"success": false, "message": ...}`` with the matching status code.
"""

import logging
from typing import Dict, Any

from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import (
    APIException, AuthenticationFailed, NotAuthenticated, ValidationError,
)
from rest_framework.response import Response

logger = logging.getLogger(__name__)

NOT_AUTHORIZED_MESSAGE = 'Not authorized to access this route'


class BusinessException(APIException):
    """Base exception for business logic errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'BUSINESS_ERROR'

    def __init__(self, message: str, code: str = None, details: Dict[str, Any] = None):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(detail=message, code=self.code)


class ValidationException(BusinessException):
    """Raised when request data or a record fails validation."""

    default_code = 'VALIDATION_ERROR'

    def __init__(self, message: str, field_errors: Dict[str, Any] = None):
        super().__init__(message, details=field_errors)


class InvalidCredentialsException(BusinessException):
    """Raised when a login attempt does not match a user."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = 'INVALID_CREDENTIALS'

    def __init__(self):
        super().__init__('Invalid credentials')


class NotFoundException(BusinessException):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_code = 'NOT_FOUND'


class ShipmentNotFound(NotFoundException):

    def __init__(self, identifier, lookup: str = 'id'):
        super().__init__(
            f"Shipment not found with {lookup} of {identifier}",
            details={'lookup': lookup, 'value': str(identifier)}
        )


class UserNotFound(NotFoundException):

    def __init__(self):
        super().__init__('User not found')


def flatten_errors(detail, prefix: str = '') -> list:
    """Flatten a DRF error detail (dict/list/str) into ``field: message`` strings."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            if field in ('non_field_errors', 'detail'):
                messages.extend(flatten_errors(value, prefix))
            else:
                path = f"{prefix}.{field}" if prefix else str(field)
                messages.extend(flatten_errors(value, path))
        return messages
    if isinstance(detail, list):
        messages = []
        for item in detail:
            messages.extend(flatten_errors(item, prefix))
        return messages
    return [f"{prefix}: {detail}" if prefix else str(detail)]


def api_exception_handler(exc, context):
    """
    Map any exception raised by a view to the API error envelope.

    Credential failures all collapse to one 401 message so callers cannot
    tell an expired token from a forged one.
    """
    # rest_framework.views resolves DEFAULT_AUTHENTICATION_CLASSES on import,
    # and the auth backend imports this module
    from rest_framework.views import exception_handler

    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error: {exc}")
        return Response(
            {'success': False, 'message': 'Duplicate field value entered'},
            status=status.HTTP_400_BAD_REQUEST
        )

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {exc}")
        return Response(
            {'success': False, 'message': 'Server Error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        message = NOT_AUTHORIZED_MESSAGE
    elif isinstance(exc, BusinessException):
        message = exc.message
    elif isinstance(exc, ValidationError):
        message = ', '.join(flatten_errors(exc.detail))
    else:
        message = ', '.join(flatten_errors(response.data))

    response.data = {'success': False, 'message': message}
    return response
