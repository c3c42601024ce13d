"""
Core — Exception Handling

Domain exceptions raised by the service layer and the DRF exception
handler that turns every error into the standard envelope:

    { "success": false, "errors": {...}, "code": "ERROR_CODE" }

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('classifieds')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when a business rule is violated at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class InvalidHierarchyError(BusinessRuleViolation):
    """Raised when a location's parent is not of the enclosing type."""
    default_detail = 'Invalid location hierarchy.'
    default_code = 'INVALID_HIERARCHY'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


class LocationPermissionDenied(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Permission denied.'
    default_code = 'PERMISSION_DENIED'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

def _envelope(errors, code, status_code):
    return Response({'success': False, 'errors': errors, 'code': code}, status=status_code)


def _as_errors(data):
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if key != 'code'}
    if isinstance(data, list):
        return {'detail': data}
    return {'detail': [str(data)]}


def standard_exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER; see the module docstring for the envelope."""
    if isinstance(exc, ValidationError):
        errors = exc.message_dict if hasattr(exc, 'error_dict') else {'detail': exc.messages}
        return _envelope(errors, 'VALIDATION_ERROR', status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, PermissionDenied):
        exc = LocationPermissionDenied()

    response = exception_handler(exc, context)
    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return _envelope({'detail': ['Internal server error.']}, 'INTERNAL_ERROR',
                         status.HTTP_500_INTERNAL_SERVER_ERROR)

    code = getattr(exc, 'default_code', 'ERROR')
    if isinstance(response.data, dict):
        code = response.data.get('code', code)
    response.data = {'success': False, 'errors': _as_errors(response.data), 'code': code}
    return response
