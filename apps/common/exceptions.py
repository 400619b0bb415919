"""
Exception types raised by services and the handler that renders them.

Every error leaving the API has the shape ``{"error": <message>}`` with an
optional ``"details"`` key carrying field errors or extra context.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(APIException):
    """Base class for business rule failures raised from service code"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed'
    default_code = 'service_error'

    def __init__(self, message=None, details=None):
        super().__init__(detail=message or self.default_detail)
        self.message = str(self.detail)
        self.details = details


class ValidationFailed(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation error'
    default_code = 'validation_failed'


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found'
    default_code = 'not_found'


class PermissionDenied(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Permission denied'
    default_code = 'permission_denied'


class InvalidTransition(ServiceError):
    """Raised when a status change is not allowed from the current state"""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Invalid status transition'
    default_code = 'invalid_transition'

    def __init__(self, current, requested, message=None):
        message = message or f"Cannot change status from '{current}' to '{requested}'"
        super().__init__(message, details={'current': current, 'requested': requested})


class PaymentVerificationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Payment verification failed'
    default_code = 'payment_verification_failed'


class PaymentGatewayError(ServiceError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Payment gateway error'
    default_code = 'payment_gateway_error'


def _flatten_message(data):
    """Pick a human readable message out of DRF's error payload"""
    if isinstance(data, dict):
        if 'detail' in data:
            return str(data['detail'])
        for key, value in data.items():
            inner = _flatten_message(value)
            if key == 'non_field_errors':
                return inner
            return f"{key}: {inner}"
    if isinstance(data, list) and data:
        return _flatten_message(data[0])
    return str(data)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns ``{"error", "details"}`` bodies
    """
    if isinstance(exc, DjangoValidationError):
        exc = ValidationFailed('Validation error', details=exc.message_dict if hasattr(exc, 'error_dict') else exc.messages)

    response = exception_handler(exc, context)

    if response is None:
        return None

    if isinstance(exc, ServiceError):
        body = {'error': exc.message}
        if exc.details is not None:
            body['details'] = exc.details
    elif isinstance(exc, Http404):
        body = {'error': 'Resource not found'}
    elif response.status_code == status.HTTP_400_BAD_REQUEST:
        body = {'error': _flatten_message(response.data), 'details': response.data}
    else:
        body = {'error': _flatten_message(response.data)}

    if response.status_code >= 500:
        logger.error(f"API Exception: {exc}", exc_info=True)
    else:
        logger.info(f"API error {response.status_code}: {body['error']}")

    response.data = body
    return response
