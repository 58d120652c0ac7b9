# raktsetu/exceptions.py
"""
Error taxonomy and the DRF exception handler that renders every error as
{"message": ..., "code": ...}.
"""
import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ValidationError(exceptions.APIException):
    """Malformed or missing input. `errors` names every offending field."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Validation failed'
    default_code = 'invalid'

    def __init__(self, errors=None, detail=None):
        self.errors = {field: _flatten(messages) for field, messages in (errors or {}).items()}
        if detail is None:
            detail = self.default_detail
            if self.errors:
                detail = f"{detail}: {', '.join(self.errors)}"
        super().__init__(detail=detail)


class AuthenticationError(exceptions.AuthenticationFailed):
    default_detail = 'Invalid credentials'


class AuthorizationError(exceptions.PermissionDenied):
    pass


class NotFound(exceptions.NotFound):
    pass


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict'
    default_code = 'conflict'


class InvalidState(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Operation not allowed in the current state'
    default_code = 'invalid_state'


class Internal(exceptions.APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Internal server error'
    default_code = 'internal_error'


def _flatten(detail):
    if isinstance(detail, list):
        return ' '.join(_flatten(item) for item in detail)
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _flatten(detail['detail'])
        return '; '.join(f"{key}: {_flatten(value)}" for key, value in detail.items())
    return str(detail)


def _codes(detail):
    if isinstance(detail, list):
        return _codes(detail[0]) if detail else 'error'
    if isinstance(detail, dict):
        if 'code' in detail:
            return _codes(detail['code'])
        return _codes(next(iter(detail.values()))) if detail else 'error'
    return getattr(detail, 'code', None) or 'error'


def exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = NotFound(str(exc) or None)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = AuthorizationError(str(exc) or None)

    if isinstance(exc, ValidationError):
        body = {'message': str(exc.detail), 'code': exc.default_code}
        if exc.errors:
            body['errors'] = exc.errors
        return Response(body, status=exc.status_code)

    if isinstance(exc, exceptions.ValidationError):
        # Serializer errors arrive as {field: [messages]}; report all of them at once.
        errors = exc.detail if isinstance(exc.detail, dict) else {'non_field_errors': exc.detail}
        errors = {field: _flatten(messages) for field, messages in errors.items()}
        return exception_handler(ValidationError(errors), context)

    response = drf_exception_handler(exc, context)
    if response is not None:
        detail = getattr(exc, 'detail', response.data)
        response.data = {'message': _flatten(detail), 'code': _codes(detail)}
        return response

    view = context.get('view')
    logger.exception("Unhandled error in %s", view.__class__.__name__ if view else 'view')
    body = {'message': Internal.default_detail, 'code': Internal.default_code}
    if settings.DEBUG:
        body['error'] = repr(exc)
    return Response(body, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
