# raktsetu/views.py
"""
JSON fallbacks for errors raised outside DRF views
"""
from django.http import JsonResponse

from .exceptions import Internal, NotFound


def not_found(request, exception=None):
    return JsonResponse(
        {'message': 'Resource not found', 'code': NotFound.default_code},
        status=404,
    )


def server_error(request):
    return JsonResponse(
        {'message': Internal.default_detail, 'code': Internal.default_code},
        status=500,
    )
