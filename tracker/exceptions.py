import logging

from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

# Headers DRF sets on error responses that clients rely on.
_FORWARDED_HEADERS = ('Allow', 'Retry-After', 'WWW-Authenticate')


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The request conflicts with existing records.'
    default_code = 'conflict'


def _error_code(exc) -> str:
    if isinstance(exc, ValidationError):
        return 'validation_error'
    if isinstance(exc, NotFound):
        return 'not_found'
    if isinstance(exc, Conflict):
        return 'conflict'
    return 'api_error'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        view = context.get('view')
        logger.exception('unhandled error in %s', type(view).__name__ if view else 'unknown view', exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    detail = None
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    return Response(
        {'ok': False, 'error': {'code': _error_code(exc), 'message': detail}},
        status=resp.status_code,
        headers={h: resp[h] for h in _FORWARDED_HEADERS if resp.has_header(h)},
    )
