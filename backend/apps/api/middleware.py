from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer

from apps.api.validation import validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Runs the session gate and request-level checks before a view is entered,
    so unauthenticated cart calls are rejected without touching the store.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, 'view_class', None)
        if not view_class:
            return None
        if not hasattr(request, 'principal'):
            request.principal = None
        view_name = getattr(view_class, '__name__', str(view_class))
        logger.debug('Validating request context', view=view_name, method=request.method)
        response = validate_request_context(request, view_class, view_kwargs)
        if response is not None:
            logger.bind_request(request).info(
                'Request rejected before view dispatch',
                view=view_name,
                status=response.status_code,
            )
            # Returned outside DRF's finalize step; render explicitly.
            _prepare(response, request)
        return response


def _prepare(response, request):
    if getattr(response, 'accepted_renderer', None) is None:
        response.accepted_renderer = JSONRenderer()
        response.accepted_media_type = 'application/json'
        response.renderer_context = {'request': request}
    return response
