# apps/core/middleware.py
"""
Last line of defence for exceptions that escape a view.
"""
import logging

from django.http import HttpResponseServerError, JsonResponse

from .exceptions import UNEXPECTED_ERROR_MESSAGE, UNEXPECTED_ERROR_PAGE_MESSAGE
from .negotiation import wants_json

logger = logging.getLogger(__name__)


class ExceptionHandlingMiddleware:
    """
    Logs any uncaught view exception and answers with a generic 500 in
    the representation the caller asked for. Internal details never
    reach the response body.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        logger.exception(
            "Unhandled error while processing %s %s", request.method, request.path,
        )
        if wants_json(request):
            return JsonResponse(
                {"success": False, "message": UNEXPECTED_ERROR_MESSAGE},
                status=500,
            )
        return HttpResponseServerError(UNEXPECTED_ERROR_PAGE_MESSAGE)
