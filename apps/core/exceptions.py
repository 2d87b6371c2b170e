# apps/core/exceptions.py
import logging

from rest_framework.views import exception_handler
from rest_framework import status

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = 'An unexpected error occurred.'
UNEXPECTED_ERROR_PAGE_MESSAGE = 'An unexpected error occurred. Please try again later.'


def custom_exception_handler(exc, context):
    """Custom exception handler to return all errors in {success, message} format"""
    response = exception_handler(exc, context)

    if response is None:
        # Not an API exception, ExceptionHandlingMiddleware answers it
        return None

    logger.warning(
        "Request rejected with %s: %s", response.status_code, exc,
    )

    if response.status_code == status.HTTP_400_BAD_REQUEST:
        message = "Invalid data"
        if isinstance(response.data, dict) and 'detail' in response.data:
            message = str(response.data['detail'])
    elif response.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not found"
    elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method not allowed"
    elif response.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE:
        message = "Unsupported media type"
    elif response.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        message = UNEXPECTED_ERROR_MESSAGE
    else:
        message = str(getattr(exc, 'detail', exc))

    response.data = {"success": False, "message": message}
    return response
