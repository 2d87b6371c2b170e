# apps/core/mixins.py
"""
Reusable mixins for views that answer either an HTML page or JSON.
"""
from django.shortcuts import redirect
from rest_framework import status
from rest_framework.response import Response

from .exceptions import UNEXPECTED_ERROR_MESSAGE, UNEXPECTED_ERROR_PAGE_MESSAGE
from .negotiation import wants_json

ERROR_TEMPLATE = 'core/error.html'


class RepresentationMixin:
    """
    Shared response helpers.
    JSON callers get {success, ...} envelopes, browsers get templates
    or redirects.
    """
    success_url = None

    @property
    def wants_json(self):
        return wants_json(self.request)

    def json_success(self, data=None, message=None, status_code=status.HTTP_200_OK):
        payload = {'success': True}
        if message is not None:
            payload['message'] = message
        if data is not None:
            payload['data'] = data
        return Response(payload, status=status_code)

    def json_failure(self, message, status_code, errors=None):
        payload = {'success': False, 'message': message}
        if errors is not None:
            payload['errors'] = [error.as_dict() for error in errors]
        return Response(payload, status=status_code)

    def render_page(self, template_name, context, status_code=status.HTTP_200_OK):
        return Response(context, template_name=template_name, status=status_code)

    def render_error(self, message, status_code):
        return self.render_page(
            ERROR_TEMPLATE,
            {'message': message, 'status_code': status_code},
            status_code=status_code,
        )

    def redirect_success(self):
        return redirect(self.success_url)

    def not_found(self, message):
        """404 in the requested representation"""
        if self.wants_json:
            return self.json_failure(message, status.HTTP_404_NOT_FOUND)
        return self.render_error(message, status.HTTP_404_NOT_FOUND)

    def bad_request(self, message):
        if self.wants_json:
            return self.json_failure(message, status.HTTP_400_BAD_REQUEST)
        return self.render_error(message, status.HTTP_400_BAD_REQUEST)

    def unexpected_error(self):
        """Generic 500 that hides whatever went wrong underneath"""
        if self.wants_json:
            return self.json_failure(UNEXPECTED_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return self.render_error(UNEXPECTED_ERROR_PAGE_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
