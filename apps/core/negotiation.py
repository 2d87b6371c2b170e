# apps/core/negotiation.py
"""
Content negotiation reduced to a yes/no question: does the caller want JSON?
"""
from rest_framework.negotiation import DefaultContentNegotiation
from rest_framework.renderers import JSONRenderer, TemplateHTMLRenderer

JSON_PREFERENCE = 'application/json'


def wants_json(request):
    """True when the Accept header mentions application/json"""
    meta = getattr(request, 'META', None) or {}
    return JSON_PREFERENCE in meta.get('HTTP_ACCEPT', '')


class JsonPreferenceNegotiation(DefaultContentNegotiation):
    """
    Picks the JSON renderer when the Accept header asks for JSON and the
    HTML template renderer otherwise. Views without either renderer fall
    back to DRF's regular negotiation.
    """

    def select_renderer(self, request, renderers, format_suffix=None):
        wanted = JSONRenderer if wants_json(request) else TemplateHTMLRenderer
        for renderer in renderers:
            if isinstance(renderer, wanted):
                return renderer, renderer.media_type
        return super().select_renderer(request, renderers, format_suffix)
