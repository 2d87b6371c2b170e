# apps/core/tests.py
"""
Core app tests - Testing pagination helpers, results, negotiation and error handling
"""
from unittest import mock

from django.test import RequestFactory, SimpleTestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.renderers import JSONRenderer, TemplateHTMLRenderer
from rest_framework.test import APIClient, APITestCase

from apps.core.negotiation import JsonPreferenceNegotiation, wants_json
from apps.core.pagination import PageMeta, page_window, parse_page_number
from apps.core.results import ErrorKind, FieldError, ServiceResult


class PageMetaTests(SimpleTestCase):
    """Test page metadata derived from a row count"""

    def test_total_pages_rounds_up(self):
        page = PageMeta.from_count(21, 1, 10)

        self.assertEqual(page.total_pages, 3)

    def test_middle_page_has_both_neighbours(self):
        page = PageMeta.from_count(21, 2, 10)

        self.assertTrue(page.has_previous)
        self.assertTrue(page.has_next)
        self.assertEqual(page.previous_page_number, 1)
        self.assertEqual(page.next_page_number, 3)

    def test_last_page_has_no_next(self):
        page = PageMeta.from_count(21, 3, 10)

        self.assertTrue(page.has_previous)
        self.assertFalse(page.has_next)

    def test_empty_result(self):
        page = PageMeta.from_count(0, 1, 10)

        self.assertEqual(page.total_pages, 0)
        self.assertFalse(page.has_previous)
        self.assertFalse(page.has_next)


class PageWindowTests(SimpleTestCase):
    """Test slice bounds of a page"""

    def test_first_page(self):
        self.assertEqual(page_window(1, 10), (0, 10))

    def test_later_page(self):
        self.assertEqual(page_window(3, 5), (10, 15))

    def test_page_below_one_has_no_window(self):
        self.assertIsNone(page_window(0, 10))
        self.assertIsNone(page_window(-2, 10))

    def test_page_size_below_one_has_no_window(self):
        self.assertIsNone(page_window(1, 0))

    def test_parse_page_number(self):
        self.assertEqual(parse_page_number('4'), 4)
        self.assertEqual(parse_page_number('abc'), 1)
        self.assertEqual(parse_page_number(None), 1)
        self.assertEqual(parse_page_number('0'), 0)


class ServiceResultTests(SimpleTestCase):
    """Test tagged service outcomes"""

    def test_success(self):
        result = ServiceResult.success(42)

        self.assertTrue(result.ok)
        self.assertEqual(result.value, 42)
        self.assertIsNone(result.error)

    def test_not_found(self):
        result = ServiceResult.not_found("Client not found")

        self.assertFalse(result.ok)
        self.assertTrue(result.is_not_found)
        self.assertEqual(result.error, ErrorKind.NOT_FOUND)
        self.assertEqual(result.message, "Client not found")

    def test_invalid_keeps_field_errors(self):
        errors = [FieldError('zip', 'ZIP must be 6 digits')]
        result = ServiceResult.invalid(errors)

        self.assertTrue(result.is_invalid)
        self.assertEqual(result.message, 'Invalid data')
        self.assertEqual(result.errors[0].as_dict(), {'field': 'zip', 'message': 'ZIP must be 6 digits'})

    def test_storage_fault(self):
        result = ServiceResult.storage_fault("boom")

        self.assertTrue(result.is_storage_fault)
        self.assertFalse(result.is_not_found)


class NegotiationTests(SimpleTestCase):
    """Test the HTML-or-JSON decision"""

    def setUp(self):
        self.factory = RequestFactory()
        self.renderers = [JSONRenderer(), TemplateHTMLRenderer()]

    def test_json_accept_header(self):
        request = self.factory.get('/', HTTP_ACCEPT='application/json, text/plain')

        self.assertTrue(wants_json(request))
        renderer, media_type = JsonPreferenceNegotiation().select_renderer(request, self.renderers)
        self.assertIsInstance(renderer, JSONRenderer)
        self.assertEqual(media_type, 'application/json')

    def test_missing_accept_header_means_html(self):
        request = self.factory.get('/')

        self.assertFalse(wants_json(request))
        renderer, _ = JsonPreferenceNegotiation().select_renderer(request, self.renderers)
        self.assertIsInstance(renderer, TemplateHTMLRenderer)

    def test_browser_accept_header_means_html(self):
        request = self.factory.get('/', HTTP_ACCEPT='text/html,application/xhtml+xml,*/*;q=0.8')

        renderer, _ = JsonPreferenceNegotiation().select_renderer(request, self.renderers)
        self.assertIsInstance(renderer, TemplateHTMLRenderer)


class ErrorHandlingTests(APITestCase):
    """Test API exception reshaping and the unhandled exception middleware"""

    def setUp(self):
        self.client = APIClient()

    def test_malformed_json_body(self):
        response = self.client.post(
            reverse('clients:edit'),
            data='{"id": ',
            content_type='application/json',
            HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.json()['success'])

    def test_method_not_allowed(self):
        response = self.client.get(reverse('clients:delete'), HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(response.json(), {'success': False, 'message': 'Method not allowed'})

    def test_unhandled_exception_as_json(self):
        with mock.patch('apps.clients.views.ClientIndexView.get', side_effect=RuntimeError('secret detail')):
            response = self.client.get(reverse('clients:index'), HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json(), {'success': False, 'message': 'An unexpected error occurred.'})
        self.assertNotIn('secret detail', response.content.decode())

    def test_unhandled_exception_as_html(self):
        with mock.patch('apps.clients.views.ClientIndexView.get', side_effect=RuntimeError('secret detail')):
            response = self.client.get(reverse('clients:index'))

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertIn('Please try again later', response.content.decode())
        self.assertNotIn('secret detail', response.content.decode())
