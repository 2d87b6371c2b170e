# apps/clients/views.py
"""
Client roster pages.

Every view answers in HTML or JSON depending on the Accept header
(see apps.core.negotiation). NotFound becomes a 404, invalid input a
field-level error list, and storage faults a generic 500.
"""
import logging
from collections.abc import Mapping

from django.conf import settings
from django.urls import reverse_lazy
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.renderers import JSONRenderer, TemplateHTMLRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.mixins import RepresentationMixin
from apps.core.pagination import parse_page_number
from .presentation import (
    address_form_values,
    build_index,
    client_form_values,
    project_address,
    project_client,
    project_client_address,
    project_clients,
)
from .serializers import AddressPayloadSerializer, ClientPayloadSerializer, flatten_errors
from .services import ClientService
from .sorting import SortState
from .validators import MAX_ID, validate_address, validate_client

logger = logging.getLogger(__name__)


def _body_value(request, key):
    data = request.data
    if isinstance(data, Mapping):
        return data.get(key)
    return None


def _to_id(value):
    """Integer id from a URL kwarg or form value; None when it isn't one"""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if 1 <= number <= MAX_ID else None


class ClientViewMixin(RepresentationMixin):
    renderer_classes = [JSONRenderer, TemplateHTMLRenderer]
    success_url = reverse_lazy('clients:index')

    def get_service(self):
        """A service bound to the configured database for this request"""
        return ClientService(using=settings.CLIENTS_DATABASE)

    def storage_failure(self, result):
        logger.error("Request %s %s failed: %s", self.request.method, self.request.path, result.message)
        return self.unexpected_error()


class ClientIndexView(ClientViewMixin, APIView):
    """
    List, filter, sort and paginate clients.

    Query params:
        - filterText: substring searched in names, contact details,
          address and description
        - page: 1-based page number
        - sortOrder: one of the SortState names
    """
    template_name = 'clients/index.html'

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('filterText', openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter('page', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter(
                'sortOrder', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                enum=SortState.values,
            ),
        ],
    )
    def get(self, request):
        filter_text = request.query_params.get('filterText', '')
        page = parse_page_number(request.query_params.get('page'))
        sort_order = SortState.parse(request.query_params.get('sortOrder'))
        page_size = settings.CLIENTS_PAGE_SIZE

        service = self.get_service()
        clients = service.get_clients(filter_text, sort_order, page, page_size)
        if not clients.ok:
            return self.storage_failure(clients)
        count = service.get_clients_count(filter_text)
        if not count.ok:
            return self.storage_failure(count)

        index = build_index(clients.value, count.value, page, page_size, filter_text, sort_order)

        if self.wants_json:
            return Response(project_clients(index))
        return self.render_page(self.template_name, index.as_context())


class ClientDeleteView(ClientViewMixin, APIView):
    """Delete a client and its address. The id comes from the URL or the body."""

    def post(self, request, pk=None):
        raw_id = pk if pk is not None else _body_value(request, 'id')
        if raw_id in (None, ''):
            return self.not_found("Client ID is null")

        client_id = _to_id(raw_id)
        if client_id is None:
            return self.not_found("Client not found")

        result = self.get_service().delete_client(client_id)
        if result.is_not_found:
            return self.not_found(result.message)
        if not result.ok:
            return self.storage_failure(result)

        if self.wants_json:
            return self.json_success(message=result.message)
        return self.redirect_success()


class ClientEditView(ClientViewMixin, APIView):
    """
    GET shows a client, POST overwrites its editable fields.

    Request body (form or JSON):
        {
            "id": 1,
            "firstName": "John",
            "lastName": "Doe",
            "email": "john@example.com",
            "phone": "123-456-7890",
            "description": "...",
            "address": {"streetAddress": "...", "city": "...", "state": "...", "zip": "123456"}
        }
    """
    template_name = 'clients/edit_client.html'

    def get(self, request, pk=None):
        if pk is None:
            return self.not_found("ID is null")

        result = self.get_service().get_client(pk)
        if not result.ok:
            return self.storage_failure(result)
        client = result.value
        if client is None:
            return self.not_found("Client not found")

        if self.wants_json:
            return self.json_success(data=project_client(client))
        return self.render_page(self.template_name, {'client': project_client(client), 'errors': []})

    def post(self, request, pk=None):
        if not request.data:
            return self.bad_request("Client data is null")

        payload = ClientPayloadSerializer(data=request.data)
        if not payload.is_valid():
            return self.invalid(flatten_errors(payload.errors), {})

        data = dict(payload.validated_data)
        if not data.get('id') and pk is not None:
            data['id'] = str(pk)

        errors = validate_client(data)
        if errors:
            return self.invalid(errors, data)

        result = self.get_service().update_client(int(data['id']), data)
        if result.is_not_found:
            return self.not_found(result.message)
        if not result.ok:
            return self.storage_failure(result)

        if self.wants_json:
            return self.json_success(data=project_client(result.value))
        return self.redirect_success()

    def invalid(self, errors, data):
        logger.info("Rejected client update: %s", [error.as_dict() for error in errors])
        if self.wants_json:
            return self.json_failure("Invalid data", status.HTTP_400_BAD_REQUEST, errors=errors)
        return self.render_page(self.template_name, {'client': client_form_values(data), 'errors': errors})


class AddressEditView(ClientViewMixin, APIView):
    """
    GET shows the address of the client in the URL; POST overwrites the
    address whose id is in the body.
    """
    template_name = 'clients/edit_address.html'

    def get(self, request, pk=None):
        if pk is None:
            return self.not_found("ID is null")

        result = self.get_service().get_client(pk)
        if not result.ok:
            return self.storage_failure(result)
        client = result.value
        if client is None:
            return self.not_found("Client not found")
        if client.address is None:
            return self.not_found("Address not found")

        if self.wants_json:
            return self.json_success(data=project_client_address(client))
        context = {
            'address': {'id': client.address.id, **project_address(client.address)},
            'client_id': client.id,
            'errors': [],
        }
        return self.render_page(self.template_name, context)

    def post(self, request, pk=None):
        if not request.data:
            return self.bad_request("Address data is null")

        payload = AddressPayloadSerializer(data=request.data)
        if not payload.is_valid():
            return self.invalid(flatten_errors(payload.errors), {})

        data = dict(payload.validated_data)
        errors = validate_address(data)
        if errors:
            return self.invalid(errors, data)

        result = self.get_service().update_address(int(data['id']), data)
        if result.is_not_found:
            return self.not_found(result.message)
        if not result.ok:
            return self.storage_failure(result)

        if self.wants_json:
            return self.json_success(data=project_address(result.value))
        return self.redirect_success()

    def invalid(self, errors, data):
        logger.info("Rejected address update: %s", [error.as_dict() for error in errors])
        if self.wants_json:
            return self.json_failure("Invalid data", status.HTTP_400_BAD_REQUEST, errors=errors)
        context = {'address': address_form_values(data), 'client_id': None, 'errors': errors}
        return self.render_page(self.template_name, context)
