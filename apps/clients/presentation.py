# apps/clients/presentation.py
"""
Assembles the client list page from its four independently computed parts:
the rows, the page metadata, the filter text and the sort header links.
"""
from dataclasses import dataclass

from apps.core.pagination import PageMeta
from .serializers import AddressSerializer, ClientSerializer, EMPTY_ADDRESS
from .sorting import SortLinks


@dataclass(frozen=True)
class FilterState:
    selected_text: str

    @property
    def applied(self):
        return bool(self.selected_text)


@dataclass(frozen=True)
class ClientIndex:
    clients: list
    page: PageMeta
    filter: FilterState
    sort: SortLinks

    def as_context(self):
        """Template context for clients/index.html"""
        return {
            'clients': self.clients,
            'page': self.page,
            'filter': self.filter,
            'sort': self.sort,
            'filter_applied': self.filter.applied,
        }


def build_index(clients, count, page, page_size, filter_text, sort_order):
    return ClientIndex(
        clients=list(clients),
        page=PageMeta.from_count(count, page, page_size),
        filter=FilterState(filter_text or ''),
        sort=SortLinks.for_state(sort_order),
    )


def project_clients(index):
    """Flat JSON array of the clients on the page"""
    return ClientSerializer(index.clients, many=True).data


def project_client(client):
    return ClientSerializer(client).data


def project_address(address):
    if address is None:
        return dict(EMPTY_ADDRESS)
    return AddressSerializer(address).data


def project_client_address(client):
    """Client id plus its address, as shown by the address page"""
    return {'id': client.id, 'address': project_address(client.address)}


def address_form_values(data):
    """Submitted address (internal keys) back in the shape the form reads"""
    data = data or {}
    return {
        'id': data.get('id'),
        'streetAddress': data.get('street_address'),
        'city': data.get('city'),
        'state': data.get('state'),
        'zip': data.get('zip'),
    }


def client_form_values(data):
    data = data or {}
    return {
        'id': data.get('id'),
        'firstName': data.get('first_name'),
        'lastName': data.get('last_name'),
        'email': data.get('email'),
        'phone': data.get('phone'),
        'description': data.get('description'),
        'address': address_form_values(data.get('address')),
    }
