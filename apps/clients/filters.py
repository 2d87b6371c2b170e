# apps/clients/filters.py
from django.db.models import Q
from django_filters import rest_framework as filters

from .models import Client

# Every text column a free-text search looks at
SEARCH_FIELDS = [
    'first_name',
    'last_name',
    'email',
    'phone',
    'address__street_address',
    'address__city',
    'address__state',
    'address__zip',
    'description',
]


def search_q(text, lookup='icontains'):
    """OR of a substring lookup over all SEARCH_FIELDS"""
    query = Q()
    for field_name in SEARCH_FIELDS:
        query |= Q(**{f'{field_name}__{lookup}': text})
    return query


class ClientFilter(filters.FilterSet):
    """
    Free-text filter for the client list.
    A client matches when the text occurs in any searched column; rows
    without an address or description simply don't match on those columns.
    """
    filterText = filters.CharFilter(method='filter_text', strip=False)

    class Meta:
        model = Client
        fields = ['filterText']

    def filter_text(self, queryset, name, value):
        return queryset.filter(search_q(value))
