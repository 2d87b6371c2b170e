# apps/clients/services.py
"""
Service layer for the client roster.
Query pipeline (filter -> sort -> paginate) and the mutation operations,
each bound to the database alias it was constructed with.
"""
import logging

from django.db import DEFAULT_DB_ALIAS, DatabaseError, transaction

from apps.core.pagination import page_window
from apps.core.results import ServiceResult
from .filters import ClientFilter
from .models import Address, Client
from .sorting import SortState, ordering_for

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ('first_name', 'last_name', 'email', 'phone', 'description')
ADDRESS_FIELDS = ('street_address', 'city', 'state', 'zip')


class ClientQueryService:
    """
    Builds and runs the client list query.

    The apply_* steps only compose a queryset; nothing touches the
    database until get_clients / get_clients_count evaluate it.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    def base_queryset(self):
        return Client.objects.using(self.using).select_related('address')

    def apply_filter(self, queryset, filter_text):
        if not filter_text:
            return queryset
        return ClientFilter({'filterText': filter_text}, queryset=queryset).qs

    def apply_sorting(self, queryset, sort_order):
        return queryset.order_by(*ordering_for(SortState.parse(sort_order)))

    def apply_pagination(self, queryset, page, page_size):
        window = page_window(page, page_size)
        if window is None:
            return queryset.none()
        start, stop = window
        return queryset[start:stop]

    def get_clients(self, filter_text, sort_order, page, page_size):
        """
        One page of clients with their addresses attached.

        Returns:
            ServiceResult holding a list of Client instances, or a storage
            fault when the database refuses the query.
        """
        try:
            queryset = self.base_queryset()
            queryset = self.apply_filter(queryset, filter_text)
            queryset = self.apply_sorting(queryset, sort_order)
            queryset = self.apply_pagination(queryset, page, page_size)
            return ServiceResult.success(list(queryset))
        except DatabaseError:
            logger.exception("An error occurred while retrieving clients.")
            return ServiceResult.storage_fault("An error occurred while retrieving clients.")

    def get_clients_count(self, filter_text):
        try:
            queryset = self.apply_filter(self.base_queryset(), filter_text)
            return ServiceResult.success(queryset.count())
        except DatabaseError:
            logger.exception("An error occurred while counting clients.")
            return ServiceResult.storage_fault("An error occurred while counting clients.")


class ClientService:
    """
    Point lookups and mutations for clients and addresses.

    Every method returns a ServiceResult: NOT_FOUND when the id does not
    exist, STORAGE for any database error, success otherwise. Each write
    runs in a single transaction on self.using.
    """

    def __init__(self, using=DEFAULT_DB_ALIAS, query_service=None):
        self.using = using
        self.query_service = query_service or ClientQueryService(using=using)

    def get_clients(self, filter_text, sort_order, page, page_size):
        return self.query_service.get_clients(filter_text, sort_order, page, page_size)

    def get_clients_count(self, filter_text):
        return self.query_service.get_clients_count(filter_text)

    def _find_client(self, client_id):
        return (
            Client.objects.using(self.using)
            .select_related('address')
            .filter(pk=client_id)
            .first()
        )

    def get_client(self, client_id):
        """Client with its address, or a successful result holding None"""
        try:
            return ServiceResult.success(self._find_client(client_id))
        except DatabaseError:
            logger.exception("An error occurred while retrieving client %s.", client_id)
            return ServiceResult.storage_fault("An error occurred while retrieving a client by ID.")

    def delete_client(self, client_id):
        try:
            with transaction.atomic(using=self.using):
                client = self._find_client(client_id)
                if client is None:
                    logger.warning("Client %s not found for deletion.", client_id)
                    return ServiceResult.not_found("Client not found")

                address = client.address
                client.delete(using=self.using)
                if address is not None:
                    address.delete(using=self.using)
        except DatabaseError:
            logger.exception("An error occurred while deleting client %s.", client_id)
            return ServiceResult.storage_fault("An error occurred while deleting a client.")

        logger.info("Deleted client %s.", client_id)
        return ServiceResult.success(message="Client deleted successfully")

    def update_client(self, client_id, data):
        """
        Overwrite the editable fields of a client.

        Args:
            client_id: primary key of the stored client
            data: dict with first_name, last_name, email, phone,
                description and optionally an 'address' dict of
                street_address, city, state, zip

        The stored client id and address id never change. A client
        without an address gets a new one when data carries an address.
        """
        try:
            with transaction.atomic(using=self.using):
                client = self._find_client(client_id)
                if client is None:
                    logger.warning("Client %s not found for update.", client_id)
                    return ServiceResult.not_found("Client not found")

                for field_name in CLIENT_FIELDS:
                    setattr(client, field_name, data.get(field_name))

                address_data = data.get('address')
                if address_data is not None:
                    address = client.address or Address()
                    for field_name in ADDRESS_FIELDS:
                        setattr(address, field_name, address_data.get(field_name))
                    address.save(using=self.using)
                    client.address = address

                client.save(using=self.using)
        except DatabaseError:
            logger.exception("An error occurred while updating client %s.", client_id)
            return ServiceResult.storage_fault("An error occurred while updating the client in the database.")

        logger.info("Updated client %s.", client_id)
        return ServiceResult.success(client)

    def update_address(self, address_id, data):
        try:
            with transaction.atomic(using=self.using):
                address = Address.objects.using(self.using).filter(pk=address_id).first()
                if address is None:
                    logger.warning("Address %s not found for update.", address_id)
                    return ServiceResult.not_found("Address not found")

                for field_name in ADDRESS_FIELDS:
                    setattr(address, field_name, data.get(field_name))
                address.save(using=self.using)
        except DatabaseError:
            logger.exception("An error occurred while updating address %s.", address_id)
            return ServiceResult.storage_fault("An error occurred while updating the address in the database.")

        logger.info("Updated address %s.", address_id)
        return ServiceResult.success(address)
