# apps/clients/tests.py
"""
Clients app tests - Testing models, the query pipeline, mutations, validation and pages
"""
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.db import DatabaseError, IntegrityError
from django.http import QueryDict
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from apps.clients.models import Address, Client
from apps.clients.presentation import build_index, project_clients
from apps.clients.serializers import ClientPayloadSerializer, ClientSerializer, flatten_errors
from apps.clients.services import ClientQueryService, ClientService
from apps.clients.sorting import SortLinks, SortState
from apps.clients.templatetags.client_tags import field_errors, page_links
from apps.clients.validators import validate_address, validate_client
from apps.core.pagination import PageMeta
from apps.core.results import FieldError, ServiceResult


def create_client(first_name='John', last_name='Doe', email=None, phone='123-456-7890',
                  description='Sample client', street='123 Main St', city='Anytown',
                  state='CA', zip_code='123450', with_address=True):
    address = None
    if with_address:
        address = Address.objects.create(street_address=street, city=city, state=state, zip=zip_code)
    return Client.objects.create(
        first_name=first_name,
        last_name=last_name,
        email=email or f'{first_name.lower()}@example.com',
        phone=phone,
        description=description,
        address=address,
    )


def client_data(**overrides):
    """Internal (snake_case) update payload"""
    data = {
        'first_name': 'Johnny',
        'last_name': 'Walker',
        'email': 'johnny@example.com',
        'phone': '555-000-1111',
        'description': 'Updated',
        'address': {
            'street_address': '456 Elm St',
            'city': 'Othertown',
            'state': 'NY',
            'zip': '678900',
        },
    }
    data.update(overrides)
    return data


class ClientModelTests(TestCase):
    """Test Client and Address models"""

    def test_create_client_with_address(self):
        client = create_client()

        self.assertEqual(client.address.city, 'Anytown')
        self.assertEqual(client.address.client, client)
        self.assertEqual(str(client), 'John Doe')

    def test_create_client_without_address(self):
        client = create_client(with_address=False)

        self.assertIsNone(client.address)

    def test_address_string_representation(self):
        client = create_client()

        self.assertEqual(str(client.address), '123 Main St, Anytown, CA 123450')


class SortStateTests(SimpleTestCase):
    """Test sort state parsing and header links"""

    def test_parse_by_name(self):
        self.assertEqual(SortState.parse('LastNameDesc'), SortState.LAST_NAME_DESC)
        self.assertEqual(SortState.parse('emailasc'), SortState.EMAIL_ASC)

    def test_parse_by_ordinal(self):
        self.assertEqual(SortState.parse('3'), SortState.LAST_NAME_DESC)
        self.assertEqual(SortState.parse('11'), SortState.DESCRIPTION_DESC)

    def test_unknown_state_falls_back_to_first_name(self):
        self.assertEqual(SortState.parse(None), SortState.FIRST_NAME_ASC)
        self.assertEqual(SortState.parse('Shoe size'), SortState.FIRST_NAME_ASC)
        self.assertEqual(SortState.parse('99'), SortState.FIRST_NAME_ASC)

    def test_there_are_twelve_states(self):
        self.assertEqual(len(SortState), 12)

    def test_ascending_column_flips_to_descending(self):
        links = SortLinks.for_state(SortState.FIRST_NAME_ASC)

        self.assertEqual(links.first_name, SortState.FIRST_NAME_DESC)
        self.assertEqual(links.last_name, SortState.LAST_NAME_ASC)
        self.assertEqual(links.email, SortState.EMAIL_ASC)
        self.assertEqual(links.phone, SortState.PHONE_ASC)
        self.assertEqual(links.address, SortState.ADDRESS_ASC)
        self.assertEqual(links.description, SortState.DESCRIPTION_ASC)
        self.assertEqual(links.current, SortState.FIRST_NAME_ASC)

    def test_descending_column_flips_back_to_ascending(self):
        links = SortLinks.for_state(SortState.ADDRESS_DESC)

        self.assertEqual(links.address, SortState.ADDRESS_ASC)
        self.assertEqual(links.first_name, SortState.FIRST_NAME_ASC)


class ClientFilterTests(TestCase):
    """Test the free-text filter stage and counting"""

    def setUp(self):
        self.service = ClientQueryService()
        self.john = create_client('John', 'Doe', street='123 Main St', city='Anytown', zip_code='123450')
        self.jane = create_client('Jane', 'Doe', street='456 Elm St', city='Othertown', zip_code='678900',
                                  description=None)
        self.alice = create_client('Alice', 'Smith', description='Prefers email', with_address=False)

    def filtered(self, text):
        return list(self.service.apply_filter(self.service.base_queryset(), text))

    def test_filter_by_last_name(self):
        result = self.service.get_clients('Doe', SortState.FIRST_NAME_ASC, 1, 10)
        count = self.service.get_clients_count('Doe')

        self.assertTrue(result.ok)
        self.assertEqual({c.pk for c in result.value}, {self.john.pk, self.jane.pk})
        self.assertEqual(count.value, 2)

    def test_filter_without_matches(self):
        result = self.service.get_clients('Zzz', SortState.FIRST_NAME_ASC, 1, 10)
        count = self.service.get_clients_count('Zzz')

        self.assertEqual(result.value, [])
        self.assertEqual(count.value, 0)

    def test_empty_filter_matches_everyone(self):
        self.assertEqual(len(self.filtered('')), 3)
        self.assertEqual(len(self.filtered(None)), 3)
        self.assertEqual(self.service.get_clients_count('').value, 3)

    def test_filter_is_case_insensitive(self):
        self.assertEqual(len(self.filtered('doe')), 2)

    def test_filter_searches_address_columns(self):
        self.assertEqual(self.filtered('Othertown'), [self.jane])
        self.assertEqual(self.filtered('678900'), [self.jane])
        self.assertEqual(self.filtered('Main'), [self.john])

    def test_filter_searches_contact_and_description(self):
        self.assertEqual(self.filtered('alice@'), [self.alice])
        self.assertEqual(self.filtered('Prefers'), [self.alice])

    def test_missing_address_does_not_break_the_filter(self):
        self.assertEqual(self.filtered('Smith'), [self.alice])

    def test_filter_is_idempotent(self):
        once = self.service.apply_filter(self.service.base_queryset(), 'Doe')
        twice = self.service.apply_filter(once, 'Doe')

        self.assertEqual(list(once.order_by('pk')), list(twice.order_by('pk')))

    def test_filter_keeps_surrounding_whitespace(self):
        mary = create_client('Mary', 'Doe', description='has Doe inside', with_address=False)

        result = self.service.get_clients(' Doe', SortState.FIRST_NAME_ASC, 1, 10)

        self.assertEqual(result.value, [mary])
        self.assertEqual(self.service.get_clients_count(' Doe').value, 1)

    def test_whitespace_only_filter_matches_only_text_with_that_whitespace(self):
        result = self.service.get_clients('   ', SortState.FIRST_NAME_ASC, 1, 10)

        self.assertEqual(result.value, [])
        self.assertEqual(self.service.get_clients_count('   ').value, 0)

    def test_filter_does_not_touch_stored_rows(self):
        self.service.get_clients('Doe', SortState.LAST_NAME_DESC, 1, 10)

        self.assertEqual(Client.objects.count(), 3)
        self.assertEqual(Address.objects.count(), 2)


class ClientSortingTests(TestCase):
    """Test the sort stage"""

    def setUp(self):
        self.service = ClientQueryService()
        self.john = create_client('John', 'Zeta', email='john@example.com', street='300 Oak St')
        self.alice = create_client('Alice', 'Young', email='alice@example.com', street='100 Oak St')
        self.bob = create_client('Bob', 'Xavier', email='bob@example.com', street='200 Oak St')

    def names(self, sort_order):
        result = self.service.get_clients('', sort_order, 1, 10)
        return [c.first_name for c in result.value]

    def test_first_name_ascending(self):
        self.assertEqual(self.names(SortState.FIRST_NAME_ASC), ['Alice', 'Bob', 'John'])

    def test_first_name_descending(self):
        self.assertEqual(self.names(SortState.FIRST_NAME_DESC), ['John', 'Bob', 'Alice'])

    def test_last_name_ascending(self):
        self.assertEqual(self.names(SortState.LAST_NAME_ASC), ['Bob', 'Alice', 'John'])

    def test_address_sorts_by_street(self):
        self.assertEqual(self.names(SortState.ADDRESS_ASC), ['Alice', 'Bob', 'John'])
        self.assertEqual(self.names(SortState.ADDRESS_DESC), ['John', 'Bob', 'Alice'])

    def test_unrecognised_state_sorts_by_first_name(self):
        self.assertEqual(self.names('NotAState'), ['Alice', 'Bob', 'John'])

    def test_sorting_is_idempotent(self):
        queryset = self.service.base_queryset()
        once = self.service.apply_sorting(queryset, SortState.EMAIL_DESC)
        twice = self.service.apply_sorting(once, SortState.EMAIL_DESC)

        self.assertEqual(list(once), list(twice))
        emails = [c.email for c in twice]
        self.assertEqual(emails, sorted(emails, reverse=True))


class ClientPaginationTests(TestCase):
    """Test the paginate stage"""

    def setUp(self):
        self.service = ClientQueryService()
        self.clients = [
            create_client('John'),
            create_client('Jane'),
            create_client('Alice'),
        ]

    def test_second_page_of_one(self):
        queryset = self.service.base_queryset().order_by('pk')

        page = list(self.service.apply_pagination(queryset, 2, 1))

        self.assertEqual(page, [self.clients[1]])

    def test_pages_reassemble_the_full_sequence(self):
        full = self.service.get_clients('', SortState.FIRST_NAME_ASC, 1, 100).value
        pages = [
            self.service.get_clients('', SortState.FIRST_NAME_ASC, number, 2).value
            for number in (1, 2, 3)
        ]

        self.assertTrue(all(len(page) <= 2 for page in pages))
        self.assertEqual(pages[0] + pages[1] + pages[2], full)
        self.assertEqual(pages[2], [])

    def test_page_below_one_is_empty(self):
        self.assertEqual(self.service.get_clients('', SortState.FIRST_NAME_ASC, 0, 10).value, [])
        self.assertEqual(self.service.get_clients('', SortState.FIRST_NAME_ASC, -1, 10).value, [])

    def test_page_size_below_one_is_empty(self):
        self.assertEqual(self.service.get_clients('', SortState.FIRST_NAME_ASC, 1, 0).value, [])


class ClientQueryFailureTests(TestCase):
    """Test that database errors become a storage fault"""

    def setUp(self):
        self.service = ClientQueryService()
        create_client()

    def test_failure_while_sorting(self):
        with mock.patch.object(ClientQueryService, 'apply_sorting', side_effect=DatabaseError('disk I/O error')):
            result = self.service.get_clients('', SortState.FIRST_NAME_ASC, 1, 10)

        self.assertTrue(result.is_storage_fault)
        self.assertEqual(result.message, "An error occurred while retrieving clients.")

    def test_failure_while_counting(self):
        with mock.patch.object(ClientQueryService, 'apply_filter', side_effect=DatabaseError('disk I/O error')):
            result = self.service.get_clients_count('Doe')

        self.assertTrue(result.is_storage_fault)


class ClientServiceTests(TestCase):
    """Test lookups and mutations"""

    def setUp(self):
        self.service = ClientService()
        self.test_client = create_client()

    def test_service_is_bound_to_its_database(self):
        service = ClientService(using='default')

        self.assertEqual(service.using, 'default')
        self.assertEqual(service.query_service.using, 'default')

    def test_get_client(self):
        result = self.service.get_client(self.test_client.pk)

        self.assertTrue(result.ok)
        self.assertEqual(result.value.pk, self.test_client.pk)
        self.assertEqual(result.value.address.street_address, '123 Main St')

    def test_get_missing_client_is_absence_not_error(self):
        result = self.service.get_client(9999)

        self.assertTrue(result.ok)
        self.assertIsNone(result.value)

    def test_delete_client_removes_address(self):
        address_id = self.test_client.address_id

        result = self.service.delete_client(self.test_client.pk)

        self.assertTrue(result.ok)
        self.assertEqual(result.message, "Client deleted successfully")
        self.assertFalse(Client.objects.filter(pk=self.test_client.pk).exists())
        self.assertFalse(Address.objects.filter(pk=address_id).exists())
        self.assertIsNone(self.service.get_client(self.test_client.pk).value)

    def test_delete_client_without_address(self):
        other = create_client('Alice', with_address=False)

        result = self.service.delete_client(other.pk)

        self.assertTrue(result.ok)
        self.assertFalse(Client.objects.filter(pk=other.pk).exists())
        self.assertEqual(Address.objects.count(), 1)

    def test_delete_missing_client(self):
        result = self.service.delete_client(9999)

        self.assertTrue(result.is_not_found)
        self.assertEqual(result.message, "Client not found")
        self.assertEqual(Client.objects.count(), 1)

    def test_delete_database_error(self):
        with mock.patch.object(Client, 'delete', side_effect=IntegrityError('constraint failed')):
            result = self.service.delete_client(self.test_client.pk)

        self.assertTrue(result.is_storage_fault)
        self.assertTrue(Client.objects.filter(pk=self.test_client.pk).exists())
        self.assertEqual(Address.objects.count(), 1)

    def test_update_client_overwrites_all_fields(self):
        address_id = self.test_client.address_id
        data = client_data()

        result = self.service.update_client(self.test_client.pk, data)

        self.assertTrue(result.ok)
        stored = Client.objects.select_related('address').get(pk=self.test_client.pk)
        self.assertEqual(stored.first_name, 'Johnny')
        self.assertEqual(stored.last_name, 'Walker')
        self.assertEqual(stored.email, 'johnny@example.com')
        self.assertEqual(stored.phone, '555-000-1111')
        self.assertEqual(stored.description, 'Updated')
        self.assertEqual(stored.address_id, address_id)
        self.assertEqual(stored.address.street_address, '456 Elm St')
        self.assertEqual(stored.address.city, 'Othertown')
        self.assertEqual(stored.address.state, 'NY')
        self.assertEqual(stored.address.zip, '678900')
        self.assertEqual(Address.objects.count(), 1)

    def test_update_client_clears_description(self):
        self.service.update_client(self.test_client.pk, client_data(description=None))

        self.test_client.refresh_from_db()
        self.assertIsNone(self.test_client.description)

    def test_update_client_creates_missing_address(self):
        other = create_client('Alice', with_address=False)

        result = self.service.update_client(other.pk, client_data(first_name='Alice'))

        self.assertTrue(result.ok)
        other.refresh_from_db()
        self.assertIsNotNone(other.address)
        self.assertEqual(other.address.zip, '678900')
        self.assertEqual(Address.objects.count(), 2)

    def test_update_without_address_keeps_stored_address(self):
        data = client_data()
        del data['address']

        self.service.update_client(self.test_client.pk, data)

        self.test_client.refresh_from_db()
        self.assertEqual(self.test_client.address.street_address, '123 Main St')

    def test_update_missing_client(self):
        result = self.service.update_client(9999, client_data())

        self.assertTrue(result.is_not_found)
        self.test_client.refresh_from_db()
        self.assertEqual(self.test_client.first_name, 'John')
        self.assertEqual(Address.objects.get().street_address, '123 Main St')

    def test_update_database_error_rolls_back(self):
        with mock.patch.object(Client, 'save', side_effect=DatabaseError('database is locked')):
            result = self.service.update_client(self.test_client.pk, client_data())

        self.assertTrue(result.is_storage_fault)
        self.assertEqual(result.message, "An error occurred while updating the client in the database.")
        self.assertEqual(Address.objects.get().street_address, '123 Main St')

    def test_update_address(self):
        address_id = self.test_client.address_id
        data = {'street_address': '9 Elm St', 'city': 'Springfield', 'state': 'IL', 'zip': '627010'}

        result = self.service.update_address(address_id, data)

        self.assertTrue(result.ok)
        address = Address.objects.get(pk=address_id)
        self.assertEqual(address.street_address, '9 Elm St')
        self.assertEqual(address.city, 'Springfield')
        self.assertEqual(address.state, 'IL')
        self.assertEqual(address.zip, '627010')

    def test_update_missing_address(self):
        result = self.service.update_address(9999, {'street_address': 'x', 'city': 'y', 'state': 'z', 'zip': '123456'})

        self.assertTrue(result.is_not_found)
        self.assertEqual(result.message, "Address not found")
        self.assertEqual(Address.objects.get().street_address, '123 Main St')


class ValidationTests(SimpleTestCase):
    """Test the field validation functions"""

    def valid_client(self, **overrides):
        data = client_data(id='1')
        data.update(overrides)
        return data

    def test_valid_client(self):
        self.assertEqual(validate_client(self.valid_client()), [])

    def test_required_fields(self):
        errors = validate_client({})

        self.assertIn(FieldError('id', 'Client ID is required'), errors)
        self.assertIn(FieldError('firstName', 'First Name is required'), errors)
        self.assertIn(FieldError('lastName', 'Last Name is required'), errors)
        self.assertIn(FieldError('email', 'Email is required'), errors)
        self.assertIn(FieldError('phone', 'Phone is required'), errors)

    def test_id_must_be_positive(self):
        errors = validate_client(self.valid_client(id='0'))

        self.assertEqual(errors, [FieldError('id', 'Client ID must be a positive number.')])

    def test_id_must_fit_a_primary_key(self):
        errors = validate_client(self.valid_client(id='99999999999999999999999'))

        self.assertEqual(errors, [FieldError('id', 'Client ID must be a positive number.')])
        self.assertEqual(validate_client(self.valid_client(id=str(2 ** 63 - 1))), [])

    def test_names_are_letters_only(self):
        errors = validate_client(self.valid_client(first_name='J0hn', last_name='Doe-Smith'))

        self.assertEqual(errors, [
            FieldError('firstName', 'First Name should contain only letters'),
            FieldError('lastName', 'Last Name should contain only letters'),
        ])

    def test_email_format(self):
        errors = validate_client(self.valid_client(email='not-an-email'))

        self.assertEqual(errors, [FieldError('email', 'Invalid Email Address')])

    def test_phone_format(self):
        self.assertEqual(validate_client(self.valid_client(phone='+1 (555) 123-4567')), [])
        errors = validate_client(self.valid_client(phone='call me'))

        self.assertEqual(errors, [FieldError('phone', 'Invalid Phone Number')])

    def test_nested_address_is_checked(self):
        data = self.valid_client()
        data['address'] = {'street_address': '', 'city': 'X', 'state': 'Y', 'zip': '12345'}

        errors = validate_client(data)

        self.assertEqual(errors, [
            FieldError('address.streetAddress', 'Street Address is required'),
            FieldError('address.zip', 'ZIP must be 6 digits'),
        ])

    def test_client_without_address(self):
        self.assertEqual(validate_client(self.valid_client(address=None)), [])

    def test_validate_address(self):
        errors = validate_address({'zip': 'abcdef'})

        self.assertEqual(errors, [
            FieldError('id', 'Address ID is required'),
            FieldError('streetAddress', 'Street Address is required'),
            FieldError('city', 'City is required'),
            FieldError('state', 'State is required'),
            FieldError('zip', 'ZIP must be 6 digits'),
        ])


class SerializerTests(TestCase):
    """Test the JSON projection and payload parsing"""

    def test_client_projection(self):
        client = create_client()

        data = ClientSerializer(client).data

        self.assertEqual(data, {
            'id': client.pk,
            'firstName': 'John',
            'lastName': 'Doe',
            'email': 'john@example.com',
            'phone': '123-456-7890',
            'address': {'streetAddress': '123 Main St', 'city': 'Anytown', 'state': 'CA', 'zip': '123450'},
            'description': 'Sample client',
        })

    def test_projection_without_address(self):
        client = create_client(with_address=False, description=None)

        data = ClientSerializer(client).data

        self.assertEqual(data['address'], {'streetAddress': None, 'city': None, 'state': None, 'zip': None})
        self.assertIsNone(data['description'])

    def test_payload_from_form_fields(self):
        form = QueryDict(mutable=True)
        form.update({
            'id': '3',
            'firstName': 'Jane',
            'lastName': 'Doe',
            'email': 'jane@example.com',
            'phone': '555-123-4567',
            'description': '',
            'address.streetAddress': '1 Elm St',
            'address.city': 'Othertown',
            'address.state': 'NY',
            'address.zip': '678900',
        })

        payload = ClientPayloadSerializer(data=form)

        self.assertTrue(payload.is_valid(), payload.errors)
        self.assertEqual(payload.validated_data['first_name'], 'Jane')
        self.assertEqual(payload.validated_data['address']['street_address'], '1 Elm St')
        self.assertEqual(payload.validated_data['address']['zip'], '678900')

    def test_blank_address_form_means_no_address(self):
        form = QueryDict(mutable=True)
        form.update({
            'id': '3',
            'firstName': 'Jane',
            'address.streetAddress': '',
            'address.city': '',
            'address.state': '',
            'address.zip': '',
        })

        payload = ClientPayloadSerializer(data=form)

        self.assertTrue(payload.is_valid(), payload.errors)
        self.assertIsNone(payload.validated_data['address'])

    def test_payload_from_json(self):
        payload = ClientPayloadSerializer(data={
            'id': 3,
            'firstName': 'Jane',
            'address': {'streetAddress': '1 Elm St', 'city': 'A', 'state': 'B', 'zip': '123456'},
        })

        self.assertTrue(payload.is_valid(), payload.errors)
        self.assertEqual(payload.validated_data['id'], '3')
        self.assertEqual(payload.validated_data['address']['city'], 'A')
        self.assertNotIn('email', payload.validated_data)

    def test_flatten_errors(self):
        errors = flatten_errors({'address': {'zip': ['Not a valid string.']}, 'id': ['Bad id']})

        self.assertEqual(errors, [
            FieldError('address.zip', 'Not a valid string.'),
            FieldError('id', 'Bad id'),
        ])


class PresentationTests(TestCase):
    """Test composition of the list page"""

    def test_build_index(self):
        clients = [create_client('John'), create_client('Jane')]

        index = build_index(clients, 21, 2, 10, 'Doe', SortState.LAST_NAME_ASC)

        self.assertEqual(index.clients, clients)
        self.assertEqual(index.page.page_number, 2)
        self.assertEqual(index.page.total_pages, 3)
        self.assertTrue(index.page.has_previous)
        self.assertTrue(index.page.has_next)
        self.assertEqual(index.filter.selected_text, 'Doe')
        self.assertEqual(index.sort.last_name, SortState.LAST_NAME_DESC)
        self.assertEqual(index.sort.first_name, SortState.FIRST_NAME_ASC)
        self.assertTrue(index.as_context()['filter_applied'])

    def test_empty_index(self):
        index = build_index([], 0, 1, 10, None, None)

        self.assertEqual(index.page.total_pages, 0)
        self.assertFalse(index.page.has_next)
        self.assertEqual(index.filter.selected_text, '')
        self.assertEqual(index.sort.current, SortState.FIRST_NAME_ASC)
        self.assertEqual(project_clients(index), [])

    def test_project_clients_is_a_flat_list(self):
        create_client('John')
        index = build_index(Client.objects.all(), 1, 1, 10, '', SortState.FIRST_NAME_ASC)

        projected = project_clients(index)

        self.assertEqual(len(projected), 1)
        self.assertEqual(projected[0]['firstName'], 'John')


class ClientTagsTests(SimpleTestCase):
    """Test pagination links and error lookup"""

    def test_middle_page_links(self):
        html = page_links(PageMeta(page_number=2, total_pages=3), 'Doe', SortState.LAST_NAME_DESC)

        self.assertIn('<ul class="pagination">', html)
        self.assertEqual(html.count('<li'), 3)
        self.assertIn('<li class="page-item active"><a class="page-link">2</a></li>', html)
        self.assertIn('page=1', html)
        self.assertIn('page=3', html)
        self.assertIn('filterText=Doe', html)
        self.assertIn('sortOrder=LastNameDesc', html)

    def test_single_page_has_only_current_item(self):
        html = page_links(PageMeta(page_number=1, total_pages=1))

        self.assertEqual(html.count('<li'), 1)
        self.assertNotIn('href', html)

    def test_missing_page_metadata(self):
        with self.assertRaises(ValueError):
            page_links(None)

    def test_field_errors_filter(self):
        errors = [FieldError('zip', 'ZIP must be 6 digits'), FieldError('city', 'City is required')]

        self.assertEqual(field_errors(errors, 'zip'), ['ZIP must be 6 digits'])
        self.assertEqual(field_errors(errors, 'state'), [])
        self.assertEqual(field_errors(None, 'state'), [])


class SeedClientsCommandTests(TestCase):
    """Test the seed_clients management command"""

    def test_seeds_sample_roster_once(self):
        call_command('seed_clients', stdout=StringIO())
        call_command('seed_clients', stdout=StringIO())

        self.assertEqual(Client.objects.count(), 23)
        self.assertEqual(Address.objects.count(), 23)
        john = Client.objects.get(first_name='John')
        self.assertEqual(john.email, 'john@example.com')
        self.assertEqual(john.address.zip, '123450')

    def test_fake_clients(self):
        call_command('seed_clients', '--fake', '3', stdout=StringIO())

        self.assertEqual(Client.objects.count(), 26)
        for client in Client.objects.select_related('address'):
            self.assertRegex(client.first_name, r'^[A-Za-z]+$')
            self.assertRegex(client.address.zip, r'^\d{6}$')


class ClientIndexViewTests(APITestCase):
    """Test the list page in both representations"""

    def setUp(self):
        self.client = APIClient()
        self.url = reverse('clients:index')
        self.john = create_client('John', 'Doe')
        self.jane = create_client('Jane', 'Doe', street='456 Elm St')
        self.bob = create_client('Bob', 'Brown', with_address=False)

    def test_html_list(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTemplateUsed(response, 'clients/index.html')
        self.assertContains(response, 'Jane')
        self.assertEqual(len(response.context['clients']), 3)
        self.assertEqual(response.context['page'].total_pages, 1)

    def test_json_list(self):
        response = self.client.get(self.url, HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertIsInstance(data, list)
        self.assertEqual([item['firstName'] for item in data], ['Bob', 'Jane', 'John'])
        self.assertEqual(set(data[0]), {'id', 'firstName', 'lastName', 'email', 'phone', 'address', 'description'})
        self.assertEqual(data[0]['address'], {'streetAddress': None, 'city': None, 'state': None, 'zip': None})

    def test_filter_and_sort(self):
        response = self.client.get(
            self.url, {'filterText': 'Doe', 'sortOrder': 'FirstNameDesc'},
            HTTP_ACCEPT='application/json',
        )

        self.assertEqual([item['firstName'] for item in response.json()], ['John', 'Jane'])

    def test_filter_without_matches(self):
        response = self.client.get(self.url, {'filterText': 'Zzz'}, HTTP_ACCEPT='application/json')

        self.assertEqual(response.json(), [])

    @override_settings(CLIENTS_PAGE_SIZE=2)
    def test_pagination(self):
        response = self.client.get(self.url, {'page': 2})

        self.assertEqual(len(response.context['clients']), 1)
        page = response.context['page']
        self.assertEqual(page.total_pages, 2)
        self.assertTrue(page.has_previous)
        self.assertFalse(page.has_next)
        self.assertContains(response, 'page=1')

    def test_invalid_page_means_first_page(self):
        response = self.client.get(self.url, {'page': 'abc'}, HTTP_ACCEPT='application/json')

        self.assertEqual(len(response.json()), 3)

    def test_html_sort_links_toggle(self):
        response = self.client.get(self.url, {'sortOrder': 'FirstNameAsc'})

        self.assertEqual(response.context['sort'].first_name, SortState.FIRST_NAME_DESC)
        self.assertContains(response, 'sortOrder=FirstNameDesc')

    def test_storage_fault_as_json(self):
        with mock.patch.object(ClientService, 'get_clients', return_value=ServiceResult.storage_fault('boom')):
            response = self.client.get(self.url, HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json(), {'success': False, 'message': 'An unexpected error occurred.'})

    def test_storage_fault_as_html(self):
        with mock.patch.object(ClientService, 'get_clients_count', return_value=ServiceResult.storage_fault('boom')):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertContains(response, 'Please try again later', status_code=500)
        self.assertNotContains(response, 'boom', status_code=500)


class ClientDeleteViewTests(APITestCase):
    """Test deleting clients"""

    def setUp(self):
        self.client = APIClient()
        self.test_client = create_client()

    def test_delete_as_json(self):
        url = reverse('clients:delete', kwargs={'pk': self.test_client.pk})

        response = self.client.post(url, HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {'success': True, 'message': 'Client deleted successfully'})
        self.assertEqual(Client.objects.count(), 0)
        self.assertEqual(Address.objects.count(), 0)

    def test_delete_redirects_browser(self):
        url = reverse('clients:delete', kwargs={'pk': self.test_client.pk})

        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], reverse('clients:index'))

    def test_delete_with_id_in_body(self):
        response = self.client.post(
            reverse('clients:delete'), {'id': self.test_client.pk}, HTTP_ACCEPT='application/json',
        )

        self.assertTrue(response.json()['success'])
        self.assertFalse(Client.objects.exists())

    def test_delete_without_id(self):
        response = self.client.post(reverse('clients:delete'), HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'message': 'Client ID is null'})

    def test_delete_missing_client_as_json(self):
        response = self.client.post(
            reverse('clients:delete', kwargs={'pk': 9999}), HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'message': 'Client not found'})

    def test_delete_out_of_range_id(self):
        response = self.client.post(
            reverse('clients:delete'), {'id': '99999999999999999999999'}, HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'message': 'Client not found'})
        self.assertEqual(Client.objects.count(), 1)

    def test_delete_missing_client_as_html(self):
        response = self.client.post(reverse('clients:delete', kwargs={'pk': 9999}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTemplateUsed(response, 'core/error.html')
        self.assertContains(response, 'Client not found', status_code=404)

    def test_delete_storage_fault(self):
        with mock.patch.object(ClientService, 'delete_client', return_value=ServiceResult.storage_fault('boom')):
            response = self.client.post(
                reverse('clients:delete', kwargs={'pk': self.test_client.pk}), HTTP_ACCEPT='application/json',
            )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(response.json()['success'])


class ClientEditViewTests(APITestCase):
    """Test viewing and editing a client"""

    def setUp(self):
        self.client = APIClient()
        self.test_client = create_client()
        self.url = reverse('clients:edit', kwargs={'pk': self.test_client.pk})

    def json_payload(self, **overrides):
        payload = {
            'id': self.test_client.pk,
            'firstName': 'Johnny',
            'lastName': 'Walker',
            'email': 'johnny@example.com',
            'phone': '555-000-1111',
            'description': 'Updated',
            'address': {'streetAddress': '456 Elm St', 'city': 'Othertown', 'state': 'NY', 'zip': '678900'},
        }
        payload.update(overrides)
        return payload

    def test_get_as_json(self):
        response = self.client.get(self.url, HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['data']['id'], self.test_client.pk)
        self.assertEqual(body['data']['address']['zip'], '123450')

    def test_get_as_html(self):
        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTemplateUsed(response, 'clients/edit_client.html')
        self.assertContains(response, 'value="John"')

    def test_get_without_id(self):
        response = self.client.get(reverse('clients:edit'), HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['message'], 'ID is null')

    def test_get_missing_client(self):
        response = self.client.get(reverse('clients:edit', kwargs={'pk': 9999}), HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'message': 'Client not found'})

    def test_update_as_json(self):
        response = self.client.post(
            reverse('clients:edit'), self.json_payload(), format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertTrue(body['success'])
        self.assertEqual(body['data']['firstName'], 'Johnny')
        self.assertEqual(body['data']['address']['city'], 'Othertown')
        self.test_client.refresh_from_db()
        self.assertEqual(self.test_client.last_name, 'Walker')

    def test_update_from_form_redirects(self):
        form = {
            'id': self.test_client.pk,
            'firstName': 'Jane',
            'lastName': 'Roe',
            'email': 'jane@example.com',
            'phone': '555-123-4567',
            'description': 'From the form',
            'address.streetAddress': '789 Oak St',
            'address.city': 'Springfield',
            'address.state': 'IL',
            'address.zip': '627010',
        }

        response = self.client.post(reverse('clients:edit'), form)

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.test_client.refresh_from_db()
        self.assertEqual(self.test_client.first_name, 'Jane')
        self.assertEqual(self.test_client.address.street_address, '789 Oak St')

    def test_id_taken_from_url_when_body_has_none(self):
        payload = self.json_payload()
        del payload['id']

        response = self.client.post(self.url, payload, format='json', HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['data']['id'], self.test_client.pk)

    def test_invalid_data_as_json(self):
        response = self.client.post(
            reverse('clients:edit'), self.json_payload(firstName='J0hnny', email='nope'),
            format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        body = response.json()
        self.assertFalse(body['success'])
        self.assertEqual(body['message'], 'Invalid data')
        self.assertIn({'field': 'firstName', 'message': 'First Name should contain only letters'}, body['errors'])
        self.assertIn({'field': 'email', 'message': 'Invalid Email Address'}, body['errors'])
        self.test_client.refresh_from_db()
        self.assertEqual(self.test_client.first_name, 'John')

    def test_invalid_data_rerenders_form(self):
        form = {
            'id': self.test_client.pk,
            'firstName': '',
            'lastName': 'Doe',
            'email': 'john@example.com',
            'phone': '123-456-7890',
            'address.streetAddress': '123 Main St',
            'address.city': 'Anytown',
            'address.state': 'CA',
            'address.zip': '12',
        }

        response = self.client.post(reverse('clients:edit'), form)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTemplateUsed(response, 'clients/edit_client.html')
        self.assertContains(response, 'First Name is required')
        self.assertContains(response, 'ZIP must be 6 digits')

    def test_update_missing_client(self):
        response = self.client.post(
            reverse('clients:edit'), self.json_payload(id=9999), format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'message': 'Client not found'})

    def test_out_of_range_id_is_invalid(self):
        response = self.client.post(
            reverse('clients:edit'), self.json_payload(id='99999999999999999999999'),
            format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['errors'], [{'field': 'id', 'message': 'Client ID must be a positive number.'}])

    def test_empty_body(self):
        response = self.client.post(reverse('clients:edit'), {}, format='json', HTTP_ACCEPT='application/json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json(), {'success': False, 'message': 'Client data is null'})


class AddressEditViewTests(APITestCase):
    """Test viewing and editing an address"""

    def setUp(self):
        self.client = APIClient()
        self.test_client = create_client()
        self.address = self.test_client.address

    def test_get_as_json(self):
        response = self.client.get(
            reverse('clients:edit_address', kwargs={'pk': self.test_client.pk}), HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {
            'success': True,
            'data': {
                'id': self.test_client.pk,
                'address': {'streetAddress': '123 Main St', 'city': 'Anytown', 'state': 'CA', 'zip': '123450'},
            },
        })

    def test_get_as_html(self):
        response = self.client.get(reverse('clients:edit_address', kwargs={'pk': self.test_client.pk}))

        self.assertTemplateUsed(response, 'clients/edit_address.html')
        self.assertContains(response, f'name="id" value="{self.address.pk}"')

    def test_get_client_without_address(self):
        other = create_client('Alice', with_address=False)

        response = self.client.get(
            reverse('clients:edit_address', kwargs={'pk': other.pk}), HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['message'], 'Address not found')

    def test_get_missing_client(self):
        response = self.client.get(reverse('clients:edit_address', kwargs={'pk': 9999}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertContains(response, 'Client not found', status_code=404)

    def test_update_as_json(self):
        payload = {'id': self.address.pk, 'streetAddress': '9 Elm St', 'city': 'Springfield', 'state': 'IL', 'zip': '627010'}

        response = self.client.post(
            reverse('clients:edit_address'), payload, format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json(), {
            'success': True,
            'data': {'streetAddress': '9 Elm St', 'city': 'Springfield', 'state': 'IL', 'zip': '627010'},
        })
        self.address.refresh_from_db()
        self.assertEqual(self.address.city, 'Springfield')

    def test_update_from_form_redirects(self):
        form = {'id': self.address.pk, 'streetAddress': '9 Elm St', 'city': 'Springfield', 'state': 'IL', 'zip': '627010'}

        response = self.client.post(reverse('clients:edit_address'), form)

        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.address.refresh_from_db()
        self.assertEqual(self.address.street_address, '9 Elm St')

    def test_update_missing_address(self):
        payload = {'id': 9999, 'streetAddress': '9 Elm St', 'city': 'Springfield', 'state': 'IL', 'zip': '627010'}

        response = self.client.post(
            reverse('clients:edit_address'), payload, format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json(), {'success': False, 'message': 'Address not found'})

    def test_invalid_zip(self):
        payload = {'id': self.address.pk, 'streetAddress': '9 Elm St', 'city': 'Springfield', 'state': 'IL', 'zip': '62701'}

        response = self.client.post(
            reverse('clients:edit_address'), payload, format='json', HTTP_ACCEPT='application/json',
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['errors'], [{'field': 'zip', 'message': 'ZIP must be 6 digits'}])
        self.address.refresh_from_db()
        self.assertEqual(self.address.zip, '123450')


class ApiSchemaTests(APITestCase):
    """Test the generated API description"""

    def test_schema_lists_client_routes(self):
        response = self.client.get('/swagger.json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('/clients/edit/', response.json()['paths'])
