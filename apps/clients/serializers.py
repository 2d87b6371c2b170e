# apps/clients/serializers.py
from rest_framework import serializers

from apps.core.results import FieldError
from .models import Address, Client

EMPTY_ADDRESS = {'streetAddress': None, 'city': None, 'state': None, 'zip': None}


class AddressSerializer(serializers.ModelSerializer):
    streetAddress = serializers.CharField(source='street_address')

    class Meta:
        model = Address
        fields = ['streetAddress', 'city', 'state', 'zip']


class ClientSerializer(serializers.ModelSerializer):
    """JSON shape of a client record; a missing address becomes four nulls"""
    firstName = serializers.CharField(source='first_name')
    lastName = serializers.CharField(source='last_name')
    address = serializers.SerializerMethodField()

    class Meta:
        model = Client
        fields = ['id', 'firstName', 'lastName', 'email', 'phone', 'address', 'description']

    def get_address(self, obj):
        if obj.address is None:
            return dict(EMPTY_ADDRESS)
        return AddressSerializer(obj.address).data


def _text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, allow_null=True, **kwargs)


class AddressPayloadSerializer(serializers.Serializer):
    """
    Incoming address, from a form (address.streetAddress=...) or JSON.
    Only shapes the data; the rules live in validators.py.
    """
    id = _text()
    streetAddress = _text(source='street_address')
    city = _text()
    state = _text()
    zip = _text()


class ClientPayloadSerializer(serializers.Serializer):
    id = _text()
    firstName = _text(source='first_name')
    lastName = _text(source='last_name')
    email = _text()
    phone = _text()
    description = _text()
    address = AddressPayloadSerializer(required=False, allow_null=True)

    def validate_address(self, value):
        # A form with every address box left empty means "no address"
        if value and all(not value.get(name) for name in ('street_address', 'city', 'state', 'zip')):
            return None
        return value


def flatten_errors(errors, prefix=''):
    """DRF's nested error dict as a flat list of FieldError"""
    if isinstance(errors, list):
        return [FieldError(prefix.rstrip('.') or 'non_field_errors', str(message)) for message in errors]

    flat = []
    for name, messages in errors.items():
        if isinstance(messages, dict):
            flat.extend(flatten_errors(messages, prefix=f'{prefix}{name}.'))
        else:
            flat.extend(FieldError(f'{prefix}{name}', str(message)) for message in messages)
    return flat
