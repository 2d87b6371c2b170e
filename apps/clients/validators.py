# apps/clients/validators.py
"""
Field validation for client and address input.

validate_client / validate_address look at the internal (snake_case)
payload and return a list of FieldError; an empty list means the input
may be handed to ClientService. Field names in the errors are the ones
callers send (camelCase, dotted for address parts).
"""
from django.core.exceptions import ValidationError
from django.core.validators import EmailValidator, RegexValidator

from apps.core.results import FieldError

name_validator = RegexValidator(r'\A[A-Za-z]+\Z')
email_validator = EmailValidator()
# Digits with the usual separators, an optional leading +, an optional extension
phone_validator = RegexValidator(r'\A\+?[\d\s().\-]*\d[\d\s().\-]*(\s*(x|ext\.?)\s*\d+)?\Z')
zip_validator = RegexValidator(r'\A\d{6}\Z')

# Largest primary key a BigAutoField can hold
MAX_ID = 2 ** 63 - 1


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def _passes(validator, value):
    try:
        validator(value)
    except ValidationError:
        return False
    return True


def _check_id(errors, field, label, value):
    if _is_blank(value):
        errors.append(FieldError(field, f"{label} is required"))
        return
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if not 1 <= number <= MAX_ID:
        errors.append(FieldError(field, f"{label} must be a positive number."))


def _check_required(errors, field, label, value, validator=None, message=None):
    if _is_blank(value):
        errors.append(FieldError(field, f"{label} is required"))
    elif validator is not None and not _passes(validator, value):
        errors.append(FieldError(field, message))


def _check_address_fields(errors, data, prefix=''):
    _check_required(errors, f'{prefix}streetAddress', 'Street Address', data.get('street_address'))
    _check_required(errors, f'{prefix}city', 'City', data.get('city'))
    _check_required(errors, f'{prefix}state', 'State', data.get('state'))
    _check_required(
        errors, f'{prefix}zip', 'ZIP', data.get('zip'),
        zip_validator, 'ZIP must be 6 digits',
    )


def validate_client(data):
    """
    Check a client payload.
    The nested address, when present, is checked field by field; its id
    is not, since the client form never edits it.
    """
    errors = []
    _check_id(errors, 'id', 'Client ID', data.get('id'))
    _check_required(
        errors, 'firstName', 'First Name', data.get('first_name'),
        name_validator, 'First Name should contain only letters',
    )
    _check_required(
        errors, 'lastName', 'Last Name', data.get('last_name'),
        name_validator, 'Last Name should contain only letters',
    )
    _check_required(
        errors, 'email', 'Email', data.get('email'),
        email_validator, 'Invalid Email Address',
    )
    _check_required(
        errors, 'phone', 'Phone', data.get('phone'),
        phone_validator, 'Invalid Phone Number',
    )

    address = data.get('address')
    if address is not None:
        _check_address_fields(errors, address, prefix='address.')
    return errors


def validate_address(data):
    errors = []
    _check_id(errors, 'id', 'Address ID', data.get('id'))
    _check_address_fields(errors, data)
    return errors
