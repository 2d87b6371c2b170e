# apps/clients/sorting.py
"""
Sort states for the client list and the column orderings they stand for.
"""
from dataclasses import dataclass

from django.db import models


class SortState(models.TextChoices):
    FIRST_NAME_ASC = 'FirstNameAsc', 'First name, ascending'
    FIRST_NAME_DESC = 'FirstNameDesc', 'First name, descending'
    LAST_NAME_ASC = 'LastNameAsc', 'Last name, ascending'
    LAST_NAME_DESC = 'LastNameDesc', 'Last name, descending'
    EMAIL_ASC = 'EmailAsc', 'Email, ascending'
    EMAIL_DESC = 'EmailDesc', 'Email, descending'
    PHONE_ASC = 'PhoneAsc', 'Phone, ascending'
    PHONE_DESC = 'PhoneDesc', 'Phone, descending'
    ADDRESS_ASC = 'AddressAsc', 'Address, ascending'
    ADDRESS_DESC = 'AddressDesc', 'Address, descending'
    DESCRIPTION_ASC = 'DescriptionAsc', 'Description, ascending'
    DESCRIPTION_DESC = 'DescriptionDesc', 'Description, descending'

    @classmethod
    def parse(cls, value):
        """
        Sort state from a query parameter.

        Accepts the state name ("LastNameDesc", any case) or its ordinal
        ("3"). Anything else, including None, means FIRST_NAME_ASC.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.FIRST_NAME_ASC
        text = str(value).strip()
        if text.isdigit():
            members = list(cls)
            index = int(text)
            return members[index] if index < len(members) else cls.FIRST_NAME_ASC
        for member in cls:
            if member.value.lower() == text.lower():
                return member
        return cls.FIRST_NAME_ASC


# State -> ORM ordering; the primary key keeps equal keys in a stable order
ORDERINGS = {
    SortState.FIRST_NAME_ASC: ('first_name', 'pk'),
    SortState.FIRST_NAME_DESC: ('-first_name', 'pk'),
    SortState.LAST_NAME_ASC: ('last_name', 'pk'),
    SortState.LAST_NAME_DESC: ('-last_name', 'pk'),
    SortState.EMAIL_ASC: ('email', 'pk'),
    SortState.EMAIL_DESC: ('-email', 'pk'),
    SortState.PHONE_ASC: ('phone', 'pk'),
    SortState.PHONE_DESC: ('-phone', 'pk'),
    SortState.ADDRESS_ASC: ('address__street_address', 'pk'),
    SortState.ADDRESS_DESC: ('-address__street_address', 'pk'),
    SortState.DESCRIPTION_ASC: ('description', 'pk'),
    SortState.DESCRIPTION_DESC: ('-description', 'pk'),
}

DEFAULT_ORDERING = ORDERINGS[SortState.FIRST_NAME_ASC]


def ordering_for(sort_order):
    return ORDERINGS.get(sort_order, DEFAULT_ORDERING)


def _toggle(current, ascending, descending):
    return descending if current == ascending else ascending


@dataclass(frozen=True)
class SortLinks:
    """
    The state each column header switches to when clicked.
    A column sorted ascending flips to descending; every other column
    starts ascending.
    """
    first_name: SortState
    last_name: SortState
    email: SortState
    phone: SortState
    address: SortState
    description: SortState
    current: SortState

    @classmethod
    def for_state(cls, current):
        current = SortState.parse(current)
        return cls(
            first_name=_toggle(current, SortState.FIRST_NAME_ASC, SortState.FIRST_NAME_DESC),
            last_name=_toggle(current, SortState.LAST_NAME_ASC, SortState.LAST_NAME_DESC),
            email=_toggle(current, SortState.EMAIL_ASC, SortState.EMAIL_DESC),
            phone=_toggle(current, SortState.PHONE_ASC, SortState.PHONE_DESC),
            address=_toggle(current, SortState.ADDRESS_ASC, SortState.ADDRESS_DESC),
            description=_toggle(current, SortState.DESCRIPTION_ASC, SortState.DESCRIPTION_DESC),
            current=current,
        )
