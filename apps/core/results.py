# apps/core/results.py
"""
Tagged outcomes returned by the service layer.

Services report the three expected failure kinds as values instead of
raising, so views can map each one to its own response.
"""
import enum
from dataclasses import dataclass, field
from typing import Any


class ErrorKind(enum.Enum):
    """Why an operation did not succeed"""
    NOT_FOUND = 'not_found'
    VALIDATION = 'validation'
    STORAGE = 'storage'


@dataclass(frozen=True)
class FieldError:
    """One validation message attached to one input field"""
    field: str
    message: str

    def as_dict(self):
        return {'field': self.field, 'message': self.message}


@dataclass(frozen=True)
class ServiceResult:
    value: Any = None
    error: ErrorKind | None = None
    message: str = ''
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_not_found(self) -> bool:
        return self.error is ErrorKind.NOT_FOUND

    @property
    def is_invalid(self) -> bool:
        return self.error is ErrorKind.VALIDATION

    @property
    def is_storage_fault(self) -> bool:
        return self.error is ErrorKind.STORAGE

    @classmethod
    def success(cls, value=None, message=''):
        return cls(value=value, message=message)

    @classmethod
    def not_found(cls, message):
        return cls(error=ErrorKind.NOT_FOUND, message=message)

    @classmethod
    def invalid(cls, errors, message='Invalid data'):
        return cls(error=ErrorKind.VALIDATION, message=message, errors=list(errors))

    @classmethod
    def storage_fault(cls, message):
        return cls(error=ErrorKind.STORAGE, message=message)
