"""Defines user account concepts and store result codes."""

from typing import Any, NamedTuple, Optional
from datetime import datetime
from enum import Enum


class User(NamedTuple):
    """A user account, as exposed outside of the store."""

    user_id: int
    """Primary key of the account. Never changes."""

    email: str
    """The user's login e-mail address."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[str] = None
    phone: Optional[str] = None
    birthdate: Optional[str] = None
    gender: Optional[str] = None
    profile_picture_uri: Optional[str] = None

    created_at: Optional[datetime] = None
    """When the account was registered."""

    api_key: Optional[str] = None
    """Bearer credential for authenticated requests."""


class CreateUserResult(Enum):
    """Outcome of :func:`useraccounts.store.accounts.create_user`."""

    USER_CREATED_SUCCESSFULLY = 'USER_CREATED_SUCCESSFULLY'
    FAILED_TO_CREATE = 'FAILED_TO_CREATE'
    EMAIL_ALREADY_TAKEN = 'EMAIL_ALREADY_TAKEN'


class EditUserResult(Enum):
    """Outcome of :func:`useraccounts.store.accounts.edit_user`."""

    USER_UPDATED = 'USER_UPDATED'
    NO_CHANGE = 'NO_CHANGE'
    EMAIL_ALREADY_TAKEN = 'EMAIL_ALREADY_TAKEN'


class EditPasswordResult(Enum):
    """Outcome of :func:`useraccounts.store.accounts.edit_user_password`."""

    PASSWORD_IS_CHANGED = 'PASSWORD_IS_CHANGED'
    NO_CHANGE = 'NO_CHANGE'
    INCORRECT_CREDENTIALS = 'INCORRECT_CREDENTIALS'
    USER_DOESNT_EXIST = 'USER_DOESNT_EXIST'
    FAILED_TO_UPDATE = 'FAILED_TO_UPDATE'


def to_dict(obj: tuple) -> dict:
    """
    Generate a dict representation of a NamedTuple instance.

    Child NamedTuples are cast recursively, and datetimes are rendered as
    ISO-8601 strings, so that the result can be serialized as JSON.

    Parameters
    ----------
    obj : tuple
        A NamedTuple instance.

    Returns
    -------
    dict

    """
    if not hasattr(obj, '_asdict'):  # NamedTuple-generated classes have this.
        return {}

    def _cast(value: Any) -> Any:
        if hasattr(value, '_asdict'):
            value = to_dict(value)
        elif isinstance(value, datetime):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, list):
            value = [_cast(o) for o in value]
        return value

    return {key: _cast(value) for key, value in obj._asdict().items()}
