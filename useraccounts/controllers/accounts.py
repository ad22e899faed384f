"""
Controllers for registration, login, and profile management.

Each controller checks its required parameters, calls one operation in
:mod:`useraccounts.store.accounts`, and translates the result into response
data, a status code, and headers.
"""

from typing import Any, Dict, Mapping, Tuple
from http import HTTPStatus as status
import logging

from werkzeug.exceptions import InternalServerError, NotFound

from .. import domain
from ..domain import CreateUserResult, EditUserResult, EditPasswordResult
from ..params import required_params
from ..store import accounts

logger = logging.getLogger(__name__)

ResponseData = Tuple[Dict[str, Any], int, Dict[str, str]]
Params = Mapping[str, Any]

REGISTER_FIELDS = ['first_name', 'last_name', 'email', 'password', 'age']
LOGIN_FIELDS = ['email', 'password']
PROFILE_FIELDS = ['email', 'first_name', 'last_name', 'age']
PASSWORD_FIELDS = ['old_password', 'new_password']

INCORRECT_CREDENTIALS = 'INCORRECT_CREDENTIALS'
USER_DOESNT_EXIST = 'USER_DOESNT_EXIST'

_CAMEL_CASE = {
    'user_id': 'id',
    'first_name': 'firstName',
    'last_name': 'lastName',
    'profile_picture_uri': 'profilePictureUri',
    'created_at': 'createdAt',
    'api_key': 'apiKey',
}


def user_to_json(user: domain.User) -> Dict[str, Any]:
    """Render a user with the key names used by the API."""
    return {_CAMEL_CASE.get(key, key): value
            for key, value in domain.to_dict(user).items()}


def register(params: Params) -> ResponseData:
    """Register a new user account."""
    values = required_params(REGISTER_FIELDS, params)
    result = accounts.create_user(values['first_name'], values['last_name'],
                                  values['email'], values['password'],
                                  values['age'])
    logger.debug('Registration result: %s', result.value)
    data = {'error': result is not CreateUserResult.USER_CREATED_SUCCESSFULLY,
            'message': result.value}
    if result is CreateUserResult.USER_CREATED_SUCCESSFULLY:
        return data, status.CREATED, {}
    if result is CreateUserResult.EMAIL_ALREADY_TAKEN:
        return data, status.OK, {}
    raise InternalServerError(result.value)


def login(params: Params) -> ResponseData:
    """Check credentials and return the user, including their API key."""
    values = required_params(LOGIN_FIELDS, params)
    if not accounts.check_login(values['email'], values['password']):
        return ({'error': True, 'message': INCORRECT_CREDENTIALS},
                status.UNAUTHORIZED, {})
    user = accounts.get_user_by_email(values['email'])
    if user is None:
        return ({'error': True, 'message': INCORRECT_CREDENTIALS},
                status.UNAUTHORIZED, {})
    return {'error': False, 'user': user_to_json(user)}, status.OK, {}


def get_profile(user_id: int) -> ResponseData:
    """Get the profile of the authenticated user."""
    user = accounts.get_user_by_id(user_id)
    if user is None:
        raise NotFound(USER_DOESNT_EXIST)
    return {'error': False, 'user': user_to_json(user)}, status.OK, {}


def edit_profile(user_id: int, params: Params) -> ResponseData:
    """Update the e-mail address, name, and age of the authenticated user."""
    values = required_params(PROFILE_FIELDS, params)
    result = accounts.edit_user(user_id, values['email'],
                                values['first_name'], values['last_name'],
                                values['age'])
    if result is EditUserResult.EMAIL_ALREADY_TAKEN:
        return {'error': True, 'message': result.value}, status.CONFLICT, {}
    return {'error': False, 'message': result.value}, status.OK, {}


def edit_password(user_id: int, params: Params) -> ResponseData:
    """
    Change the password of the authenticated user.

    On success the response carries the user's new API key, since the one
    used to make this request is no longer valid.
    """
    values = required_params(PASSWORD_FIELDS, params)
    result = accounts.edit_user_password(user_id, values['old_password'],
                                         values['new_password'])
    if result is EditPasswordResult.PASSWORD_IS_CHANGED:
        return ({'error': False, 'message': result.value,
                 'apiKey': accounts.get_api_key_by_id(user_id)},
                status.OK, {})
    if result is EditPasswordResult.NO_CHANGE:
        return {'error': False, 'message': result.value}, status.OK, {}
    if result is EditPasswordResult.INCORRECT_CREDENTIALS:
        return ({'error': True, 'message': result.value},
                status.UNAUTHORIZED, {})
    if result is EditPasswordResult.FAILED_TO_UPDATE:
        raise InternalServerError(result.value)
    raise NotFound(result.value)
