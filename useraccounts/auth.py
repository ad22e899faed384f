"""Provides API key authentication for request handlers."""

from functools import wraps
from typing import Any, Callable
import logging

from flask import request, g
from werkzeug.exceptions import BadRequest, Unauthorized

from .store import accounts

logger = logging.getLogger(__name__)

API_KEY_MISSING = 'Api key is missing'
INVALID_API_KEY = 'Access Denied. Invalid Api key'


def authenticated(func: Callable) -> Callable:
    """
    Require a valid API key in the ``Authorization`` header.

    The id of the key's owner is attached to :data:`flask.g` as ``user_id``.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        api_key = request.headers.get('Authorization')
        if not api_key:
            raise BadRequest(API_KEY_MISSING)
        user_id = accounts.get_user_id(api_key)
        if user_id is None:
            logger.debug('Rejected request with unknown API key')
            raise Unauthorized(INVALID_API_KEY)
        g.user_id = user_id
        return func(*args, **kwargs)
    return wrapper
