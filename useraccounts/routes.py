"""Provides Flask integration for the accounts JSON API."""

from http import HTTPStatus as status
import logging

from flask import Blueprint, request, g, jsonify, Response, make_response
from werkzeug.exceptions import HTTPException, ServiceUnavailable

from .auth import authenticated
from .controllers import accounts
from .params import MissingRequiredFields
from .store.exceptions import Unavailable
from .store.util import is_available

logger = logging.getLogger(__name__)

blueprint = Blueprint('accounts', __name__, url_prefix='')


def _respond(data: dict, code: int, headers: dict) -> Response:
    response: Response = make_response(jsonify(data), code)
    response.headers.extend(headers)
    return response


def _params() -> dict:
    params = request.get_json(silent=True)
    return params if isinstance(params, dict) else {}


@blueprint.route('/status', methods=['GET'])
def service_status() -> Response:
    """Health check; 503 if the database cannot be reached."""
    if not is_available():
        raise ServiceUnavailable('Database is unavailable')
    return _respond({'error': False, 'message': 'OK'}, status.OK, {})


@blueprint.route('/register', methods=['POST'])
def register() -> Response:
    """Register a new user."""
    return _respond(*accounts.register(_params()))


@blueprint.route('/login', methods=['POST'])
def login() -> Response:
    """Log in with e-mail address and password."""
    return _respond(*accounts.login(_params()))


@blueprint.route('/user', methods=['GET'])
@authenticated
def get_user() -> Response:
    """Get the authenticated user's profile."""
    return _respond(*accounts.get_profile(g.user_id))


@blueprint.route('/user', methods=['PUT'])
@authenticated
def edit_user() -> Response:
    """Update the authenticated user's profile."""
    return _respond(*accounts.edit_profile(g.user_id, _params()))


@blueprint.route('/user/password', methods=['PUT'])
@authenticated
def edit_password() -> Response:
    """Change the authenticated user's password."""
    return _respond(*accounts.edit_password(g.user_id, _params()))


@blueprint.app_errorhandler(MissingRequiredFields)
def handle_missing_fields(error: MissingRequiredFields) -> Response:
    """Render missing-field errors with the names of the offending fields."""
    return _respond(error.to_dict(), status.BAD_REQUEST, {})


@blueprint.app_errorhandler(Unavailable)
def handle_unavailable(error: Unavailable) -> Response:
    """The database could not be reached."""
    logger.error('Database unavailable: %s', error)
    return handle_http_exception(ServiceUnavailable(str(error)))


@blueprint.app_errorhandler(HTTPException)
def handle_http_exception(error: HTTPException) -> Response:
    """Render HTTP errors as JSON."""
    return _respond({'error': True, 'message': error.description},
                    error.code or status.INTERNAL_SERVER_ERROR, {})
