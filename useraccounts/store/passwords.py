"""Password hashing and API key generation."""

import secrets

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

DEFAULT_METHOD = 'pbkdf2:sha256'
DEFAULT_KEY_BYTES = 16


def hash_password(password: str) -> str:
    """Generate a salted hash of a password."""
    method = current_app.config.get('PASSWORD_HASH_METHOD', DEFAULT_METHOD)
    return generate_password_hash(password, method=method)


def check_password(password_hash: str, password: str) -> bool:
    """Check a password against a stored hash."""
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def generate_api_key() -> str:
    """
    Generate a new opaque API key.

    The key is ``API_KEY_BYTES`` random bytes from :mod:`secrets`,
    hex-encoded (32 characters with the default of 16 bytes).
    """
    nbytes = current_app.config.get('API_KEY_BYTES', DEFAULT_KEY_BYTES)
    return secrets.token_hex(nbytes)
