"""
Provide methods for working with user accounts.

This module is the only reader and writer of the ``users`` table. Every
function runs its statements in the request-scoped session (see
:func:`.util.transaction`), so connections are released when the application
context is torn down.

Business outcomes (duplicate e-mail, wrong password, nothing to change) are
returned as result codes from :mod:`useraccounts.domain`. Failures to talk to
the database are raised as :class:`.exceptions.Unavailable`.
"""

from typing import Any, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError, OperationalError, IntegrityError

from .. import domain
from ..domain import CreateUserResult, EditUserResult, EditPasswordResult
from . import util
from .exceptions import NoSuchUser, Unavailable
from .models import DBUser
from .passwords import hash_password, check_password, generate_api_key

logger = logging.getLogger(__name__)


def is_user_exists(email: str) -> bool:
    """
    Determine whether a user with a particular address already exists.

    Parameters
    ----------
    email : str

    Returns
    -------
    bool

    """
    try:
        with util.transaction() as session:
            data = session.query(DBUser.id) \
                .filter(DBUser.email == email) \
                .first()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    return data is not None


def create_user(first_name: str, last_name: str, email: str, password: str,
                age: str) -> CreateUserResult:
    """
    Register a new, active user.

    Parameters
    ----------
    first_name : str
    last_name : str
    email : str
        Login address. Must not belong to another account.
    password : str
        Plaintext password; only its hash is stored.
    age : str

    Returns
    -------
    :class:`.CreateUserResult`

    """
    if is_user_exists(email):
        logger.debug('Email already registered')
        return CreateUserResult.EMAIL_ALREADY_TAKEN

    db_user = DBUser(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password_hash=hash_password(password),
        age=age,
        api_key=generate_api_key(),
        status=DBUser.ACTIVE
    )
    try:
        with util.transaction() as session:
            session.add(db_user)
            session.commit()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    except IntegrityError as e:
        # Another request registered the same address after our check.
        if is_user_exists(email):
            logger.debug('Email registered concurrently')
            return CreateUserResult.EMAIL_ALREADY_TAKEN
        logger.error('Could not create user: %s', e)
        return CreateUserResult.FAILED_TO_CREATE
    except SQLAlchemyError as e:
        logger.error('Could not create user: %s', e)
        return CreateUserResult.FAILED_TO_CREATE
    logger.debug('Created user with id %s', db_user.id)
    return CreateUserResult.USER_CREATED_SUCCESSFULLY


def check_login(email: str, password: str) -> bool:
    """
    Check an e-mail address and password.

    An unknown address and a wrong password both return ``False``, so that
    callers cannot tell which one was wrong.
    """
    try:
        with util.transaction() as session:
            row = session.query(DBUser.password_hash) \
                .filter(DBUser.email == email) \
                .first()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if row is None:
        logger.debug('Login failed: no such user')
        return False
    return check_password(row.password_hash, password)


def edit_user(user_id: int, email: str, first_name: str, last_name: str,
              age: str) -> EditUserResult:
    """
    Update a user's e-mail address, name, and age.

    The new address may be the user's own current address; otherwise it must
    not belong to any account.

    Returns
    -------
    :class:`.EditUserResult`
        ``NO_CHANGE`` if the user does not exist or every value is already
        as requested.

    """
    try:
        db_user: Optional[DBUser] = _get_user(user_id)
    except NoSuchUser:
        db_user = None

    current_email = db_user.email if db_user is not None else None
    if email != current_email and is_user_exists(email):
        return EditUserResult.EMAIL_ALREADY_TAKEN
    if db_user is None:
        logger.debug('No user with id %s to update', user_id)
        return EditUserResult.NO_CHANGE

    try:
        with util.transaction() as session:
            changed = [
                _update_field_if_changed(db_user, 'email', email),
                _update_field_if_changed(db_user, 'first_name', first_name),
                _update_field_if_changed(db_user, 'last_name', last_name),
                _update_field_if_changed(db_user, 'age', age),
            ]
            if not any(changed):
                return EditUserResult.NO_CHANGE
            session.add(db_user)
            session.commit()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    except IntegrityError:
        logger.debug('Email taken concurrently')
        return EditUserResult.EMAIL_ALREADY_TAKEN
    return EditUserResult.USER_UPDATED


def edit_user_password(user_id: int, old_password: str,
                       new_password: str) -> EditPasswordResult:
    """
    Change a user's password, and issue them a new API key.

    Parameters
    ----------
    user_id : int
    old_password : str
        Must match the current password.
    new_password : str

    Returns
    -------
    :class:`.EditPasswordResult`

    """
    try:
        db_user = _get_user(user_id)
    except NoSuchUser:
        return EditPasswordResult.USER_DOESNT_EXIST

    if not check_password(db_user.password_hash, old_password):
        logger.debug('Incorrect password for user %s', user_id)
        return EditPasswordResult.INCORRECT_CREDENTIALS
    if check_password(db_user.password_hash, new_password):
        return EditPasswordResult.NO_CHANGE

    try:
        with util.transaction() as session:
            db_user.password_hash = hash_password(new_password)
            db_user.api_key = generate_api_key()
            session.add(db_user)
            session.commit()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    except IntegrityError:
        logger.error('New API key for user %s is already in use', user_id)
        return EditPasswordResult.FAILED_TO_UPDATE
    logger.debug('Password changed and API key rotated for user %s', user_id)
    return EditPasswordResult.PASSWORD_IS_CHANGED


def get_user_by_email(email: str) -> Optional[domain.User]:
    """Load a user by e-mail address, or ``None``."""
    try:
        with util.transaction() as session:
            db_user = session.query(DBUser) \
                .filter(DBUser.email == email) \
                .first()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if db_user is None:
        return None
    return _to_domain(db_user)


def get_user_by_id(user_id: int) -> Optional[domain.User]:
    """Load a user by id, or ``None``."""
    try:
        db_user = _get_user(user_id)
    except NoSuchUser:
        return None
    return _to_domain(db_user)


def get_api_key_by_id(user_id: int) -> Optional[str]:
    """Get the current API key of a user, or ``None``."""
    try:
        with util.transaction() as session:
            row = session.query(DBUser.api_key) \
                .filter(DBUser.id == user_id) \
                .first()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if row is None:
        return None
    api_key: str = row.api_key
    return api_key


def get_user_id(api_key: str) -> Optional[int]:
    """Get the id of the user holding ``api_key``, or ``None``."""
    try:
        with util.transaction() as session:
            row = session.query(DBUser.id) \
                .filter(DBUser.api_key == api_key) \
                .first()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if row is None:
        return None
    return int(row.id)


def is_valid_api_key(api_key: str) -> bool:
    """
    Validate an API key.

    A key is valid if any user currently holds it.
    """
    return get_user_id(api_key) is not None


def _update_field_if_changed(obj: Any, field: str, update_with: Any) -> bool:
    # Profile columns are text; 33 and '33' are the same age.
    if update_with is not None:
        update_with = str(update_with)
    if getattr(obj, field) != update_with:
        setattr(obj, field, update_with)
        return True
    return False


def _get_user(user_id: int) -> DBUser:
    try:
        with util.transaction() as session:
            db_user: Optional[DBUser] = session.query(DBUser) \
                .filter(DBUser.id == user_id) \
                .first()
    except OperationalError as e:
        raise Unavailable('Database is temporarily unavailable') from e
    if db_user is None:
        raise NoSuchUser('User does not exist')
    return db_user


def _to_domain(db_user: DBUser) -> domain.User:
    return domain.User(
        user_id=db_user.id,
        email=db_user.email,
        first_name=db_user.first_name,
        last_name=db_user.last_name,
        age=db_user.age,
        phone=db_user.phone,
        birthdate=db_user.birthdate,
        gender=db_user.gender,
        profile_picture_uri=db_user.profile_picture_uri,
        created_at=db_user.created_at,
        api_key=db_user.api_key
    )
