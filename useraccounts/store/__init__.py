"""
Persistence for user accounts.

The ``users`` table is read and written only through
:mod:`useraccounts.store.accounts`. Helpers in :mod:`.util` attach the
database to a Flask application and provide the request-scoped session.
"""

from . import accounts, exceptions, models, passwords, util
from .util import create_all, init_app, current_session, drop_all
