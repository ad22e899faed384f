"""
User accounts service.

Provides registration, login, profile edits, and API key authentication
against a single relational ``users`` table.

Layout
------

- :mod:`.params` checks that a request body carries every required field,
  and stops the request with a 400 if it does not.
- :mod:`.store.accounts` owns every read and write of the ``users`` table.
  Operations return result codes from :mod:`.domain` rather than raising on
  business-rule failures.
- :mod:`.controllers`, :mod:`.routes`, and :mod:`.auth` expose the store as a
  small JSON API, authenticated with the API key issued at registration.

Quick start
-----------

.. code-block:: python

   from useraccounts.factory import create_web_app

   app = create_web_app({'SQLALCHEMY_DATABASE_URI': 'sqlite:///dev.db',
                         'CREATE_DB': True})
   app.run()

"""

from .domain import User, CreateUserResult, EditUserResult, \
    EditPasswordResult
