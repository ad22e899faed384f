"""Testing helpers."""

from contextlib import contextmanager

from flask import Flask

from .. import util


@contextmanager
def temporary_db(database_url: str = 'sqlite:///:memory:',
                 create: bool = True, drop: bool = True):
    """Provide a sqlite database for testing purposes."""
    app = Flask('foo')
    app.config['SQLALCHEMY_DATABASE_URI'] = database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['PASSWORD_HASH_METHOD'] = 'pbkdf2:sha256:1000'
    app.config['API_KEY_BYTES'] = 16
    with app.app_context():
        util.init_app(app)
        if create:
            util.create_all()
        try:
            with util.transaction():
                yield util.current_session()
        finally:
            if drop:
                util.drop_all()
