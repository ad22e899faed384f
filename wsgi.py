"""Web Server Gateway Interface entry-point."""

from useraccounts.factory import create_web_app
import os

__flask_app__ = None


def application(environ, start_response):    # type: ignore
    """WSGI application."""
    global __flask_app__
    if __flask_app__ is None:
        for key, value in environ.items():
            if type(value) is str:
                os.environ[key] = value
        __flask_app__ = create_web_app()
    return __flask_app__(environ, start_response)
