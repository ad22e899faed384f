"""Application factory for the accounts API."""

from typing import Any, Mapping, Optional
import logging

from flask import Flask
from pythonjsonlogger.json import JsonFormatter

from . import routes
from .store.util import init_app as store_init_app
from .store.util import create_all as store_create_all


def setup_logging(level: int, json: bool = False) -> None:
    """Send package log records to stderr."""
    handler = logging.StreamHandler()
    if json:
        handler.setFormatter(JsonFormatter(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
        ))
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s %(name)s: %(message)s'
        ))
    logger = logging.getLogger('useraccounts')
    logger.handlers = [handler]
    logger.setLevel(level)


def create_web_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    """Initialize and configure the accounts application."""
    app = Flask('useraccounts')
    app.config.from_object('useraccounts.config')
    if config is not None:
        app.config.update(config)

    setup_logging(app.config['LOGLEVEL'], app.config['LOGJSON'])
    store_init_app(app)
    app.register_blueprint(routes.blueprint)

    if app.config['CREATE_DB']:
        with app.app_context():
            store_create_all()

    return app
