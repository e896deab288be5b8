"""Build the travelcrm Flask application."""

from __future__ import annotations

from flask import Flask

from travelcrm.core.config import BaseConfig, get_config
from travelcrm.core.logger import configure_logging


def create_app(config: type[BaseConfig] | object | None = None) -> Flask:
    """Return a configured app; ``config`` defaults to the class picked by ``APP_ENV``.

    An optional ``instance/settings.py`` overrides individual keys.
    """
    from travelcrm import api, cli
    from travelcrm.core import cors, errors, extensions, logger

    app = Flask("travelcrm", instance_relative_config=True)
    app.config.from_object(config if config is not None else get_config())
    app.config.from_pyfile("settings.py", silent=True)

    configure_logging(app.config["LOG_LEVEL"])

    for component in (extensions, logger, cors, api, errors, cli):
        component.init_app(app)
    return app
