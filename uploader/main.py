# uploader/main.py
from __future__ import annotations

from flask import Flask

from uploader.api.middlewares.error_handler import register_error_handlers
from uploader.api.routes import register_routes
from uploader.config.flask_config import configure_app
from uploader.config.settings import Settings, settings
from uploader.core.logging_config import configure_logging


def create_app(app_settings: Settings | None = None) -> Flask:
    cfg = app_settings or settings
    configure_logging(cfg.log_level)

    app = Flask(__name__)

    configure_app(app, cfg)

    register_routes(app, api_prefix=cfg.api_prefix, app_prefix=cfg.app_prefix.rstrip("/"))

    register_error_handlers(app)

    return app


if __name__ == "__main__":
    # em produção use um servidor WSGI (ex.: gunicorn "uploader.main:create_app()")
    create_app().run(host="0.0.0.0", port=5000, debug=settings.debug)
