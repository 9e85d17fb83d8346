# uploader/api/routes/__init__.py

from flask import Flask

from uploader.api.routes.health_routes import bp_health
from uploader.api.routes.file_routes import bp_files


def register_routes(app: Flask, *, api_prefix: str, app_prefix: str) -> None:
    # health fora de /api (mas dentro do app)
    app.register_blueprint(bp_health, url_prefix=f"{app_prefix}/health")

    app.register_blueprint(bp_files, url_prefix=f"{api_prefix}/files")
