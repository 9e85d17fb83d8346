from flask import Flask

from uploader.config.settings import Settings

# folga para os cabeçalhos do multipart
MULTIPART_OVERHEAD_BYTES = 1024 * 1024


def configure_app(app: Flask, settings: Settings) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["MAX_CONTENT_LENGTH"] = settings.max_file_size_mb * 1024 * 1024 + MULTIPART_OVERHEAD_BYTES
    app.config["UPLOADER_SETTINGS"] = settings
