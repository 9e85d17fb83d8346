# uploader/api/middlewares/error_handler.py
import logging

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from uploader.api.schemas.file_schema import ErrorResponse
from uploader.core.exceptions import AppError, UploadRejectedError
from uploader.core.outcomes import UploadStatus

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        payload = ErrorResponse(error=str(err))
        if isinstance(err, UploadRejectedError):
            payload.status = err.upload_status.value
            payload.error_code = err.error_code
        return jsonify(payload.model_dump(exclude_none=True)), err.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(err: RequestEntityTooLarge):
        payload = ErrorResponse(
            error="Arquivo excede o tamanho máximo permitido.",
            status=UploadStatus.SIZE_LIMIT_EXCEEDED.value,
        )
        return jsonify(payload.model_dump(exclude_none=True)), 413

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"error": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("unhandled_exception")

        if current_app.config.get("DEBUG"):
            return jsonify({"error": str(err)}), 500

        return jsonify({"error": "Internal server error"}), 500
