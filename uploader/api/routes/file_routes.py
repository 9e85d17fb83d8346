# uploader/api/routes/file_routes.py

from __future__ import annotations

import os
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify, request

from uploader.api.schemas.file_schema import DeleteFileResponse, UploadFileResponse
from uploader.config.settings import Settings
from uploader.core.exceptions import NotFoundError, UploadRejectedError
from uploader.core.outcomes import StoreFailure, UploadStatus
from uploader.infrastructure.mime.filetype_detector import FiletypeMimeDetector
from uploader.infrastructure.storage.local_file_storage import (
    LocalFileStorage,
    LocalFileStorageConfig,
)
from uploader.infrastructure.upload.werkzeug_transport import WerkzeugUploadTransport
from uploader.services.upload_service import UploadPipeline

bp_files = Blueprint("files", __name__)


# status do pipeline -> (http, mensagem)
_HTTP_BY_STATUS: dict[UploadStatus, tuple[int, str]] = {
    UploadStatus.UPLOAD_TRANSFER_ERROR: (400, "Erro no envio do arquivo."),
    UploadStatus.INVALID_TEMPORARY_FILE: (400, "Arquivo temporário inválido."),
    UploadStatus.DISALLOWED_FORMAT: (415, "Formato de arquivo não permitido."),
    UploadStatus.SIZE_LIMIT_EXCEEDED: (413, "Arquivo excede o tamanho máximo permitido."),
    UploadStatus.DIRECTORY_CREATION_FAILED: (500, "Falha ao criar diretório de uploads."),
    UploadStatus.DESTINATION_ALREADY_EXISTS: (409, "Arquivo já existe."),
    UploadStatus.MOVE_FAILED: (500, "Falha ao mover o arquivo."),
    UploadStatus.FILE_NOT_FOUND: (404, "Arquivo não encontrado."),
    UploadStatus.DELETION_FAILED: (500, "Falha ao excluir o arquivo."),
}


# -------------------------
# Helpers
# -------------------------

def _settings() -> Settings:
    return current_app.config["UPLOADER_SETTINGS"]


def _build_storage(cfg: Settings) -> LocalFileStorage:
    return LocalFileStorage(config=LocalFileStorageConfig(base_path=cfg.files_base_path))


def _build_pipeline(cfg: Settings, *, verifier, storage: LocalFileStorage) -> UploadPipeline:
    return UploadPipeline(
        verifier=verifier,
        mime_detector=FiletypeMimeDetector(),
        storage=storage,
        dir_mode=cfg.files_dir_mode,
        name_prefix=cfg.files_name_prefix,
    )


def _target_dir(storage: LocalFileStorage, cfg: Settings) -> str:
    now = datetime.now(timezone.utc)
    return os.path.join(str(storage.base_path), cfg.files_subdir, f"{now.year:04d}", f"{now.month:02d}")


def _reject(status: UploadStatus, *, error_code=None) -> UploadRejectedError:
    http_status, message = _HTTP_BY_STATUS[status]
    return UploadRejectedError(
        message, upload_status=status, status_code=http_status, error_code=error_code
    )


# -------------------------
# Upload
# -------------------------

@bp_files.post("/upload")
def upload_file():
    cfg = _settings()
    storage = _build_storage(cfg)
    file = request.files.get("file")

    with WerkzeugUploadTransport(tmp_dir=cfg.files_tmp_path) as transport:
        descriptor = transport.receive(file)
        pipeline = _build_pipeline(cfg, verifier=transport, storage=storage)

        outcome = pipeline.store(
            _target_dir(storage, cfg),
            descriptor,
            cfg.allowed_mime_types,
            cfg.max_file_size_mb,
            unique_naming=cfg.files_unique_naming,
        )

    if isinstance(outcome, StoreFailure):
        raise _reject(outcome.status, error_code=outcome.error_code)

    payload = UploadFileResponse(
        file_path=outcome.file_path,
        stored_name=storage.stored_name_for(outcome.file_path),
        original_name=descriptor.name,
        size_bytes=descriptor.observed_size or descriptor.size,
    ).model_dump()
    return jsonify(payload), 201


# -------------------------
# Delete
# -------------------------

@bp_files.delete("")
def delete_file():
    cfg = _settings()
    storage = _build_storage(cfg)

    stored_name = (request.args.get("path") or "").strip()
    if not stored_name:
        raise NotFoundError("Arquivo não encontrado.")

    try:
        abs_path = storage.abs_path_from_stored(stored_name)
    except ValueError:
        raise NotFoundError("Arquivo não encontrado.")

    # remove() não usa o transporte; nenhum temporário é aceito aqui
    pipeline = _build_pipeline(cfg, verifier=_NoUploads(), storage=storage)
    outcome = pipeline.remove(str(abs_path))
    if not outcome.ok:
        raise _reject(outcome.status)

    return jsonify(DeleteFileResponse().model_dump()), 200


class _NoUploads:
    def is_uploaded_file(self, path: str) -> bool:
        return False
