# uploader/services/upload_service.py
from __future__ import annotations

import logging
import os
from enum import IntEnum
from typing import Iterable

from uploader.core.exceptions import (
    DeletionError,
    DestinationExistsError,
    DirectoryCreationError,
    MoveError,
)
from uploader.core.interfaces.mime_detector import MimeDetector
from uploader.core.interfaces.temp_file_verifier import TempFileVerifier
from uploader.core.naming import DEFAULT_NAME_PREFIX, resolve_filename
from uploader.core.outcomes import (
    UNKNOWN_ERROR_CODE,
    DeleteFailure,
    DeleteOutcome,
    DeleteSuccess,
    StoreFailure,
    StoreOutcome,
    StoreSuccess,
    UploadStatus,
)
from uploader.entities.upload import StoreRequest, TransferError, UploadDescriptor
from uploader.infrastructure.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)

DEFAULT_DIR_MODE = 0o755


class UploadPipeline:
    """
    Valida e persiste um arquivo já recebido pelo transporte.

    A ordem das checagens em store() é contrato: para uma entrada inválida em
    mais de um ponto, a primeira falha da lista é a reportada.
    Nenhuma exceção sai daqui; toda falha volta como StoreFailure/DeleteFailure.
    """

    def __init__(
        self,
        *,
        verifier: TempFileVerifier,
        mime_detector: MimeDetector,
        storage: FileStorage,
        dir_mode: int = DEFAULT_DIR_MODE,
        name_prefix: str = DEFAULT_NAME_PREFIX,
    ) -> None:
        self._verifier = verifier
        self._mime_detector = mime_detector
        self._storage = storage
        self._dir_mode = dir_mode
        self._name_prefix = name_prefix

    def store(
        self,
        target_dir: str,
        descriptor: UploadDescriptor,
        allowed_types: Iterable[str],
        max_size_mb: int,
        unique_naming: bool = True,
    ) -> StoreOutcome:
        request = StoreRequest(
            target_dir=target_dir,
            allowed_types=frozenset(allowed_types),
            max_size_mb=max_size_mb,
            unique_naming=unique_naming,
        )
        return self.store_request(request, descriptor)

    def store_request(self, request: StoreRequest, descriptor: UploadDescriptor) -> StoreOutcome:
        # 1) transporte
        if descriptor.error is None or descriptor.error != TransferError.OK:
            code = descriptor.error
            if code is None:
                code = UNKNOWN_ERROR_CODE
            elif isinstance(code, IntEnum):
                code = int(code)
            return self._fail(UploadStatus.UPLOAD_TRANSFER_ERROR, error_code=code)

        # 2) o temporário tem que ser do transporte (evita injeção de caminho)
        if not self._verifier.is_uploaded_file(descriptor.tmp_name):
            return self._fail(UploadStatus.INVALID_TEMPORARY_FILE)

        # 3/4) MIME pelo conteúdo
        mime = self._mime_detector.detect(descriptor.tmp_name)
        if mime not in request.allowed_types:
            logger.debug("upload_mime_rejected", extra={"mime": mime})
            return self._fail(UploadStatus.DISALLOWED_FORMAT)

        # 5) tamanho (igual ao limite é aceito)
        if descriptor.size > request.max_bytes:
            return self._fail(UploadStatus.SIZE_LIMIT_EXCEEDED)

        # 6) diretório
        if not self._storage.is_dir(request.target_dir):
            try:
                self._storage.make_dirs(request.target_dir, mode=self._dir_mode)
            except DirectoryCreationError as e:
                logger.debug("upload_dir_error", extra={"error": str(e)})
                return self._fail(UploadStatus.DIRECTORY_CREATION_FAILED)

        # 7) nome
        file_name = resolve_filename(
            descriptor.name, unique=request.unique_naming, prefix=self._name_prefix
        )
        destination = os.path.join(request.target_dir, file_name)

        # 8) nunca sobrescreve
        if self._storage.exists(destination):
            return self._fail(UploadStatus.DESTINATION_ALREADY_EXISTS)

        # 9) move
        try:
            self._storage.move_exclusive(descriptor.tmp_name, destination)
        except DestinationExistsError:
            return self._fail(UploadStatus.DESTINATION_ALREADY_EXISTS)
        except MoveError as e:
            logger.debug("upload_move_error", extra={"error": str(e)})
            return self._fail(UploadStatus.MOVE_FAILED)

        file_path = destination.replace("\\", "/")
        logger.info("upload_stored", extra={"status": UploadStatus.SUCCESS.value, "mime": mime})
        return StoreSuccess(file_path=file_path)

    def remove(self, file_path: str) -> DeleteOutcome:
        path = file_path.replace("\\", os.sep).replace("/", os.sep)

        if not self._storage.exists(path):
            return self._fail_delete(UploadStatus.FILE_NOT_FOUND)

        try:
            self._storage.delete(path)
        except DeletionError as e:
            logger.debug("delete_error", extra={"error": str(e)})
            return self._fail_delete(UploadStatus.DELETION_FAILED)

        logger.info("file_deleted", extra={"status": UploadStatus.SUCCESS.value})
        return DeleteSuccess()

    def _fail(self, status: UploadStatus, *, error_code: int | str | None = None) -> StoreFailure:
        logger.warning("upload_rejected", extra={"status": status.value, "error_code": error_code})
        return StoreFailure(status=status, error_code=error_code)

    def _fail_delete(self, status: UploadStatus) -> DeleteFailure:
        logger.warning("delete_rejected", extra={"status": status.value})
        return DeleteFailure(status=status)
