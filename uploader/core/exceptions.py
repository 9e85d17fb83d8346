# uploader/core/exceptions.py
from __future__ import annotations

from uploader.core.outcomes import UploadStatus


class AppError(Exception):
    def __init__(self, message: str, *, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class UploadRejectedError(AppError):
    """Falha do pipeline convertida para a camada HTTP (mantém o status original)."""

    def __init__(
        self,
        message: str,
        *,
        upload_status: UploadStatus,
        status_code: int = 400,
        error_code: int | str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.upload_status = upload_status
        self.error_code = error_code


# -------------------------
# Storage (uso interno: adapter -> pipeline)
# -------------------------

class StorageError(Exception):
    pass


class DirectoryCreationError(StorageError):
    pass


class DestinationExistsError(StorageError):
    pass


class MoveError(StorageError):
    pass


class DeletionError(StorageError):
    pass
