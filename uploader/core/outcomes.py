# uploader/core/outcomes.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union


class UploadStatus(str, Enum):
    # valores estáveis: clientes antigos comparam estas strings
    SUCCESS = "success"

    UPLOAD_TRANSFER_ERROR = "erro_no_upload"
    INVALID_TEMPORARY_FILE = "arquivo_temporario_invalido"
    DISALLOWED_FORMAT = "formato_nao_permitido"
    SIZE_LIMIT_EXCEEDED = "tamanho_maximo_excedido"
    DIRECTORY_CREATION_FAILED = "falha_criacao_diretorio"
    DESTINATION_ALREADY_EXISTS = "arquivo_ja_existe"
    MOVE_FAILED = "falha_movimentacao"

    FILE_NOT_FOUND = "arquivo_nao_encontrado"
    DELETION_FAILED = "falha_exclusao"


STORE_FAILURES = frozenset(
    {
        UploadStatus.UPLOAD_TRANSFER_ERROR,
        UploadStatus.INVALID_TEMPORARY_FILE,
        UploadStatus.DISALLOWED_FORMAT,
        UploadStatus.SIZE_LIMIT_EXCEEDED,
        UploadStatus.DIRECTORY_CREATION_FAILED,
        UploadStatus.DESTINATION_ALREADY_EXISTS,
        UploadStatus.MOVE_FAILED,
    }
)

DELETE_FAILURES = frozenset({UploadStatus.FILE_NOT_FOUND, UploadStatus.DELETION_FAILED})

UNKNOWN_ERROR_CODE = "desconhecido"


@dataclass(frozen=True)
class StoreSuccess:
    file_path: str
    status: Literal[UploadStatus.SUCCESS] = field(default=UploadStatus.SUCCESS, init=False)
    ok: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value, "file_path": self.file_path}


@dataclass(frozen=True)
class StoreFailure:
    status: UploadStatus
    # só preenchido para UPLOAD_TRANSFER_ERROR
    error_code: int | str | None = None
    ok: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.status not in STORE_FAILURES:
            raise ValueError(f"Status inválido para falha de upload: {self.status!r}")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"status": self.status.value}
        if self.error_code is not None:
            payload["error_code"] = self.error_code
        return payload


@dataclass(frozen=True)
class DeleteSuccess:
    status: Literal[UploadStatus.SUCCESS] = field(default=UploadStatus.SUCCESS, init=False)
    ok: bool = field(default=True, init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value}


@dataclass(frozen=True)
class DeleteFailure:
    status: UploadStatus
    ok: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.status not in DELETE_FAILURES:
            raise ValueError(f"Status inválido para falha de exclusão: {self.status!r}")

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status.value}


StoreOutcome = Union[StoreSuccess, StoreFailure]
DeleteOutcome = Union[DeleteSuccess, DeleteFailure]
