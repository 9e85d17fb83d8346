# uploader/infrastructure/storage/local_file_storage.py
from __future__ import annotations

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from uploader.core.exceptions import (
    DeletionError,
    DestinationExistsError,
    DirectoryCreationError,
    MoveError,
)
from uploader.infrastructure.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)

# erros em que o hard link não é possível e caímos para cópia exclusiva
_LINK_UNSUPPORTED = {
    errno.EXDEV,
    errno.EPERM,
    errno.EMLINK,
    getattr(errno, "ENOTSUP", errno.EOPNOTSUPP),
    errno.EOPNOTSUPP,
}


@dataclass(frozen=True)
class LocalFileStorageConfig:
    base_path: str | None = None


class LocalFileStorage(FileStorage):
    def __init__(self, *, config: LocalFileStorageConfig | None = None) -> None:
        raw = ((config.base_path if config else None) or "").strip()
        self._base = Path(raw).expanduser().resolve() if raw else None

    @property
    def base_path(self) -> Path | None:
        return self._base

    def abs_path_from_stored(self, stored_name: str) -> Path:
        # stored_name deve ser relativo à base (ex.: uploads/2026/01/file_x.png)
        if self._base is None:
            raise ValueError("Storage sem base configurada.")

        rel = Path(stored_name.replace("\\", "/"))
        abs_path = (self._base / rel).resolve()

        # anti path traversal
        base_str = str(self._base)
        abs_str = str(abs_path)
        if not abs_str.startswith(base_str + os.sep):
            raise ValueError("stored_name inválido (path traversal).")

        return abs_path

    def stored_name_for(self, abs_path: str) -> str:
        if self._base is None:
            raise ValueError("Storage sem base configurada.")
        return Path(abs_path).resolve().relative_to(self._base).as_posix()

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def make_dirs(self, path: str, *, mode: int) -> None:
        try:
            os.makedirs(path, mode=mode)
        except FileExistsError:
            # outro processo criou antes; a checagem abaixo decide
            pass
        except OSError as e:
            if not os.path.isdir(path):
                raise DirectoryCreationError(f"Falha ao criar diretório: {e}") from e
            return
        else:
            # makedirs aplica a umask; garante o modo pedido no diretório final
            try:
                os.chmod(path, mode)
            except OSError as e:
                logger.warning("chmod_failed", extra={"mode": oct(mode), "error": str(e)})

        if not os.path.isdir(path):
            raise DirectoryCreationError("Caminho existe e não é um diretório.")

    def move_exclusive(self, src: str, dst: str) -> None:
        try:
            os.link(src, dst)
        except FileExistsError as e:
            raise DestinationExistsError("Arquivo de destino já existe.") from e
        except OSError as e:
            if e.errno not in _LINK_UNSUPPORTED:
                raise MoveError(f"Falha ao mover arquivo: {e}") from e
            self._copy_exclusive(src, dst)

        try:
            os.unlink(src)
        except OSError as e:
            # não deixa o arquivo nos dois lugares
            self._discard(dst)
            raise MoveError(f"Falha ao remover arquivo temporário: {e}") from e

    def _copy_exclusive(self, src: str, dst: str) -> None:
        try:
            out = open(dst, "xb")
        except FileExistsError as e:
            raise DestinationExistsError("Arquivo de destino já existe.") from e
        except OSError as e:
            raise MoveError(f"Falha ao criar arquivo de destino: {e}") from e

        try:
            with out, open(src, "rb") as fin:
                shutil.copyfileobj(fin, out, 1024 * 1024)  # 1MB
            shutil.copymode(src, dst)
        except OSError as e:
            self._discard(dst)
            raise MoveError(f"Falha ao copiar arquivo: {e}") from e

    def _discard(self, path: str) -> None:
        # melhor esforço: remove arquivo parcial se existir
        try:
            if os.path.isfile(path):
                os.unlink(path)
        except OSError as e:
            logger.error("partial_file_cleanup_failed", extra={"error": str(e)})

    def delete(self, path: str) -> None:
        try:
            os.remove(path)
        except OSError as e:
            raise DeletionError(f"Falha ao excluir arquivo: {e}") from e
