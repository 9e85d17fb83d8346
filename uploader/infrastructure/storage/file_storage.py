# uploader/infrastructure/storage/file_storage.py
from __future__ import annotations

from typing import Protocol


class FileStorage(Protocol):
    def is_dir(self, path: str) -> bool:
        raise NotImplementedError

    def exists(self, path: str) -> bool:
        raise NotImplementedError

    def make_dirs(self, path: str, *, mode: int) -> None:
        """Cria o diretório (e os pais). Levanta DirectoryCreationError se falhar."""
        raise NotImplementedError

    def move_exclusive(self, src: str, dst: str) -> None:
        """
        Move src -> dst sem nunca sobrescrever dst.
        Levanta DestinationExistsError se dst já existir, MoveError para o resto.
        """
        raise NotImplementedError

    def delete(self, path: str) -> None:
        """Remove um arquivo (não recursivo). Levanta DeletionError se falhar."""
        raise NotImplementedError
