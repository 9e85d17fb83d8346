# uploader/entities/upload.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Union


class TransferError(IntEnum):
    # mesmos códigos que o transporte multipart expõe
    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


@dataclass(frozen=True)
class UploadDescriptor:
    # código cru do transporte (normalmente TransferError)
    error: Optional[Union[int, str]]
    tmp_name: str
    name: str
    size: int
    observed_size: Optional[int] = None


@dataclass(frozen=True)
class StoreRequest:
    target_dir: str
    allowed_types: frozenset[str] = field(default_factory=frozenset)
    max_size_mb: int = 0
    unique_naming: bool = True

    @property
    def max_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024
