# uploader/core/interfaces/temp_file_verifier.py
from __future__ import annotations

from typing import Protocol


class TempFileVerifier(Protocol):
    def is_uploaded_file(self, path: str) -> bool:
        """True só se o caminho foi produzido pelo transporte desta requisição."""
        ...
