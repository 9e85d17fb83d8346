# uploader/core/interfaces/mime_detector.py
from __future__ import annotations

from typing import Protocol


DEFAULT_MIME_TYPE = "application/octet-stream"


class MimeDetector(Protocol):
    def detect(self, path: str) -> str:
        ...
