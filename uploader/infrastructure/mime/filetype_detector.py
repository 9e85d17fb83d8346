# uploader/infrastructure/mime/filetype_detector.py
from __future__ import annotations

import filetype

from uploader.core.interfaces.mime_detector import DEFAULT_MIME_TYPE, MimeDetector


class FiletypeMimeDetector(MimeDetector):
    """MIME pelo conteúdo (magic bytes), nunca pelo content-type do cliente."""

    def __init__(self, *, fallback: str = DEFAULT_MIME_TYPE) -> None:
        self._fallback = fallback

    def detect(self, path: str) -> str:
        try:
            mime = filetype.guess_mime(path)
        except OSError:
            return self._fallback
        return mime or self._fallback
