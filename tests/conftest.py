# tests/conftest.py
from __future__ import annotations

import os
import struct
import zlib

import pytest

from uploader.entities.upload import TransferError, UploadDescriptor
from uploader.infrastructure.mime.filetype_detector import FiletypeMimeDetector
from uploader.infrastructure.storage.local_file_storage import LocalFileStorage
from uploader.services.upload_service import UploadPipeline


def _png_header() -> bytes:
    ihdr = struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0)
    crc = struct.pack(">I", zlib.crc32(b"IHDR" + ihdr) & 0xFFFFFFFF)
    return b"\x89PNG\r\n\x1a\n" + struct.pack(">I", len(ihdr)) + b"IHDR" + ihdr + crc


PNG_HEADER = _png_header()
JPEG_HEADER = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"


def make_png(size: int) -> bytes:
    return PNG_HEADER + b"\x00" * max(0, size - len(PNG_HEADER))


def make_jpeg(size: int) -> bytes:
    return JPEG_HEADER + b"\x00" * max(0, size - len(JPEG_HEADER))


class StubVerifier:
    """Aceita só os caminhos registrados (faz o papel do transporte)."""

    def __init__(self) -> None:
        self.accepted: set[str] = set()

    def is_uploaded_file(self, path: str) -> bool:
        return path in self.accepted and os.path.isfile(path)


@pytest.fixture
def verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture
def storage() -> LocalFileStorage:
    return LocalFileStorage()


@pytest.fixture
def pipeline(verifier, storage) -> UploadPipeline:
    return UploadPipeline(
        verifier=verifier,
        mime_detector=FiletypeMimeDetector(),
        storage=storage,
        dir_mode=0o755,
    )


@pytest.fixture
def tmp_upload_dir(tmp_path):
    d = tmp_path / "upload_tmp"
    d.mkdir()
    return d


@pytest.fixture
def make_upload(tmp_upload_dir, verifier):
    counter = {"n": 0}

    def _make(
        content: bytes,
        name: str = "photo.png",
        *,
        error: int | str | None = TransferError.OK,
        size: int | None = None,
        register: bool = True,
    ) -> UploadDescriptor:
        counter["n"] += 1
        tmp = tmp_upload_dir / f"upl_{counter['n']}"
        tmp.write_bytes(content)
        if register:
            verifier.accepted.add(str(tmp))
        return UploadDescriptor(
            error=error,
            tmp_name=str(tmp),
            name=name,
            size=len(content) if size is None else size,
            observed_size=len(content),
        )

    return _make
