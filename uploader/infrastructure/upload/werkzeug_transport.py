# uploader/infrastructure/upload/werkzeug_transport.py
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from werkzeug.datastructures import FileStorage as WzFileStorage

from uploader.core.interfaces.temp_file_verifier import TempFileVerifier
from uploader.entities.upload import TransferError, UploadDescriptor

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1MB


class WerkzeugUploadTransport(TempFileVerifier):
    """
    Recebe o FileStorage do werkzeug num arquivo temporário próprio e gera o
    UploadDescriptor consumido pelo pipeline.

    Uma instância por requisição: só os caminhos criados por ela são aceitos
    em is_uploaded_file, e o que não foi movido é apagado no close().
    """

    def __init__(self, *, tmp_dir: str) -> None:
        self._tmp_dir = Path(tmp_dir).expanduser().resolve()
        self._paths: set[str] = set()

    def __enter__(self) -> "WerkzeugUploadTransport":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def receive(self, file: WzFileStorage | None) -> UploadDescriptor:
        name = (file.filename or "") if file is not None else ""
        if file is None or not name.strip():
            return UploadDescriptor(error=TransferError.NO_FILE, tmp_name="", name=name, size=0)

        try:
            self._tmp_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix="upl_", dir=str(self._tmp_dir))
        except OSError as e:
            logger.error("upload_tmp_dir_unavailable", extra={"error": str(e)})
            return UploadDescriptor(error=TransferError.NO_TMP_DIR, tmp_name="", name=name, size=0)

        self._paths.add(tmp_path)

        written = 0
        try:
            with os.fdopen(fd, "wb") as out:
                while True:
                    chunk = file.stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    out.write(chunk)
                    written += len(chunk)
        except OSError as e:
            logger.error("upload_tmp_write_failed", extra={"error": str(e)})
            return UploadDescriptor(
                error=TransferError.CANT_WRITE, tmp_name=tmp_path, name=name, size=written
            )

        # o tamanho do part (se veio) não pode esconder o que realmente chegou
        declared = max(file.content_length or 0, written)
        return UploadDescriptor(
            error=TransferError.OK,
            tmp_name=tmp_path,
            name=name,
            size=declared,
            observed_size=written,
        )

    def is_uploaded_file(self, path: str) -> bool:
        if not path or path not in self._paths:
            return False
        if not os.path.isfile(path) or os.path.islink(path):
            return False

        real = os.path.realpath(path)
        return real.startswith(str(self._tmp_dir) + os.sep)

    def close(self) -> None:
        for path in list(self._paths):
            if os.path.exists(path):
                try:
                    os.unlink(path)
                except OSError as e:
                    logger.warning("upload_tmp_cleanup_failed", extra={"error": str(e)})
                    continue
            self._paths.discard(path)
