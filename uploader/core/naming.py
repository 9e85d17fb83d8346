# uploader/core/naming.py
from __future__ import annotations

import re
import secrets
import time

DEFAULT_NAME_PREFIX = "file_"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_\-.]")


def unique_token() -> str:
    # segundos + microssegundos em hex, mais um sufixo aleatório
    now_ns = time.time_ns()
    sec, usec = divmod(now_ns // 1000, 1_000_000)
    return f"{sec:08x}{usec:05x}{secrets.token_hex(4)}"


def extract_extension(original_name: str) -> str:
    """Extensão do nome declarado pelo cliente, em minúsculas (sem o ponto)."""
    base = (original_name or "").replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[1].lower()


def sanitize_filename(original_name: str) -> str:
    return _UNSAFE_CHARS.sub("_", original_name or "")


def build_unique_name(original_name: str, *, prefix: str = DEFAULT_NAME_PREFIX) -> str:
    # a extensão vem do cliente e NÃO é conferida contra o MIME detectado
    ext = extract_extension(original_name)
    stem = f"{prefix}{unique_token()}"
    return f"{stem}.{ext}" if ext else stem


def resolve_filename(original_name: str, *, unique: bool, prefix: str = DEFAULT_NAME_PREFIX) -> str:
    if unique:
        return build_unique_name(original_name, prefix=prefix)
    return sanitize_filename(original_name)
