# uploader/api/schemas/file_schema.py
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, Field


class UploadFileResponse(BaseModel):
    status: str = "success"
    file_path: str = Field(min_length=1)
    stored_name: str = Field(min_length=1)
    original_name: str = Field(min_length=1)
    size_bytes: int


class DeleteFileResponse(BaseModel):
    status: str = "success"


class ErrorResponse(BaseModel):
    error: str
    status: Optional[str] = None
    error_code: Optional[Union[int, str]] = None
