# uploader/config/settings.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    app_prefix: str = "/apps/file-uploader"

    files_base_path: str = "./_uploads"
    files_subdir: str = "uploads"
    files_tmp_path: str = "./_uploads/.tmp"
    files_unique_naming: bool = True
    files_name_prefix: str = "file_"
    max_file_size_mb: int = 20

    # modo dos diretórios criados (octal, ex.: "0755")
    files_dir_mode_raw: str = Field(default="0755", validation_alias="FILES_DIR_MODE")

    # Whitelist de tipos permitidos (comparados com o MIME detectado pelo conteúdo)
    # Ex: "application/pdf,image/png,image/jpeg"
    # O detector só reconhece assinaturas binárias: text/plain, text/csv e
    # image/svg+xml chegam como application/octet-stream e nunca casam aqui.
    allowed_mime_types_raw: str = Field(
        default=",".join(
            [
                # PDFs
                "application/pdf",

                # Imagens
                "image/png",
                "image/jpeg",
                "image/gif",
                "image/webp",
            ]
        ),
        validation_alias="ALLOWED_MIME_TYPES",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("files_base_path", "files_tmp_path", "files_subdir", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("files_subdir")
    @classmethod
    def check_subdir(cls, v: str) -> str:
        # relativo à base e sem "..": o arquivo salvo tem que ficar dentro de FILES_BASE_PATH
        parts = v.replace("\\", "/").split("/")
        if v.startswith(("/", "\\")) or ":" in v or ".." in parts:
            raise ValueError(f"FILES_SUBDIR inválido: {v!r}")
        return v

    @field_validator("files_dir_mode_raw")
    @classmethod
    def check_dir_mode(cls, v: str) -> str:
        try:
            mode = int(v.strip(), 8)
        except ValueError as e:
            raise ValueError(f"FILES_DIR_MODE inválido: {v!r}") from e
        if not 0 <= mode <= 0o7777:
            raise ValueError(f"FILES_DIR_MODE fora do intervalo: {v!r}")
        return v.strip()

    @field_validator("max_file_size_mb")
    @classmethod
    def check_max_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("MAX_FILE_SIZE_MB não pode ser negativo.")
        return v

    @property
    def files_dir_mode(self) -> int:
        return int(self.files_dir_mode_raw, 8)

    @property
    def allowed_mime_types(self) -> frozenset[str]:
        raw = (self.allowed_mime_types_raw or "").strip()
        if not raw:
            return frozenset()
        parts = [p.strip() for p in raw.split(",")]
        return frozenset(p for p in parts if p)

    @property
    def api_prefix(self) -> str:
        return f"{self.app_prefix.rstrip('/')}/api"


settings = Settings()
