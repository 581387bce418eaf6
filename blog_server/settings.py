from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    DOCS_DIR: str = "docs"
    TEMPLATES_DIR: str = "templates"
    PUBLIC_DIR: str = "public"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def docs_path(self) -> Path:
        return Path(self.DOCS_DIR)

    @property
    def templates_path(self) -> Path:
        return Path(self.TEMPLATES_DIR)

    @property
    def public_path(self) -> Path:
        return Path(self.PUBLIC_DIR)
