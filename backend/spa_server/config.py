"""Application configuration via pydantic-settings."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the backend directory (where this file lives: backend/spa_server/config.py)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_DIR = _BACKEND_DIR.parent

# Default to a SQLite file next to the project
_DEFAULT_DB = f"sqlite+aiosqlite:///{_PROJECT_DIR / 'todos.db'}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database – the todos table lives here; never exposed over HTTP
    DATABASE_URL: str = _DEFAULT_DB
    INIT_DATABASE: bool = True

    # Connection pool (10 connections max, 1h lifetime, 5s acquire timeout)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_RECYCLE: int = 60 * 60
    DB_POOL_TIMEOUT: int = 5
    DB_POOL_PRE_PING: bool = True

    # Frontend bundle loaded into memory at startup
    ASSET_DIR: str = str(_PROJECT_DIR / "frontend" / "build")
    ENTRY_DOCUMENT: str = "index.html"

    # Plain directory served under /assets
    STATIC_DIR: str = str(_PROJECT_DIR / "assets")

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Response layers
    CACHE_CONTROL: str = "public, max-age=86400, immutable"
    GZIP_MINIMUM_SIZE: int = 500

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.DATABASE_URL

    @property
    def is_memory_sqlite(self) -> bool:
        return self.is_sqlite and (":memory:" in self.DATABASE_URL or self.DATABASE_URL.endswith(":///"))


def _build_settings() -> Settings:
    """Build settings, fixing relative paths to be absolute from the project dir."""
    s = Settings(
        _env_file=str(_PROJECT_DIR / ".env"),
        _env_file_encoding="utf-8",
    )
    # Fix relative SQLite path to be absolute from project dir
    if s.is_sqlite and not s.is_memory_sqlite and ":///" in s.DATABASE_URL:
        prefix, db_path = s.DATABASE_URL.split(":///", 1)
        if not os.path.isabs(db_path):
            s.DATABASE_URL = f"{prefix}:///{_PROJECT_DIR / db_path}"
    if not os.path.isabs(s.ASSET_DIR):
        s.ASSET_DIR = str(_PROJECT_DIR / s.ASSET_DIR)
    if not os.path.isabs(s.STATIC_DIR):
        s.STATIC_DIR = str(_PROJECT_DIR / s.STATIC_DIR)
    return s


settings = _build_settings()
