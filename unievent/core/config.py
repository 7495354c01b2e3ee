# unievent/core/config.py
import os
import re
from typing import ClassVar
from pydantic import BaseModel, Field

from dotenv import load_dotenv

load_dotenv()

_SIZE_UNITS = {"": 1, "b": 1, "k": 1024, "kb": 1024, "m": 1024 ** 2, "mb": 1024 ** 2, "g": 1024 ** 3, "gb": 1024 ** 3}

def parse_size(value: str) -> int:
    """'10mb' -> 10485760; plain digits are bytes."""
    m = re.fullmatch(r"\s*(\d+)\s*([kmg]?b?)\s*", (value or "").lower())
    if not m:
        raise ValueError(f"Invalid size: {value!r}")
    return int(m.group(1)) * _SIZE_UNITS[m.group(2)]

def normalize_database_url(url: str) -> str:
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url and url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url

def _data_dir() -> str:
    return os.path.abspath(os.getenv("DATA_DIR", "./data"))

def _default_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url and url.strip():
        return normalize_database_url(url.strip())
    host = os.getenv("DB_HOST")
    if host:
        user = os.getenv("DB_USER", "postgres")
        password = os.getenv("DB_PASSWORD", "")
        port = os.getenv("DB_PORT", "5432")
        name = os.getenv("DB_NAME", "unievent")
        auth = f"{user}:{password}" if password else user
        return f"postgresql+psycopg://{auth}@{host}:{port}/{name}"
    data_dir = _data_dir()
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'events.db')}"

def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}

class Settings(BaseModel):
    DATA_DIR: ClassVar[str] = _data_dir()
    API_PREFIX: ClassVar[str] = "/api/v1"

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY") or os.getenv("JWT_SECRET") or "CHANGE_ME_SUPER_SECRET")
    ALGORITHM: str = "HS256"
    # one day, same window as the issued credentials have always had
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")))
    PORT: int = Field(default_factory=lambda: int(os.getenv("PORT", "5000")))
    FRONTEND_URL: str = Field(default_factory=lambda: os.getenv("FRONTEND_URL", "*"))
    MAX_BODY_SIZE: int = Field(default_factory=lambda: parse_size(os.getenv("MAX_BODY_SIZE", "10mb")))
    ENVIRONMENT: str = Field(default_factory=lambda: os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "development")))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(default_factory=lambda: _env_bool("RUN_MIGRATIONS_ON_STARTUP", "true"))
    SEED_DEMO: bool = Field(default_factory=lambda: _env_bool("SEED_DEMO", "false"))

    @property
    def uploads_dir(self) -> str:
        return os.path.join(self.DATA_DIR, "uploads")

    @property
    def certificates_dir(self) -> str:
        return os.path.join(self.DATA_DIR, "certificates")

    @property
    def allowed_origins(self) -> list[str]:
        return [o.strip() for o in self.FRONTEND_URL.split(",") if o.strip()] or ["*"]

settings = Settings()
