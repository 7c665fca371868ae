import os
from pathlib import Path

# Basic settings helper to read environment configuration.

_DEFAULT_DB_PATH = Path(__file__).resolve().parent / "app.db"


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_list(val: str | None, default: list[str]) -> list[str]:
    if not val:
        return default
    return [item.strip() for item in val.split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{_DEFAULT_DB_PATH}")
        self.SQL_ECHO: bool = _as_bool(os.getenv("SQL_ECHO"), False)
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.CORS_ALLOW_ORIGINS: list[str] = _as_list(os.getenv("CORS_ALLOW_ORIGINS"), ["*"])


settings = Settings()
