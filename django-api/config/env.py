"""
Environment settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# .env next to django-api/
_env_path = Path(__file__).resolve().parent.parent / ".env"


class FloorEnv(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FLOOR_", env_file=_env_path, extra="ignore")

    secret_key: str = "dev-only-insecure-key"
    debug: bool = False
    allowed_hosts: list[str] = ["localhost", "127.0.0.1"]
    time_zone: str = "Asia/Kolkata"
    log_level: str = "INFO"

    db_engine: str = "django.db.backends.sqlite3"
    db_name: str = str(Path(__file__).resolve().parent.parent / "db.sqlite3")
    db_user: str = ""
    db_password: str = ""
    db_host: str = ""
    db_port: str = ""
    # Seconds a SQLite writer waits for the database lock.
    db_timeout: int = 20

    booking_poll_seconds: int = 30
    booking_converter_autostart: bool = False
    default_session_minutes: int = 60
    cache_seconds: int = 30

    @field_validator("log_level", mode="after")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()


env = FloorEnv()
