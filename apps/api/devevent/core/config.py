import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "y", "on"}


def _int(val: str | None, default: int) -> int:
    if val is None or not val.strip():
        return default
    return int(val)


def _csv(val: str | None, default: list[str]) -> list[str]:
    if not val:
        return default
    return [v.strip() for v in val.split(",") if v.strip()]


@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "local")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database. No default: a missing connection string must stop the app.
    database_url: str | None = os.getenv("DATABASE_URL") or None
    db_pool_timeout_seconds: int = _int(os.getenv("DB_POOL_TIMEOUT_SECONDS"), 5)
    db_echo: bool = _bool(os.getenv("DB_ECHO"))
    create_schema_on_startup: bool = _bool(
        os.getenv("CREATE_SCHEMA_ON_STARTUP"),
        default=(os.getenv("ENV", "local") == "local"),
    )

    # CORS
    cors_allow_origins: list[str] = field(
        default_factory=lambda: _csv(
            os.getenv("CORS_ALLOW_ORIGINS"),
            default=["http://localhost:3000", "http://127.0.0.1:3000"],
        )
    )

    # Security headers
    security_headers_enabled: bool = _bool(
        os.getenv("SECURITY_HEADERS_ENABLED"),
        default=True,
    )


settings = Settings()
