"""
Configuration helpers for the lease backend.

Settings are read once from environment variables so that routers/services do
not fetch os.environ directly. Tests call ``get_settings.cache_clear()`` after
changing the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

_DEV_ORIGINS = (
    "http://localhost:8000",
    "http://127.0.0.1:8000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    db_isolation_level: str
    log_level: str
    max_active_leases: int
    report_title: str
    cors_origins: tuple[str, ...]
    auto_create_tables: bool
    seed_demo_users: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    origins = {o.strip().rstrip("/") for o in (os.getenv("CORS_ORIGINS") or "").split(",") if o.strip()}
    if app_env != "prod":
        origins.update(_DEV_ORIGINS)
    max_active = _int(os.getenv("MAX_ACTIVE_LEASES", "2"), 2)

    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./leases.db"),
        db_isolation_level=(os.getenv("DB_ISOLATION_LEVEL") or "SERIALIZABLE").upper(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        max_active_leases=max_active if max_active > 0 else 2,
        report_title=os.getenv("REPORT_TITLE", "Car Lease History"),
        cors_origins=tuple(sorted(origins)),
        auto_create_tables=_bool(os.getenv("AUTO_CREATE_TABLES"), True),
        seed_demo_users=_bool(os.getenv("SEED_DEMO_USERS"), False),
    )
