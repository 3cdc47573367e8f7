"""
Pydantic Settings — centralized configuration loaded from environment variables.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ──────────────────────────────
    # Any async SQLAlchemy URL; sqlite+aiosqlite for local runs,
    # postgresql+asyncpg in deployment.
    DATABASE_URL: str = "sqlite+aiosqlite:///./gym.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: float = 30.0

    @property
    def is_sqlite(self) -> bool:
        """True when the configured store is SQLite (no server-side pool)."""
        return self.DATABASE_URL.startswith("sqlite")

    # ── Bootstrap ─────────────────────────────
    AUTO_BOOTSTRAP: bool = True
    DEFAULT_BATCH_CAPACITY: int = 30
    DEFAULT_MONTHLY_FEE: Decimal = Decimal("1000.00")

    # ── Application ───────────────────────────
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
