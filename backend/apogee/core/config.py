"""
Pydantic Settings — centralized configuration loaded from environment variables.

One settings object serves all three services; ``SERVICE_NAME`` picks which
one ``apogee.main:app`` builds, and each deployment points the POSTGRES_*
variables at the database that service owns.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Service identity ──────────────────────
    SERVICE_NAME: str = "quoting"  # quoting | benefit_designer | customer

    # ── Database (one schema per service) ─────
    POSTGRES_USER: str = "apogee_user"
    POSTGRES_PASSWORD: str = "apogee_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "apogee_quoting"

    @property
    def DATABASE_URL(self) -> str:
        """Async URL for app runtime (asyncpg)."""
        return f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    @property
    def DATABASE_URL_SYNC(self) -> str:
        """Sync URL for Alembic migrations (psycopg2)."""
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # ── Collaborator services ─────────────────
    QUOTING_SERVICE_URL: str = "http://localhost:8001"
    CUSTOMER_SERVICE_URL: str = "http://localhost:8002"
    BENEFIT_DESIGNER_URL: str = "http://localhost:8003"
    INTERNAL_SERVICE_KEY: str = "dev-secret-key"
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0

    # ── Auth / JWT ────────────────────────────
    JWT_SECRET_KEY: str = "change-this-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 480
    PORTAL_URL: str = "http://localhost:3000"
    SERVICE_TOKEN_COOKIE: str = "service_token"

    # ── Application ───────────────────────────
    APP_ENV: str = "development"

    model_config = {"env_file": ["../.env", ".env"], "extra": "ignore"}


settings = Settings()
