# backend/stockroom/core/config.py

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_ENV: str = "dev"

    DATABASE_URL: str = "sqlite:///./inventory.db"

    # Prefer a comma-separated allowlist in prod, fallback to FRONTEND_URL/local
    # Example: CORS_ORIGINS="https://stockroom.example.com,http://localhost:3000"
    CORS_ORIGINS: str = ""
    FRONTEND_URL: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"

    # dev convenience; deployments run alembic instead
    AUTO_CREATE_TABLES: bool = True

    DEAD_STOCK_DAYS: int = 90

    class Config:
        env_file = ".env"
        case_sensitive = True

    def allow_origins(self) -> list[str]:
        cors_env = self.CORS_ORIGINS.strip()
        if cors_env:
            return [o.strip() for o in cors_env.split(",") if o.strip()]
        frontend_url = self.FRONTEND_URL.strip()
        return sorted({frontend_url, "http://localhost:3000"})
