# stockwatch/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./stockwatch.db"
    AUTO_CREATE_TABLES: bool = True

    # Frontend
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    LEDGER_RATE_LIMIT: str = "60/minute"

    # Reports
    EXPIRATION_WINDOW_DAYS: int = 7

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
