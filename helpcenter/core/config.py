from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "helpcenter"
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str
    DB_ECHO: bool = False

    # Dev/SQLite convenience. Real deployments run `alembic upgrade head`.
    CREATE_SCHEMA_ON_STARTUP: bool = False

    # In unit tests / CI we avoid long startup retries against the database.
    WAIT_FOR_DB_ON_STARTUP: bool = True

    DOCS_CONTACT_EMAIL: str = "mail@example.com"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
