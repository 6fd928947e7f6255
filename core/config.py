from __future__ import annotations

import os

from pydantic import BaseModel


class Settings(BaseModel):
    SECRET_KEY: str = os.getenv("JWT_SECRET", "dev-change-me")
    ACCESS_TOKEN_EXPIRE_MIN: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MIN", "1440"))
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    MONGO_DB: str = os.getenv("MONGO_DB", "family_pension_db")
    # "mongo" or "memory"
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "mongo")

    # calendar months for chart buckets are taken in this zone
    REPORT_TIMEZONE: str = os.getenv("REPORT_TIMEZONE", "UTC")

    DEFAULT_ADMIN_USERNAME: str = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
    DEFAULT_ADMIN_PASSWORD: str = os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123")
    DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@pagmumbai.gov.in")

    CORS_ALLOW_ORIGINS: list[str] = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(
        ","
    )
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
