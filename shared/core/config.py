import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from the repository root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", 480))  # 8 hours

    # Credentials for the built-in accounts
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")
    WAREHOUSE_PASSWORD: str | None = os.getenv("WAREHOUSE_PASSWORD")

    # Snapshot storage: "json" (single document) or "sql"
    SNAPSHOT_BACKEND: str = os.getenv("SNAPSHOT_BACKEND", "json")
    DATA_FILE: str = os.getenv("DATA_FILE", os.path.join(BASE_DIR, "data.json"))
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./inventory.db")

    CORS_ORIGINS: List[str] = [
        "http://localhost:8080",
        "http://127.0.0.1:8080",
        "http://localhost:3000",
    ]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
