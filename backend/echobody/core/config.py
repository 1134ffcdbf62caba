# echobody/core/config.py
# 환경변수 로딩 (.env) — one Settings instance built at startup and handed to components

from __future__ import annotations
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Mongo
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "echobody"
    DB_CONNECT_RETRIES: int = 20

    # completion service
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    # auth
    JWT_SECRET: str = "changeme"
    JWT_TTL_HOURS: int = 24
    BCRYPT_ROUNDS: int = 10

    # server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: List[str] = ["*"]

    # logging
    SERVICE_NAME: str = "BACKEND_PY"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"  # empty string disables the file handler

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
