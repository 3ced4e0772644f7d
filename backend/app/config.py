from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:5173"]
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False
    DB_LOCK_PATH: str = "./.init_db.lock"

    # identity provider sits in front of the API and forwards these headers
    AUTH_USER_HEADER: str = "X-User-Id"
    AUTH_EMAIL_HEADER: str = "X-User-Email"
    AUTH_FIRST_NAME_HEADER: str = "X-User-First-Name"
    AUTH_LAST_NAME_HEADER: str = "X-User-Last-Name"
    ADMIN_USER_IDS: List[str] = []

    PAYMENT_MOCK_DELAY_MS: int = 0
    PAYMENT_CURRENCY: str = "inr"
    PAYMENT_INTENT_TTL_SECONDS: int = 1800
    PAYMENT_INTENT_SWEEP_SECONDS: int = 60
    ENABLE_SCHEDULER: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
