from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    # SKU issuance checks and inserts inside one transaction; weaker levels
    # fall back on the unique constraint on products.sku
    DB_ISOLATION_LEVEL: str = "SERIALIZABLE"
    RESET_DB: bool = False
    ACCOUNT_SERVICE_URL: str = "http://127.0.0.1:8001"
    ACCOUNT_SERVICE_TIMEOUT_SECONDS: float = 10.0
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    MEDIA_DIR: str = "./media"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
