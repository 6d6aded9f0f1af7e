import os
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT", "5432")
    DB_NAME: str | None = os.getenv("DB_NAME")
    # Full URL override, e.g. "sqlite://" for local runs and tests
    DATABASE_URL: str | None = os.getenv("DATABASE_URL")

    # Low stock alerts
    SALES_WINDOW_DAYS: int = Field(
        default=int(os.getenv("SALES_WINDOW_DAYS", 30)), gt=0, validate_default=True)
    DEFAULT_REORDER_THRESHOLD: int = Field(
        default=int(os.getenv("DEFAULT_REORDER_THRESHOLD", 20)), ge=0, validate_default=True)
    SALE_ORDER_STATUSES: str = os.getenv(
        "SALE_ORDER_STATUSES", "completed,shipped")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:8002")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def sale_order_statuses(self) -> List[str]:
        return [s.strip().lower() for s in self.SALE_ORDER_STATUSES.split(",") if s.strip()]

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()

INVENTORY_DATABASE_URL = settings.DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
)
