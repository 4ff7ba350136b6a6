from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./inventory.db"
    database_url_sync: str = ""
    create_tables_on_startup: bool = True

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_title: str = "Product Inventory API"
    api_version: str = "1.0.0"
    cors_allowed_origins: str = "http://localhost:8000"

    # Client view
    currency_symbol: str = "₱"

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


settings = Settings()
