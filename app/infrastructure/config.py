"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    api_prefix: str = "/api"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./catalog.db"
    create_tables_on_startup: bool = True

    # Authentication
    jwt_secret: str = "dev-jwt-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 7

    # Uploads
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    # Catalog
    default_page_size: int = 12
    max_page_size: int = 100
    related_limit: int = 4
    slug_max_attempts: int = 1000
    slug_write_retries: int = 3

    # CORS
    cors_origins: list[str] = ["*"]

    # Seed admin
    seed_admin_email: str = "admin@producthub.com"
    seed_admin_password: str = "admin123"
    seed_admin_name: str = "Admin User"

    # Logging
    log_level: str = "INFO"

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
