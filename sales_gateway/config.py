"""Configuration management using Pydantic Settings"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data source: a remote URL wins over the local file when set
    data_file_path: str = "data/sales.csv"
    data_source_url: Optional[str] = None

    # Service
    service_name: str = "sales-gateway"
    log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    # Refuse to start when the boot-time load fails (otherwise retry on next request)
    fail_fast_on_load_error: bool = False

    # HTTP Client
    http_timeout_seconds: float = 10.0

    # Pagination
    default_page_size: int = 10
    # Optional upper bound on pageSize; None leaves the requested size as-is
    max_page_size: Optional[int] = None


settings = Settings()
