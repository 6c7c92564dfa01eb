"""Configuration and environment settings for the Product Transactions API."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SEED_URL = "https://s3.amazonaws.com/roxiler.com/product_transaction.json"


class Settings(BaseSettings):
    """Application settings for the Product Transactions API."""

    database_url: str = "sqlite:///product_transactions.db"
    seed_url: str = DEFAULT_SEED_URL
    seed_timeout: float = 30.0
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]
    log_file: str = "logs/product_transactions.log"
    server_host: str = "127.0.0.1"
    server_port: int = 5000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


def get_settings() -> "Settings":
    """Return an instance of the application settings."""
    return Settings()
