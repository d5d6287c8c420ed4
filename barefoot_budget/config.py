"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./barefoot.db"

    # Service
    service_name: str = "barefoot-budget"
    log_level: str = "INFO"

    # Money
    currency: str = "AUD"


settings = Settings()
