"""
Configuration management for the POS order backend
"""


import threading

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Database configuration
    database_url: str = Field("sqlite:///data/pos_orders.db")
    sql_echo: bool = Field(False)
    create_tables_on_startup: bool = Field(True)

    # Application settings
    log_level: str = Field("INFO")
    log_dir: str = Field("logs")
    log_to_file: bool = Field(True)
    environment: str = Field("development")

    # Command surface
    api_host: str = Field("127.0.0.1")
    api_port: int = Field(8000)


_settings_instance: Settings | None = None
_settings_lock = threading.Lock()


def get_config() -> Settings:
    """Get the global settings instance, ensuring thread safety."""
    global _settings_instance
    if _settings_instance is None:
        with _settings_lock:
            if _settings_instance is None:
                _settings_instance = Settings()
    return _settings_instance


def reset_config() -> None:
    """Drop the cached settings so the next call re-reads the environment"""
    global _settings_instance
    with _settings_lock:
        _settings_instance = None
