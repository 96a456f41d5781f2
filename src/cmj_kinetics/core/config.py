"""Application configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class KineticsSettings(BaseSettings):
    """Jump kinetics calculation constants."""

    model_config = SettingsConfigDict(env_prefix="KINETICS_")

    gravity: float = Field(default=9.81, gt=0)


class DisplaySettings(BaseSettings):
    """Result formatting settings."""

    model_config = SettingsConfigDict(env_prefix="DISPLAY_")

    decimals: int = Field(default=2, ge=0)
    relative_force_decimals: int = Field(default=3, ge=0)


class DatabaseSettings(BaseSettings):
    """Measurement and settings store connection."""

    model_config = SettingsConfigDict(env_prefix="DB_")

    url: str = "sqlite:///data/cmj_kinetics.db"
    echo: bool = False
    timeout: float = 30.0


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    kinetics: KineticsSettings = Field(default_factory=KineticsSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    default_user: str | None = Field(default=None, alias="CMJ_USER")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
