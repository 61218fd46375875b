"""
Centralized Configuration for signalbench
Uses Pydantic Settings with .env loading.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BacktestSettings(BaseSettings):
    """Default capital and transaction cost settings."""
    model_config = SettingsConfigDict(
        env_prefix="BACKTEST_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    initial_capital: float = 10000.0
    commission_percent: float = 0.1
    slippage_percent: float = 0.05
    position_sizing: float = 1.0  # fraction of cash committed per trade
    periods_per_year: int = 252


class ClassifierSettings(BaseSettings):
    """Market condition thresholds."""
    model_config = SettingsConfigDict(
        env_prefix="CLASSIFIER_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    atr_period: int = 14
    volatile_atr_percent: float = 2.5
    trend_percent: float = 1.5


class LoggingSettings(BaseSettings):
    """Logging settings."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        alias="LOG_FORMAT",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize level names to upper case."""
        return str(v).upper()


class BenchSettings(BaseSettings):
    """Main signalbench settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backtest: BacktestSettings = Field(default_factory=BacktestSettings)
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache()
def get_settings() -> BenchSettings:
    """Get cached settings instance."""
    return BenchSettings()


def reload_settings() -> BenchSettings:
    """Force reload settings (clears cache)."""
    get_settings.cache_clear()
    return get_settings()
