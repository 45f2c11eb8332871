"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "catalyst-engine"
    log_level: str = "INFO"

    # Strategy engine
    promo_window_days: int = 90  # promo APR expiring within this many days gets a sprint

    # Payoff simulator
    simulator_max_months: int = 360  # 30-year ceiling


settings = Settings()
