"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    jwt_secret_key: str | None = None
    token_ttl_minutes: int = 60
    password_hash_rounds: int = 12
    frontend_url: str = "http://localhost:3000"
    seed: bool = False
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="LOSTPET_", env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
