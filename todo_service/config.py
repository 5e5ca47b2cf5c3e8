"""All settings, loaded from the environment and the .env file."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # App
    app_url: str = "http://localhost:3000"
    host: str = "0.0.0.0"
    port: int = 3000

    # Store
    store_path: str = "files/list.json"
    store_lock_enabled: bool = True

    # CORS
    cors_allow_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
