from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FISHFINDR_")

    database_url: str = "sqlite+aiosqlite:///./locations.db"
    clustering_config_path: Path = Path("config/clustering.yaml")
    static_dir: Path = Path("./static")
    cors_origins: list[str] = ["*"]
    log_json: bool = True
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
