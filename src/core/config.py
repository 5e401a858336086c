"""Application settings, read from the environment (prefix WORDGAME_) or a .env file."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WORDGAME_", env_file=".env")

    # Database
    DATABASE_URL: str = "sqlite:///./wordgame.db"
    DATABASE_ECHO: bool = False

    # Game rules
    POOL_SIZE: int = 500
    DEFAULT_BOARD_WIDTH: int = 15
    DEFAULT_MAX_PLAYERS: int = 2
    MAX_BOARD_WIDTH: int = 25
    MAX_PLAYERS_LIMIT: int = 8

    # Word list, one word per line. None means no words are accepted.
    DICTIONARY_PATH: Optional[str] = None

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
