from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings): # load SLITHERQUEST_* key=value pairs from env or .env
    """ Level storage and logging settings"""
    PUZZLE_DIR: Path = BASE_DIR / "puzzles_json"
    PUZZLE_FORMAT: Literal["json", "binary"] = "json"
    MAX_HISTORY: int = 100
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix = "SLITHERQUEST_",
        env_file = BASE_DIR/".env",
        env_file_encoding = "utf-8",
        extra = "ignore",
    )

settings = Settings()
