import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    people_path: Optional[str]
    history_path: Optional[str]
    database_url: Optional[str]
    log_level: str
    log_path: Optional[str]


def load_settings() -> Settings:
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(LOG_LEVELS))}, got {log_level}.")

    return Settings(
        people_path=os.getenv("PEOPLE_PATH") or None,
        history_path=os.getenv("HISTORY_PATH") or None,
        database_url=os.getenv("DATABASE_URL") or None,
        log_level=log_level,
        log_path=os.getenv("LOG_PATH") or None,
    )
