"""
Settings
Configurazione del matching letta da variabili d'ambiente (.env supportato).
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class MatchingSettings(BaseModel):
    min_score: int = 60                     # Soglia di persistenza (batch offerta)
    best_matches_limit: int = 20
    verbose: bool = False
    app_url: str = "https://talentero.fr"
    data_dir: Optional[str] = None          # None = tabelle incluse nel package

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "MatchingSettings":
        load_dotenv(dotenv_path)
        return cls(
            min_score=_env_int("MATCHING_MIN_SCORE", 60),
            best_matches_limit=_env_int("MATCHING_BEST_LIMIT", 20),
            verbose=_env_bool("MATCHING_VERBOSE", False),
            app_url=os.getenv("APP_URL") or os.getenv("NEXT_PUBLIC_APP_URL") or "https://talentero.fr",
            data_dir=os.getenv("MATCHING_DATA_DIR") or None,
        )
