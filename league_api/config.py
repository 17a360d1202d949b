# league_api/config.py
from __future__ import annotations

import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Tournament
# -------------------------
LEAGUE_NAME: str = _get_env("LEAGUE_NAME", "Legends League")

# T20 innings cap. All-out sides are credited with this many overs for NRR.
MAX_OVERS: int = _get_env_int("MAX_OVERS", 20)

# Top-N of the league table go through to the playoffs (Q1/Eliminator format needs 4)
PLAYOFF_SPOTS: int = _get_env_int("PLAYOFF_SPOTS", 4)


# -------------------------
# Match store
# -------------------------
MATCHES_STORE_PATH: str = _get_env("MATCHES_STORE_PATH", "data/matches.json")


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()
LOG_FILE: str = _get_env("LOG_FILE")


def validate_config() -> None:
    if not LEAGUE_NAME:
        raise RuntimeError("LEAGUE_NAME must not be empty")

    if MAX_OVERS <= 0:
        raise RuntimeError("MAX_OVERS must be positive")

    if PLAYOFF_SPOTS != 4:
        # qualifier1 / eliminator / qualifier2 / final only works for a top-4 cut
        raise RuntimeError("PLAYOFF_SPOTS must be 4 for the qualifier/eliminator format")

    if not MATCHES_STORE_PATH:
        raise RuntimeError("MATCHES_STORE_PATH must not be empty")

    if not MATCHES_STORE_PATH.endswith(".json"):
        raise RuntimeError("MATCHES_STORE_PATH must point to a .json file")

    if LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise RuntimeError(f"LOG_LEVEL must be a standard logging level, got {LOG_LEVEL!r}")
