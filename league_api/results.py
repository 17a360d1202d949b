# league_api/results.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from league_api.models import Match, NoResult, Played, Score, Unplayed, Walkover
from league_api.nrr_math import validate_overs

logger = logging.getLogger(__name__)

OVERS_FORMAT_MESSAGE = "Invalid overs format (e.g., 17.4 where balls 0-5)"


class ResultValidationError(ValueError):
    """Raised when result input is rejected. `errors` maps field -> message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


@dataclass(frozen=True)
class ResultEntry:
    """Raw result input, as submitted by the edit form."""
    is_walkover: bool = False
    is_no_result: bool = False
    winner: Optional[str] = None
    team_a_score: Optional[Dict[str, Any]] = None
    team_b_score: Optional[Dict[str, Any]] = None


def _to_number(value: Any, cast, field: str, errors: Dict[str, str]):
    """Casts a form value, recording "Required" or "Must be a number" under `field`."""
    if value is None or value == "":
        errors[field] = "Required"
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        errors[field] = "Must be a number"
        return None


def _parse_score(raw: Optional[Dict[str, Any]], prefix: str, errors: Dict[str, str]) -> Optional[Score]:
    if raw is None:
        raw = {}

    runs = _to_number(raw.get("runs"), int, f"{prefix}Runs", errors)
    wickets = _to_number(raw.get("wickets"), int, f"{prefix}Wickets", errors)
    overs = _to_number(raw.get("overs"), float, f"{prefix}Overs", errors)

    if runs is not None and runs < 0:
        errors[f"{prefix}Runs"] = "Runs cannot be negative"

    if wickets is not None and not 0 <= wickets <= 10:
        errors[f"{prefix}Wickets"] = "Wickets must be between 0 and 10"

    if overs is not None and not validate_overs(overs):
        errors[f"{prefix}Overs"] = OVERS_FORMAT_MESSAGE

    if any(k.startswith(prefix) for k in errors):
        return None
    return Score(runs=runs, wickets=wickets, overs=overs)


def build_result(match: Match, entry: ResultEntry) -> Match:
    """
    Composes a full replacement record for `match` from form input.

    - walkover: winner required (one of the two sides), scores dropped
    - no result: scores and winner dropped
    - otherwise: both scores required and validated; winner derived from runs
    """
    errors: Dict[str, str] = {}

    if entry.is_walkover and entry.is_no_result:
        errors["outcome"] = "A match cannot be both a walkover and a no result"
        raise ResultValidationError(errors)

    if match.has_tbd:
        errors["match"] = "Participants are not decided yet"
        raise ResultValidationError(errors)

    if entry.is_walkover:
        if not entry.winner:
            errors["winner"] = "Please select a winner for walkover"
        elif entry.winner not in (match.team_a, match.team_b):
            errors["winner"] = f"Winner must be {match.team_a} or {match.team_b}"
        if errors:
            logger.debug("Rejected walkover for %s: %s", match.id, errors)
            raise ResultValidationError(errors)
        return match.with_outcome(Walkover(winner=entry.winner))

    if entry.is_no_result:
        return match.with_outcome(NoResult())

    score_a = _parse_score(entry.team_a_score, "teamA", errors)
    score_b = _parse_score(entry.team_b_score, "teamB", errors)

    if errors:
        logger.debug("Rejected result for %s: %s", match.id, errors)
        raise ResultValidationError(errors)

    return match.with_outcome(Played(score_a=score_a, score_b=score_b))


def clear_result(match: Match) -> Match:
    return match.with_outcome(Unplayed())
