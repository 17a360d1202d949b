# league_api/export.py
from __future__ import annotations

from typing import List

import pandas as pd

from league_api.models import Match
from league_api.points_table import TeamStats, standings_rows
from league_api.teams import team_name

STANDINGS_COLUMNS = [
    "pos", "team_id", "team", "matches", "wins", "losses", "no_results",
    "points", "nrr", "runs_scored", "overs_faced", "runs_against", "overs_bowled",
]

MATCH_COLUMNS = [
    "match_number", "id", "stage", "team_a", "team_b",
    "team_a_score", "team_b_score", "result", "winner",
]


def _format_score(score) -> str:
    if score is None:
        return ""
    return f"{score.runs}/{score.wickets} ({score.overs:g})"


def standings_frame(stats: List[TeamStats]) -> pd.DataFrame:
    rows = standings_rows(stats)
    for r in rows:
        r["team"] = team_name(r["team_id"])
    return pd.DataFrame(rows, columns=STANDINGS_COLUMNS)


def matches_frame(matches: List[Match]) -> pd.DataFrame:
    rows = []
    for m in matches:
        rows.append({
            "match_number": m.match_number,
            "id": m.id,
            "stage": m.playoff_stage or "league",
            "team_a": m.team_a,
            "team_b": m.team_b,
            "team_a_score": _format_score(m.team_a_score),
            "team_b_score": _format_score(m.team_b_score),
            "result": "tie" if m.is_tie else m.outcome.kind,
            "winner": m.winner or "",
        })
    return pd.DataFrame(rows, columns=MATCH_COLUMNS)


def to_csv(frame: pd.DataFrame) -> str:
    return frame.to_csv(index=False)
