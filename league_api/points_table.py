# league_api/points_table.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional, Sequence

from league_api.models import Match, NoResult, Played, Walkover
from league_api.nrr_math import NRR_TOLERANCE, TeamAggregate, apply_innings, nrr
from league_api.teams import TEAMS, Team


@dataclass
class TeamStats:
    team_id: str

    matches: int = 0
    wins: int = 0
    losses: int = 0
    no_results: int = 0

    points: int = 0
    nrr: float = 0.0

    runs_scored: int = 0
    runs_against: int = 0
    overs_faced: float = 0.0
    overs_bowled: float = 0.0


@dataclass
class TeamRow:
    """Working row while folding matches. Converted to TeamStats at the end."""
    team: str
    played: int
    won: int
    lost: int
    nr: int
    points: int
    agg: TeamAggregate


def _empty_row(team_id: str) -> TeamRow:
    return TeamRow(team_id, 0, 0, 0, 0, 0, TeamAggregate(team_id))


def apply_result(row_a: TeamRow, row_b: TeamRow, *, winner: Optional[str]) -> None:
    """
    Updates played/won/lost/nr/points ONLY for a decided-or-tied match.
    Aggregates are updated separately via nrr_math.apply_innings.

    Rules:
    - winner set: 2 points to the winner, a loss to the other side
    - winner None: tie, both get 1 point, nobody loses
    """
    row_a.played += 1
    row_b.played += 1

    if winner is None:
        row_a.points += 1
        row_b.points += 1
        return

    if winner == row_a.team:
        row_a.won += 1
        row_a.points += 2
        row_b.lost += 1
    else:
        row_b.won += 1
        row_b.points += 2
        row_a.lost += 1


def apply_no_result(row_a: TeamRow, row_b: TeamRow) -> None:
    for row in (row_a, row_b):
        row.played += 1
        row.nr += 1
        row.points += 1


def _fold_match(rows: Dict[str, TeamRow], match: Match) -> None:
    outcome = match.outcome
    if not isinstance(outcome, (Played, NoResult, Walkover)):
        return

    row_a = rows.get(match.team_a)
    row_b = rows.get(match.team_b)
    if row_a is None or row_b is None:
        # TBD playoff slots or teams outside this table
        return

    if isinstance(outcome, NoResult):
        apply_no_result(row_a, row_b)
    elif isinstance(outcome, Walkover):
        # No runs/overs effect, NRR unchanged
        apply_result(row_a, row_b, winner=outcome.winner)
    else:
        apply_innings(row_a.agg, row_b.agg, outcome.score_a, outcome.score_b)
        apply_result(row_a, row_b, winner=match.winner)


def _to_stats(row: TeamRow) -> TeamStats:
    return TeamStats(
        team_id=row.team,
        matches=row.played,
        wins=row.won,
        losses=row.lost,
        no_results=row.nr,
        points=row.points,
        nrr=nrr(row.agg),
        runs_scored=row.agg.runs_scored,
        runs_against=row.agg.runs_against,
        overs_faced=row.agg.overs_faced,
        overs_bowled=row.agg.overs_bowled,
    )


def compare_standings(a: TeamStats, b: TeamStats) -> int:
    """
    Negative when a ranks above b:
    1) Points (desc)
    2) NRR (desc), differences within NRR_TOLERANCE fall through
    3) Wins (desc)
    Head-to-head is not modelled; remaining ties keep registration order.
    """
    if a.points != b.points:
        return b.points - a.points
    if abs(b.nrr - a.nrr) > NRR_TOLERANCE:
        return -1 if a.nrr > b.nrr else 1
    return b.wins - a.wins


def sort_standings(stats: Iterable[TeamStats]) -> List[TeamStats]:
    # sorted() is stable, so equal rows stay in input order
    return sorted(stats, key=cmp_to_key(compare_standings))


def calculate_team_stats(matches: Iterable[Match], teams: Sequence[Team] = TEAMS) -> List[TeamStats]:
    """
    Ranked stats, one row per registered team (all-zero rows included).

    Unplayed matches contribute nothing. Recomputed from scratch on every call.
    """
    rows: Dict[str, TeamRow] = {t.id: _empty_row(t.id) for t in teams}

    for match in matches:
        _fold_match(rows, match)

    return sort_standings(_to_stats(r) for r in rows.values())


def standings_rows(stats: List[TeamStats]) -> List[dict]:
    """Serialisable table rows with 1-based position and NRR rounded for display."""
    out: List[dict] = []
    for idx, s in enumerate(stats, start=1):
        row = asdict(s)
        row["nrr"] = round(s.nrr, 3)
        row["overs_faced"] = round(s.overs_faced, 3)
        row["overs_bowled"] = round(s.overs_bowled, 3)
        out.append({"pos": idx, **row})
    return out
