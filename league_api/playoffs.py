# league_api/playoffs.py
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional

from league_api.config import PLAYOFF_SPOTS
from league_api.models import Match
from league_api.points_table import TeamStats
from league_api.teams import TBD


def playoff_winner(match: Optional[Match]) -> Optional[str]:
    if match is None:
        return None
    return match.winner


def playoff_loser(match: Optional[Match]) -> Optional[str]:
    if match is None or match.winner is None:
        return None
    return match.team_b if match.winner == match.team_a else match.team_a


def _by_stage(matches: List[Match]) -> Dict[str, Match]:
    return {m.playoff_stage: m for m in matches if m.is_playoff}


def _fill(match: Match, team_a: Optional[str], team_b: Optional[str]) -> Match:
    """Resolved matches keep their participants."""
    if match.is_resolved:
        return match
    return replace(match, team_a=team_a or TBD, team_b=team_b or TBD)


def seed_playoffs(matches: List[Match], standings: List[TeamStats]) -> List[Match]:
    """
    Fills TBD playoff slots:
      qualifier1 = 1st vs 2nd
      eliminator = 3rd vs 4th
      qualifier2 = loser(qualifier1) vs winner(eliminator)
      final      = winner(qualifier1) vs winner(qualifier2)

    Slots whose feeder match has no winner yet stay TBD. Input list is not mutated.
    """
    top = [s.team_id for s in standings[:PLAYOFF_SPOTS]]
    top += [None] * (PLAYOFF_SPOTS - len(top))

    stages = _by_stage(matches)
    seeded: Dict[str, Match] = {}

    if "qualifier1" in stages:
        seeded["qualifier1"] = _fill(stages["qualifier1"], top[0], top[1])
    if "eliminator" in stages:
        seeded["eliminator"] = _fill(stages["eliminator"], top[2], top[3])
    if "qualifier2" in stages:
        seeded["qualifier2"] = _fill(
            stages["qualifier2"],
            playoff_loser(seeded.get("qualifier1")),
            playoff_winner(seeded.get("eliminator")),
        )
    if "final" in stages:
        seeded["final"] = _fill(
            stages["final"],
            playoff_winner(seeded.get("qualifier1")),
            playoff_winner(seeded.get("qualifier2")),
        )

    return [seeded.get(m.playoff_stage, m) if m.is_playoff else m for m in matches]


# -----------------------------
# Qualification bounds
# -----------------------------
def _matches_left(teams: List[str], remaining: List[Match]) -> Dict[str, int]:
    left = {t: 0 for t in teams}
    for m in remaining:
        if m.team_a in left:
            left[m.team_a] += 1
        if m.team_b in left:
            left[m.team_b] += 1
    return left


def _is_guaranteed_qualified(team: str, min_pts: Dict[str, int], max_pts: Dict[str, int], spots: int) -> bool:
    """
    Conservative guarantee check using ONLY points bounds (no NRR).
    Qualified if fewer than `spots` other teams can even reach the team's worst case.
    """
    my_min = min_pts[team]
    can_catch_me = sum(1 for t, p in max_pts.items() if t != team and p >= my_min)
    return can_catch_me < spots


def _is_guaranteed_eliminated(team: str, min_pts: Dict[str, int], max_pts: Dict[str, int], spots: int) -> bool:
    """
    Eliminated if even with best case for team, `spots`+ teams are already
    guaranteed to finish strictly above it on points.
    """
    my_max = max_pts[team]
    above_for_sure = sum(1 for t, p in min_pts.items() if t != team and p > my_max)
    return above_for_sure >= spots


def evaluate_qualification_bounds(
    standings: List[TeamStats],
    remaining_matches: List[Match],
    spots: int = PLAYOFF_SPOTS,
) -> Dict[str, dict]:
    """
    Per-team min/max points over the unplayed league matches and a
    conservative status (QUALIFIED / ELIMINATED / IN_CONTENTION).
    NRR is ignored here; ties on points count against the team.
    """
    teams = [s.team_id for s in standings]
    points = {s.team_id: s.points for s in standings}
    left = _matches_left(teams, [m for m in remaining_matches if not m.is_resolved])

    min_pts = dict(points)
    max_pts = {t: points[t] + 2 * left[t] for t in teams}

    results: Dict[str, dict] = {}
    for team in teams:
        if _is_guaranteed_eliminated(team, min_pts, max_pts, spots):
            status = "ELIMINATED"
        elif _is_guaranteed_qualified(team, min_pts, max_pts, spots):
            status = "QUALIFIED"
        else:
            status = "IN_CONTENTION"

        results[team] = {
            "matches_left": left[team],
            "min_points": min_pts[team],
            "max_points": max_pts[team],
            "status": status,
        }
    return results
