# league_api/nrr_math.py
from __future__ import annotations

import math
from dataclasses import dataclass

from league_api.config import MAX_OVERS
from league_api.models import Score

BALLS_PER_OVER = 6

# NRR values closer than this are treated as level
NRR_TOLERANCE = 0.001


@dataclass
class TeamAggregate:
    """
    Aggregate stats needed for NRR.
    Overs are TRUE decimals here (17.4 in notation -> 17.667), never cricket notation.
    """
    team: str
    runs_scored: int = 0
    overs_faced: float = 0.0
    runs_against: int = 0
    overs_bowled: float = 0.0


def balls_component(overs: float) -> int:
    """
    The digit after the point in overs notation: 19.4 -> 4.
    Rounded half-up to absorb float noise (19.4 - 19 == 0.3999...).
    """
    return math.floor((overs - math.floor(overs)) * 10 + 0.5)


def overs_to_decimal(overs: float) -> float:
    """
    Converts cricket overs notation to a true decimal.

    Rule: ".x" means x balls (0-5). Example: 17.4 = 17 + 4/6 = 17.667.
    """
    complete = math.floor(overs)
    return complete + balls_component(overs) / BALLS_PER_OVER


def validate_overs(overs: float) -> bool:
    """
    True when overs is within 0..MAX_OVERS and the balls part is 0-5.
    Used by result entry; the standings fold trusts its input.
    """
    balls = balls_component(overs)
    return 0 <= overs <= MAX_OVERS and 0 <= balls <= 5


def innings_overs(score: Score) -> float:
    """
    Overs credited for NRR: if a team is all-out, innings counts as full
    MAX_OVERS regardless of when the last wicket fell.
    """
    if score.all_out:
        return float(MAX_OVERS)
    return overs_to_decimal(score.overs)


def run_rate(runs: int, overs: float) -> float:
    if overs == 0:
        return 0.0
    return runs / overs


def calculate_nrr(
    runs_scored: int,
    overs_faced: float,
    runs_against: int,
    overs_bowled: float,
) -> float:
    """
    Net Run Rate = (runs_scored / overs_faced) - (runs_against / overs_bowled)

    Defined as 0 while either overs aggregate is zero.
    """
    if overs_faced == 0 or overs_bowled == 0:
        return 0.0
    return run_rate(runs_scored, overs_faced) - run_rate(runs_against, overs_bowled)


def nrr(agg: TeamAggregate) -> float:
    return calculate_nrr(agg.runs_scored, agg.overs_faced, agg.runs_against, agg.overs_bowled)


def apply_innings(
    agg_team_a: TeamAggregate,
    agg_team_b: TeamAggregate,
    score_a: Score,
    score_b: Score,
) -> None:
    """
    Updates both aggregates for a played match.

    - Applies the all-out rule internally
    - NRR is symmetric: team A's overs faced are team B's overs bowled
    - DOES NOT handle NR/walkover: caller must not call this for those.
    """
    a_overs = innings_overs(score_a)
    b_overs = innings_overs(score_b)

    # Team A aggregates
    agg_team_a.runs_scored += int(score_a.runs)
    agg_team_a.overs_faced += a_overs
    agg_team_a.runs_against += int(score_b.runs)
    agg_team_a.overs_bowled += b_overs

    # Team B aggregates
    agg_team_b.runs_scored += int(score_b.runs)
    agg_team_b.overs_faced += b_overs
    agg_team_b.runs_against += int(score_a.runs)
    agg_team_b.overs_bowled += a_overs
