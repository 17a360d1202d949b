# league_api/schedule.py
from __future__ import annotations

from typing import List, Optional, Sequence

from league_api.models import PLAYOFF_STAGES, Match
from league_api.teams import TBD, TEAMS, Team


def round_robin_size(team_count: int) -> int:
    return team_count * (team_count - 1) // 2


def generate_round_robin_schedule(teams: Sequence[Team] = TEAMS) -> List[Match]:
    """
    Single round-robin: every pair (i < j) in registration order plays once.
    Match numbers run 1..N*(N-1)/2 in emission order (45 for ten teams).
    """
    matches: List[Match] = []
    match_number = 1

    for i in range(len(teams)):
        for j in range(i + 1, len(teams)):
            matches.append(Match(
                id=f"match-{match_number}",
                match_number=match_number,
                team_a=teams[i].id,
                team_b=teams[j].id,
            ))
            match_number += 1

    return matches


def generate_playoff_matches(start_number: Optional[int] = None) -> List[Match]:
    """
    Four-stage playoff skeleton (qualifier1, eliminator, qualifier2, final),
    every slot TBD. Numbering continues after the league by default.
    """
    if start_number is None:
        start_number = round_robin_size(len(TEAMS)) + 1

    return [
        Match(
            id=f"playoff-{stage}",
            match_number=start_number + offset,
            team_a=TBD,
            team_b=TBD,
            playoff_stage=stage,
        )
        for offset, stage in enumerate(PLAYOFF_STAGES)
    ]


def initial_schedule(teams: Sequence[Team] = TEAMS) -> List[Match]:
    """League skeletons followed by the playoff skeleton."""
    league = generate_round_robin_schedule(teams)
    return league + generate_playoff_matches(start_number=len(league) + 1)
