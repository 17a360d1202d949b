"""Shared fixtures for the league API tests."""

import pytest

from league_api.models import Match, NoResult, Played, Score, Walkover
from league_api.repository import MatchRepository


def played(match_id, team_a, team_b, score_a, score_b, number=1):
    """Build a played match from (runs, wickets, overs) tuples."""
    return Match(
        id=match_id,
        match_number=number,
        team_a=team_a,
        team_b=team_b,
        outcome=Played(score_a=Score(*score_a), score_b=Score(*score_b)),
    )


def walkover(match_id, team_a, team_b, winner, number=1):
    return Match(id=match_id, match_number=number, team_a=team_a, team_b=team_b,
                 outcome=Walkover(winner=winner))


def no_result(match_id, team_a, team_b, number=1):
    return Match(id=match_id, match_number=number, team_a=team_a, team_b=team_b,
                 outcome=NoResult())


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "matches.json"


@pytest.fixture
def repo(store_path) -> MatchRepository:
    r = MatchRepository(store_path)
    r.load()
    return r
