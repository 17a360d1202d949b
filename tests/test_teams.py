"""Unit tests for the team registry helpers."""

import pytest

from league_api.teams import TBD, TEAMS, normalize_team_code, team_name


def test_ten_unique_teams():
    assert len(TEAMS) == 10
    assert len({t.id for t in TEAMS}) == 10


@pytest.mark.parametrize("raw,expected", [
    (" mi ", "MI"),
    ("Mumbai Indians", "MI"),
    ("royal  challengers bangalore", "RCB"),
    ("tbd", TBD),
    ("", ""),
    (None, ""),
])
def test_normalize_team_code(raw, expected):
    assert normalize_team_code(raw) == expected


def test_team_name_falls_back_to_id():
    assert team_name("CSK") == "Chennai Super Kings"
    assert team_name(TBD) == TBD
