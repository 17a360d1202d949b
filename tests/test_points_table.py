"""Unit tests for the standings engine (league_api.points_table)."""

import pytest

from conftest import no_result, played, walkover
from league_api.models import Match
from league_api.points_table import (
    TeamStats,
    calculate_team_stats,
    sort_standings,
    standings_rows,
)
from league_api.schedule import generate_round_robin_schedule
from league_api.teams import TBD, TEAMS


def _by_team(stats):
    return {s.team_id: s for s in stats}


class TestRowCompleteness:
    def test_empty_input_gives_zero_row_per_team(self):
        stats = calculate_team_stats([])
        assert [s.team_id for s in stats] == [t.id for t in TEAMS]
        for s in stats:
            assert s == TeamStats(team_id=s.team_id)

    def test_unplayed_schedule_contributes_nothing(self):
        stats = calculate_team_stats(generate_round_robin_schedule())
        assert all(s.matches == 0 and s.points == 0 for s in stats)
        assert len(stats) == 10

    def test_tbd_playoff_match_is_skipped(self):
        m = walkover("playoff-final", TBD, TBD, winner=TBD)
        stats = calculate_team_stats([m])
        assert sum(s.matches for s in stats) == 0


class TestPlayedMatch:
    def test_all_out_side_credited_full_overs(self):
        """150 all out in 18.3 counts as 20 overs faced, not 18.5."""
        m = played("match-1", "CSK", "DC", (150, 10, 18.3), (140, 6, 20.0))
        stats = _by_team(calculate_team_stats([m]))

        assert stats["CSK"].overs_faced == 20.0
        assert stats["DC"].overs_bowled == 20.0
        assert stats["CSK"].nrr == pytest.approx(0.5)
        assert stats["DC"].nrr == pytest.approx(-0.5)

    def test_winner_gets_two_points(self):
        m = played("match-1", "CSK", "DC", (150, 10, 18.3), (140, 6, 20.0))
        stats = _by_team(calculate_team_stats([m]))

        assert (stats["CSK"].wins, stats["CSK"].points) == (1, 2)
        assert (stats["DC"].losses, stats["DC"].points) == (1, 0)
        assert stats["CSK"].matches == stats["DC"].matches == 1

    def test_chase_uses_actual_overs(self):
        m = played("match-1", "CSK", "DC", (160, 5, 20.0), (161, 3, 17.4))
        stats = _by_team(calculate_team_stats([m]))

        assert stats["DC"].overs_faced == pytest.approx(17 + 4 / 6)
        assert stats["CSK"].overs_bowled == pytest.approx(17 + 4 / 6)
        assert stats["DC"].wins == 1

    def test_tie_splits_points_without_loss(self):
        m = played("match-1", "GT", "MI", (150, 7, 20.0), (150, 9, 20.0))
        stats = _by_team(calculate_team_stats([m]))

        for team in ("GT", "MI"):
            assert stats[team].points == 1
            assert stats[team].losses == 0
            assert stats[team].wins == 0
            assert stats[team].nrr == 0


class TestNoResultAndWalkover:
    def test_no_result(self):
        stats = _by_team(calculate_team_stats([no_result("match-1", "RR", "RCB")]))
        for team in ("RR", "RCB"):
            assert stats[team].matches == 1
            assert stats[team].no_results == 1
            assert stats[team].points == 1
            assert stats[team].overs_faced == 0

    def test_walkover_leaves_nrr_aggregates_untouched(self):
        base = [played("match-1", "CSK", "DC", (180, 4, 20.0), (150, 8, 20.0))]
        before = _by_team(calculate_team_stats(base))
        after = _by_team(calculate_team_stats(base + [walkover("match-2", "CSK", "DC", winner="DC", number=2)]))

        for team in ("CSK", "DC"):
            assert after[team].runs_scored == before[team].runs_scored
            assert after[team].runs_against == before[team].runs_against
            assert after[team].overs_faced == before[team].overs_faced
            assert after[team].overs_bowled == before[team].overs_bowled
            assert after[team].nrr == before[team].nrr

        assert after["DC"].wins == 1 and after["DC"].points == 2
        assert after["CSK"].losses == 1 and after["CSK"].points == 2

    def test_points_conservation(self):
        matches = [
            played("match-1", "CSK", "DC", (150, 10, 18.3), (140, 6, 20.0), 1),
            played("match-2", "GT", "MI", (150, 7, 20.0), (150, 9, 20.0), 2),
            no_result("match-3", "RR", "RCB", 3),
            walkover("match-4", "SRH", "PBKS", winner="PBKS", number=4),
            Match(id="match-5", match_number=5, team_a="KKR", team_b="LSG"),
        ]
        stats = calculate_team_stats(matches)
        assert sum(s.points for s in stats) == 2 * 4
        assert sum(s.matches for s in stats) == 2 * 4


class TestOrdering:
    def test_points_first(self):
        matches = [
            played("match-1", "SRH", "CSK", (200, 2, 20.0), (100, 10, 15.0), 1),
            no_result("match-2", "DC", "GT", 2),
        ]
        stats = calculate_team_stats(matches)
        assert stats[0].team_id == "SRH"
        assert [s.team_id for s in stats[1:3]] == ["DC", "GT"]
        assert stats[-1].team_id == "CSK"

    def test_nrr_breaks_level_points(self):
        matches = [
            played("match-1", "CSK", "DC", (150, 5, 20.0), (149, 5, 20.0), 1),
            played("match-2", "GT", "KKR", (200, 5, 20.0), (120, 10, 18.0), 2),
        ]
        stats = calculate_team_stats(matches)
        assert [s.team_id for s in stats[:2]] == ["GT", "CSK"]

    def test_nrr_within_tolerance_falls_through_to_wins(self):
        a = TeamStats("A", points=4, nrr=0.5000, wins=1)
        b = TeamStats("B", points=4, nrr=0.5005, wins=2)
        c = TeamStats("C", points=4, nrr=0.6, wins=0)
        assert [s.team_id for s in sort_standings([a, b, c])] == ["C", "B", "A"]

    def test_residual_ties_keep_input_order(self):
        rows = [TeamStats("X", points=2, wins=1), TeamStats("Y", points=2, wins=1)]
        assert [s.team_id for s in sort_standings(rows)] == ["X", "Y"]
        assert [s.team_id for s in sort_standings(rows[::-1])] == ["Y", "X"]

    def test_repeated_calls_are_identical(self):
        matches = [
            played("match-1", "CSK", "DC", (150, 10, 18.3), (140, 6, 20.0), 1),
            walkover("match-2", "GT", "MI", winner="MI", number=2),
        ]
        assert calculate_team_stats(matches) == calculate_team_stats(matches)
        assert standings_rows(calculate_team_stats(matches)) == standings_rows(calculate_team_stats(matches))


class TestStandingsRows:
    def test_positions_and_rounding(self):
        m = played("match-1", "CSK", "DC", (161, 3, 17.4), (160, 5, 20.0))
        rows = standings_rows(calculate_team_stats([m]))

        assert [r["pos"] for r in rows] == list(range(1, 11))
        assert rows[0]["team_id"] == "CSK"
        assert rows[0]["overs_faced"] == 17.667
        assert rows[0]["nrr"] == round(161 / (17 + 4 / 6) - 8.0, 3)
