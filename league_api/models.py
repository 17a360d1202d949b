from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Literal, Optional, Union, get_args

from league_api.teams import TBD


# -----------------------------
# Playoff stages
# -----------------------------
PlayoffStage = Literal["qualifier1", "eliminator", "qualifier2", "final"]
PLAYOFF_STAGES: tuple = get_args(PlayoffStage)


# -----------------------------
# Innings score
# -----------------------------
@dataclass(frozen=True)
class Score:
    runs: int
    wickets: int
    # Cricket notation: 17.4 = 17 overs + 4 balls
    overs: float

    @property
    def all_out(self) -> bool:
        return self.wickets >= 10


# -----------------------------
# Match outcome (tagged variant)
# -----------------------------
@dataclass(frozen=True)
class Unplayed:
    kind: Literal["unplayed"] = field(default="unplayed", init=False)


@dataclass(frozen=True)
class NoResult:
    kind: Literal["no_result"] = field(default="no_result", init=False)


@dataclass(frozen=True)
class Walkover:
    winner: str
    kind: Literal["walkover"] = field(default="walkover", init=False)


@dataclass(frozen=True)
class Played:
    score_a: Score
    score_b: Score
    kind: Literal["played"] = field(default="played", init=False)


Outcome = Union[Unplayed, NoResult, Walkover, Played]


# -----------------------------
# Canonical Match
# -----------------------------
@dataclass(frozen=True)
class Match:
    id: str
    match_number: int
    team_a: str
    team_b: str

    outcome: Outcome = field(default_factory=Unplayed)

    # None for league matches
    playoff_stage: Optional[PlayoffStage] = None
    date: Optional[str] = None

    @property
    def is_playoff(self) -> bool:
        return self.playoff_stage is not None

    @property
    def is_walkover(self) -> bool:
        return isinstance(self.outcome, Walkover)

    @property
    def is_no_result(self) -> bool:
        return isinstance(self.outcome, NoResult)

    @property
    def is_resolved(self) -> bool:
        return not isinstance(self.outcome, Unplayed)

    @property
    def has_tbd(self) -> bool:
        return TBD in (self.team_a, self.team_b)

    @property
    def team_a_score(self) -> Optional[Score]:
        return self.outcome.score_a if isinstance(self.outcome, Played) else None

    @property
    def team_b_score(self) -> Optional[Score]:
        return self.outcome.score_b if isinstance(self.outcome, Played) else None

    @property
    def winner(self) -> Optional[str]:
        """Winner team id. None for unplayed, no-result and tied matches."""
        o = self.outcome
        if isinstance(o, Walkover):
            return o.winner
        if isinstance(o, Played):
            if o.score_a.runs > o.score_b.runs:
                return self.team_a
            if o.score_b.runs > o.score_a.runs:
                return self.team_b
        return None

    @property
    def is_tie(self) -> bool:
        o = self.outcome
        return isinstance(o, Played) and o.score_a.runs == o.score_b.runs

    def with_outcome(self, outcome: Outcome) -> "Match":
        return replace(self, outcome=outcome)


# -----------------------------
# Persisted record shape
# -----------------------------
def _score_to_record(score: Optional[Score]) -> Optional[Dict[str, Any]]:
    if score is None:
        return None
    return {"runs": score.runs, "wickets": score.wickets, "overs": score.overs}


def _score_from_record(raw: Any) -> Optional[Score]:
    if not isinstance(raw, dict):
        return None
    if any(raw.get(k) is None for k in ("runs", "wickets", "overs")):
        return None
    return Score(runs=int(raw["runs"]), wickets=int(raw["wickets"]), overs=float(raw["overs"]))


def match_to_record(match: Match) -> Dict[str, Any]:
    """
    Flat camelCase record used by the JSON store and the HTTP API.
    Score sub-objects are either complete or null.
    """
    return {
        "id": match.id,
        "matchNumber": match.match_number,
        "teamA": match.team_a,
        "teamB": match.team_b,
        "teamAScore": _score_to_record(match.team_a_score),
        "teamBScore": _score_to_record(match.team_b_score),
        "winner": match.winner,
        "isWalkover": match.is_walkover,
        "isNoResult": match.is_no_result,
        "isPlayoff": match.is_playoff,
        "playoffType": match.playoff_stage,
        "date": match.date,
    }


def match_from_record(rec: Dict[str, Any]) -> Match:
    """
    Rebuilds the outcome variant from the flat flags:
      - isNoResult                      -> NoResult
      - isWalkover + winner             -> Walkover
      - both scores present             -> Played
      - anything else (incl. one score) -> Unplayed
    """
    score_a = _score_from_record(rec.get("teamAScore"))
    score_b = _score_from_record(rec.get("teamBScore"))
    winner = rec.get("winner") or None

    outcome: Outcome
    if rec.get("isNoResult"):
        outcome = NoResult()
    elif rec.get("isWalkover") and winner:
        outcome = Walkover(winner=str(winner))
    elif score_a is not None and score_b is not None:
        outcome = Played(score_a=score_a, score_b=score_b)
    else:
        outcome = Unplayed()

    stage = rec.get("playoffType") or None
    if stage is not None and stage not in PLAYOFF_STAGES:
        raise ValueError(f"Invalid playoffType: {stage}")
    if stage is None and rec.get("isPlayoff"):
        raise ValueError(f"Playoff match {rec.get('id')} has no playoffType")

    return Match(
        id=str(rec["id"]),
        match_number=int(rec["matchNumber"]),
        team_a=str(rec["teamA"]),
        team_b=str(rec["teamB"]),
        outcome=outcome,
        playoff_stage=stage,
        date=rec.get("date") or None,
    )
