# main.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from league_api.config import LEAGUE_NAME, MATCHES_STORE_PATH, validate_config
from league_api.export import matches_frame, standings_frame, to_csv
from league_api.logging_config import setup_logging
from league_api.models import Match, match_to_record
from league_api.playoffs import evaluate_qualification_bounds, seed_playoffs
from league_api.points_table import calculate_team_stats, standings_rows
from league_api.repository import MatchNotFoundError, MatchRepository, MatchStoreError
from league_api.results import ResultEntry, ResultValidationError, build_result, clear_result
from league_api.teams import TEAMS, normalize_team_code

logger = logging.getLogger(__name__)

# -----------------------
# App
# -----------------------
app = FastAPI(
    title=f"{LEAGUE_NAME} Tournament API",
    version="0.1.0",
    description="Round-robin cricket tournament: schedule, result entry, points table with NRR, playoffs",
)


@app.on_event("startup")
def on_startup():
    validate_config()
    setup_logging()
    logger.info("Starting %s API, match store: %s", LEAGUE_NAME, MATCHES_STORE_PATH)


def get_repository() -> MatchRepository:
    repo = getattr(app.state, "repository", None)
    if repo is None:
        repo = MatchRepository(MATCHES_STORE_PATH)
        try:
            repo.load()
        except MatchStoreError as e:
            raise HTTPException(status_code=500, detail=str(e))
        app.state.repository = repo
    return repo


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Helpers
# -----------------------
def _get_match_or_404(repo: MatchRepository, match_id: str) -> Match:
    try:
        return repo.get(match_id)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _save(repo: MatchRepository, match: Match) -> Dict[str, Any]:
    try:
        return match_to_record(repo.update(match))
    except MatchStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))


# Playoff games stay out of the league table unless the caller opts in.
INCLUDE_PLAYOFFS_QUERY = Query(
    False,
    description=(
        "Fold playoff matches into the table too. Defaults to false (league matches only). "
        "Earlier points tables counted every match, playoffs included."
    ),
)


def _standings_source(repo: MatchRepository, include_playoffs: bool) -> List[Match]:
    return repo.all() if include_playoffs else repo.league_matches()


# -----------------------
# Teams
# -----------------------
@app.get("/api/teams")
def list_teams():
    return [{"id": t.id, "name": t.name, "shortName": t.short_name} for t in TEAMS]


# -----------------------
# Matches
# -----------------------
StageFilter = Literal["league", "playoff", "all"]
StatusFilter = Literal["pending", "completed", "all"]


@app.get("/api/matches")
def list_matches(
    stage: StageFilter = "all",
    status: StatusFilter = "all",
    team: Optional[str] = None,
    repo: MatchRepository = Depends(get_repository),
):
    matches = repo.all()

    if stage == "league":
        matches = [m for m in matches if not m.is_playoff]
    elif stage == "playoff":
        matches = [m for m in matches if m.is_playoff]

    if status == "pending":
        matches = [m for m in matches if not m.is_resolved]
    elif status == "completed":
        matches = [m for m in matches if m.is_resolved]

    if team:
        code = normalize_team_code(team)
        matches = [m for m in matches if code in (m.team_a, m.team_b)]

    return {"count": len(matches), "matches": [match_to_record(m) for m in matches]}


@app.get("/api/matches.csv", response_class=PlainTextResponse)
def export_matches(repo: MatchRepository = Depends(get_repository)):
    return to_csv(matches_frame(repo.all()))


@app.get("/api/matches/{match_id}")
def get_match(match_id: str, repo: MatchRepository = Depends(get_repository)):
    return match_to_record(_get_match_or_404(repo, match_id))


class ScoreIn(BaseModel):
    runs: int = Field(..., ge=0)
    wickets: int = Field(..., ge=0, le=10)
    overs: float = Field(..., ge=0, description="Cricket notation, e.g. 17.4 = 17 overs 4 balls")


class ResultIn(BaseModel):
    isWalkover: bool = False
    isNoResult: bool = False
    winner: Optional[str] = None
    teamAScore: Optional[ScoreIn] = None
    teamBScore: Optional[ScoreIn] = None
    date: Optional[str] = Field(None, description="ISO date the match was played")


@app.put("/api/matches/{match_id}/result")
def enter_result(match_id: str, req: ResultIn, repo: MatchRepository = Depends(get_repository)):
    match = _get_match_or_404(repo, match_id)

    entry = ResultEntry(
        is_walkover=req.isWalkover,
        is_no_result=req.isNoResult,
        winner=normalize_team_code(req.winner) or None,
        team_a_score=req.teamAScore.model_dump() if req.teamAScore else None,
        team_b_score=req.teamBScore.model_dump() if req.teamBScore else None,
    )

    try:
        updated = build_result(match, entry)
    except ResultValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})

    if req.date:
        updated = replace(updated, date=req.date)

    return _save(repo, updated)


@app.delete("/api/matches/{match_id}/result")
def delete_result(match_id: str, repo: MatchRepository = Depends(get_repository)):
    match = _get_match_or_404(repo, match_id)
    return _save(repo, clear_result(match))


@app.delete("/api/matches/{match_id}")
def delete_match(match_id: str, repo: MatchRepository = Depends(get_repository)):
    try:
        repo.delete(match_id)
    except MatchNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MatchStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"deleted": match_id}


@app.post("/api/tournament/reset")
def reset_tournament(repo: MatchRepository = Depends(get_repository)):
    try:
        matches = repo.reset()
    except MatchStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"matches_count": len(matches)}


# -----------------------
# Standings
# -----------------------
@app.get("/api/standings")
def get_standings(include_playoffs: bool = INCLUDE_PLAYOFFS_QUERY, repo: MatchRepository = Depends(get_repository)):
    matches = _standings_source(repo, include_playoffs)
    stats = calculate_team_stats(matches)
    return {
        "league": LEAGUE_NAME,
        "completed_matches": sum(1 for m in matches if m.is_resolved),
        "tie_break": ["points", "nrr", "wins"],
        "table": standings_rows(stats),
    }


@app.get("/api/standings.csv", response_class=PlainTextResponse)
def export_standings(include_playoffs: bool = INCLUDE_PLAYOFFS_QUERY, repo: MatchRepository = Depends(get_repository)):
    stats = calculate_team_stats(_standings_source(repo, include_playoffs))
    return to_csv(standings_frame(stats))


# -----------------------
# Playoffs
# -----------------------
@app.get("/api/playoffs/qualification")
def playoff_qualification(repo: MatchRepository = Depends(get_repository)):
    league = repo.league_matches()
    stats = calculate_team_stats(league)
    remaining = [m for m in league if not m.is_resolved]
    return {
        "remaining_matches": len(remaining),
        "result": evaluate_qualification_bounds(stats, remaining),
    }


@app.post("/api/playoffs/seed")
def playoff_seed(force: bool = False, repo: MatchRepository = Depends(get_repository)):
    league = repo.league_matches()
    pending = [m for m in league if not m.is_resolved]
    if pending and not force:
        raise HTTPException(
            status_code=409,
            detail=f"{len(pending)} league matches are still pending. Pass force=true to seed from the current table.",
        )

    stats = calculate_team_stats(league)
    try:
        matches = repo.replace_all(seed_playoffs(repo.all(), stats))
    except MatchStoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"playoffs": [match_to_record(m) for m in matches if m.is_playoff]}
