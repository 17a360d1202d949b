"""JSON-file backed owner of the tournament's match collection.

The repository is the only place the match list is mutated. Standings and
playoff helpers receive a plain list from ``all()`` and never touch the store.

Usage::

    repo = MatchRepository("data/matches.json")
    repo.load()
    repo.update(build_result(repo.get("match-1"), entry))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Union

from league_api.models import Match, match_from_record, match_to_record
from league_api.schedule import initial_schedule

logger = logging.getLogger(__name__)


class LeagueError(Exception):
    """Base exception for match store errors."""
    pass


class MatchNotFoundError(LeagueError):
    """Raised when a match id is not present in the store."""

    def __init__(self, match_id: str):
        self.match_id = match_id
        super().__init__(f"Unknown match: {match_id}")


class MatchStoreError(LeagueError):
    """Raised when the JSON store cannot be read or written."""
    pass


class MatchRepository:
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._matches: List[Match] = []
        self._loaded = False

    # -----------------------------
    # Persistence
    # -----------------------------
    def load(self) -> List[Match]:
        """
        Reads the store. A missing file is seeded with the initial
        league + playoff schedule and written back.
        """
        if not self.path.exists():
            logger.info("No match store at %s, seeding initial schedule", self.path)
            seeded = initial_schedule()
            self._save(seeded)
            self._matches = seeded
            self._loaded = True
            return self.all()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MatchStoreError(f"Cannot read match store {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise MatchStoreError(f"Match store {self.path} must hold a JSON list")

        try:
            self._matches = [match_from_record(r) for r in raw]
        except (KeyError, TypeError, ValueError) as e:
            raise MatchStoreError(f"Malformed match record in {self.path}: {e}") from e

        self._loaded = True
        logger.info("Loaded %d matches from %s", len(self._matches), self.path)
        return self.all()

    def _save(self, matches: List[Match]) -> None:
        """Writes `matches` to disk. Callers swap it in only after this succeeds."""
        payload = [match_to_record(m) for m in matches]
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            raise MatchStoreError(f"Cannot write match store {self.path}: {e}") from e

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def _index_of(self, match_id: str) -> int:
        for i, m in enumerate(self._matches):
            if m.id == match_id:
                return i
        raise MatchNotFoundError(match_id)

    # -----------------------------
    # Reads
    # -----------------------------
    def all(self) -> List[Match]:
        self._ensure_loaded()
        return list(self._matches)

    def get(self, match_id: str) -> Match:
        self._ensure_loaded()
        return self._matches[self._index_of(match_id)]

    def league_matches(self) -> List[Match]:
        return [m for m in self.all() if not m.is_playoff]

    def playoff_matches(self) -> List[Match]:
        return [m for m in self.all() if m.is_playoff]

    def pending(self) -> List[Match]:
        return [m for m in self.all() if not m.is_resolved]

    def completed(self) -> List[Match]:
        return [m for m in self.all() if m.is_resolved]

    # -----------------------------
    # Writes (whole-record replacement only)
    # -----------------------------
    def update(self, match: Match) -> Match:
        self._ensure_loaded()
        idx = self._index_of(match.id)
        updated = list(self._matches)
        updated[idx] = match
        self._save(updated)
        self._matches = updated
        logger.info("Updated %s (%s vs %s): %s", match.id, match.team_a, match.team_b, match.outcome.kind)
        return match

    def replace_all(self, matches: List[Match]) -> List[Match]:
        self._ensure_loaded()
        updated = list(matches)
        self._save(updated)
        self._matches = updated
        return self.all()

    def delete(self, match_id: str) -> None:
        self._ensure_loaded()
        idx = self._index_of(match_id)
        updated = list(self._matches)
        del updated[idx]
        self._save(updated)
        self._matches = updated
        logger.info("Deleted %s", match_id)

    def reset(self) -> List[Match]:
        fresh = initial_schedule()
        self._save(fresh)
        self._matches = fresh
        self._loaded = True
        logger.info("Tournament reset: %d matches scheduled", len(self._matches))
        return self.all()
