# league_api/teams.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

# Placeholder for playoff slots whose participant is not known yet
TBD = "TBD"

# Accept codes like: CSK, DC, PBKS
_CODE_RE = re.compile(r"^[A-Z]{2,5}$")


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    short_name: str


# Registration order. Residual standings ties keep this order.
TEAMS: List[Team] = [
    Team("CSK", "Chennai Super Kings", "CSK"),
    Team("DC", "Delhi Capitals", "DC"),
    Team("GT", "Gujarat Titans", "GT"),
    Team("KKR", "Kolkata Knight Riders", "KKR"),
    Team("LSG", "Lucknow Super Giants", "LSG"),
    Team("MI", "Mumbai Indians", "MI"),
    Team("PBKS", "Punjab Kings", "PBKS"),
    Team("RR", "Rajasthan Royals", "RR"),
    Team("RCB", "Royal Challengers Bangalore", "RCB"),
    Team("SRH", "Sunrisers Hyderabad", "SRH"),
]

_BY_ID: Dict[str, Team] = {t.id: t for t in TEAMS}


def normalize_team_code(team_raw: Optional[str]) -> str:
    """
    Cleans user-supplied team references:
    - strips whitespace, uppercases
    - accepts a full display name ("Mumbai Indians") and maps it to its code
    - keeps "TBD" as-is
    """
    if team_raw is None:
        return ""

    s = re.sub(r"\s+", " ", str(team_raw)).strip()
    if not s:
        return ""

    upper = s.upper()
    if upper == TBD or _CODE_RE.fullmatch(upper):
        return upper

    for t in TEAMS:
        if t.name.lower() == s.lower():
            return t.id

    return upper


def team_name(team_id: str) -> str:
    team = _BY_ID.get(team_id)
    return team.name if team else team_id
