"""Entity extraction from free text.

Every function is pure and returns None when the entity is absent; callers
substitute their own defaults.
"""

import re

from ..models import PlayerStatus, TeamDataSnapshot

# Words that end a name or phrase captured from a command.
_STOP = r"(?=\s+(?:as|at|position|age|aged|from|with|rating|status|to|for|in|on)\b|[,.!?]|$)"

_NEW_PLAYER_RE = re.compile(
    r"\b(?:add|create|register|sign)\s+(?:a\s+)?(?:new\s+)?player\s+([a-z][a-z'\-]*(?:\s+[a-z][a-z'\-]*)*?)" + _STOP,
    re.IGNORECASE,
)
_POSITION_RE = re.compile(r"\b(?:as|position)\s+(?:an?\s+|the\s+)?([a-z][a-z\-]*)", re.IGNORECASE)
_AGE_RE = re.compile(r"\bage[d]?\s+(\d{1,2})\b", re.IGNORECASE)
_NATIONALITY_RE = re.compile(r"\bfrom\s+([a-z][a-z]*(?:\s+[a-z][a-z]*)*?)" + _STOP, re.IGNORECASE)
_OPPONENT_RE = re.compile(
    r"\b(?:against|vs\.?|versus)\s+([a-z0-9][\w'\-]*(?:\s+[a-z0-9][\w'\-]*)*?)"
    r"(?=\s+(?:on|at|next|this|tomorrow|today|in|with)\b|[,.!?]|$)",
    re.IGNORECASE,
)
_DURATION_RE = re.compile(r"\b(\d{1,3})[\s-]+(days?|weeks?)\b", re.IGNORECASE)
_FOCUS_RE = re.compile(r"\bfocus(?:ed|ing)?\s+on\s+([a-z][a-z\s\-]*?)" + _STOP, re.IGNORECASE)
_TARGET_AREA_RE = re.compile(
    r"\b(?:improve|optimi[sz]e|enhance|boost)\s+(?:our\s+|the\s+|my\s+)?([a-z][a-z\s\-]*?)" + _STOP,
    re.IGNORECASE,
)
_RATING_RE = re.compile(r"\brating\s+(?:to\s+)?(\d+(?:\.\d+)?)", re.IGNORECASE)
_STATUS_RE = re.compile(
    r"\bstatus\s+(?:to\s+)?(active|injured|suspended|training|resting)\b", re.IGNORECASE
)
_EXISTING_PLAYER_RE = re.compile(
    r"\b(?:player|edit|update|remove|delete|release|analy[sz]e)\s+(?:player\s+)?([a-z][a-z'\-]*(?:\s+[a-z][a-z'\-]*)*?)" + _STOP,
    re.IGNORECASE,
)

POSITION_ALIASES: dict[str, str] = {
    "goalkeeper": "GK",
    "keeper": "GK",
    "goalie": "GK",
    "defender": "CB",
    "centre-back": "CB",
    "center-back": "CB",
    "centreback": "CB",
    "centerback": "CB",
    "fullback": "FB",
    "full-back": "FB",
    "wingback": "WB",
    "wing-back": "WB",
    "midfielder": "CM",
    "midfield": "CM",
    "playmaker": "CAM",
    "winger": "W",
    "forward": "FW",
    "striker": "ST",
    "attacker": "ST",
    "pivot": "PV",
}


def normalize_position(word: str) -> str:
    """Map a spoken position to its short code; unknown words are upper-cased."""
    key = word.strip().lower()
    if key in POSITION_ALIASES:
        return POSITION_ALIASES[key]
    if key.endswith("s") and key[:-1] in POSITION_ALIASES:
        return POSITION_ALIASES[key[:-1]]
    return key.upper()


def extract_new_player_name(text: str) -> str | None:
    match = _NEW_PLAYER_RE.search(text)
    if not match:
        return None
    name = match.group(1).strip()
    return " ".join(part.capitalize() if part.islower() else part for part in name.split())


def extract_position(text: str) -> str | None:
    match = _POSITION_RE.search(text)
    return normalize_position(match.group(1)) if match else None


def extract_age(text: str) -> int | None:
    match = _AGE_RE.search(text)
    return int(match.group(1)) if match else None


def extract_nationality(text: str) -> str | None:
    match = _NATIONALITY_RE.search(text)
    return match.group(1).strip().title() if match else None


def extract_player_name(text: str, snapshot: TeamDataSnapshot) -> str | None:
    """Name of an existing squad member referenced in the text."""
    lowered = text.lower()
    # Longest names first so "Silva Jr" wins over "Silva".
    for player in sorted(snapshot.players, key=lambda p: len(p.name), reverse=True):
        if player.name.lower() in lowered:
            return player.name
    match = _EXISTING_PLAYER_RE.search(text)
    if not match:
        return None
    candidate = snapshot.find_player(match.group(1))
    return candidate.name if candidate else match.group(1).strip()


def extract_opponent(text: str) -> str | None:
    match = _OPPONENT_RE.search(text)
    if not match:
        return None
    opponent = match.group(1).strip()
    return opponent.title() if opponent.islower() else opponent


def extract_duration(text: str) -> int | None:
    """Duration in days; weeks are converted."""
    match = _DURATION_RE.search(text)
    if not match:
        return None
    amount = int(match.group(1))
    if amount <= 0:
        return None
    return amount * 7 if match.group(2).lower().startswith("week") else amount


def extract_focus(text: str) -> str | None:
    match = _FOCUS_RE.search(text)
    return match.group(1).strip().lower() if match else None


def extract_target_area(text: str) -> str | None:
    match = _TARGET_AREA_RE.search(text)
    return match.group(1).strip().lower() if match else None


def extract_rating(text: str) -> float | None:
    match = _RATING_RE.search(text)
    return float(match.group(1)) if match else None


def extract_status(text: str) -> PlayerStatus | None:
    match = _STATUS_RE.search(text)
    return PlayerStatus(match.group(1).lower()) if match else None
