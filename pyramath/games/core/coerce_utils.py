# pyramath/games/core/coerce_utils.py
from typing import Optional
from ..pyramid.logic.levels import MAX_LEVEL, clamp_level

LEVEL_ALIASES = {
    'warmup': 1, 'warm-up': 1, 'easy': 1,
    '4th': 2, 'medium': 2,
    '5th': 3, 'hard': 3,
    '6th': 4, 'challenge': 4,
    'master': MAX_LEVEL, 'expert': MAX_LEVEL,
}


def normalize_level(level) -> int:
    """Level number (1..MAX_LEVEL) from an int, a digit string or an alias."""
    if level is None or level == "":
        return 1
    if isinstance(level, bool):
        raise ValueError(f"bad level: {level!r}")
    if isinstance(level, int):
        return clamp_level(level)
    key = str(level).strip().lower()
    if key in LEVEL_ALIASES:
        return LEVEL_ALIASES[key]
    try:
        return clamp_level(int(key))
    except ValueError:
        raise ValueError(f"bad level: {level!r}") from None


def coerce_index(val, name: str = "index") -> int:
    """Stone index from JSON (int or digit string). Range is the validator's job."""
    if isinstance(val, bool) or val is None:
        raise ValueError(f"missing or bad {name}")
    if isinstance(val, int):
        return val
    if isinstance(val, str) and val.strip().lstrip("-").isdigit():
        return int(val.strip())
    raise ValueError(f"missing or bad {name}")


def coerce_bool(val, default: bool = False) -> bool:
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in ("1", "true", "yes", "on")


def clean_name(val: Optional[str], limit: int = 32) -> str:
    return " ".join(str(val or "").split())[:limit]
