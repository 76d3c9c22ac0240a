# activities/scoring.py
"""
Point scoring for faculty development activities.

    score = round_half_up(BASE_SCORES[type] * ROLE_MULTIPLIERS[role] + hours // 8)

Unknown types score as a workshop, unknown roles as a participant, and
unusable hour values count as zero. The function never raises, so the
submission form can call it for a live estimate with half-filled input.
"""
import math
import re

# Point mapping config
BASE_SCORES = {
    "workshop": 5,
    "fdp": 10,
    "mooc": 8,
    "conference": 15,
    "publication": 20,
    "patent": 25,
}
DEFAULT_BASE_SCORE = 5

ROLE_MULTIPLIERS = {
    "participant": 1,
    "speaker": 1.5,
    "organizer": 2,
    "author": 1.8,
}
DEFAULT_ROLE_MULTIPLIER = 1

HOURS_PER_BONUS_POINT = 8

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_hours(value) -> int:
    """
    Lenient hour parsing: "12", "12 hrs" and 12.9 all give 12; None,
    "" and "abc" give 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _lookup(table: dict, key, default):
    if not isinstance(key, str):
        return default
    return table.get(key, default)


def score_breakdown(activity_type, role, hours) -> dict:
    base = _lookup(BASE_SCORES, activity_type, DEFAULT_BASE_SCORE)
    multiplier = _lookup(ROLE_MULTIPLIERS, role, DEFAULT_ROLE_MULTIPLIER)
    duration_bonus = math.floor(parse_hours(hours) / HOURS_PER_BONUS_POINT)
    return {
        "base": base,
        "multiplier": multiplier,
        "duration_bonus": duration_bonus,
        "score": round_half_up(base * multiplier + duration_bonus),
    }


def compute_score(activity_type, role, hours) -> int:
    return score_breakdown(activity_type, role, hours)["score"]
