"""Risk scoring: matches -> bounded score -> level -> action."""

from __future__ import annotations
from typing import Iterable

from .types import Action, Assessment, Level, Match

MAX_BASE_SCORE = 80     # cap on summed weights
BONUS_PER_MATCH = 2
MAX_BONUS_SCORE = 20    # cap on the breadth bonus
MAX_SCORE = 100

LOW_MAX = 30            # score <= 30 is low
MEDIUM_MAX = 70         # 30 < score <= 70 is medium, above is high

_ACTIONS: dict[Level, Action] = {
    Level.LOW: Action.NONE,
    Level.MEDIUM: Action.FLAGGED,
    Level.HIGH: Action.AUTO_HIDDEN,
}


def score(matches: Iterable[Match]) -> Assessment:
    """Aggregate matches into an Assessment.  Never raises."""
    matches = tuple(matches)
    if not matches:
        return Assessment(score=0, level=Level.LOW, action=Action.NONE)

    total_weight = sum(m.weight for m in matches)
    base = min(total_weight, MAX_BASE_SCORE)
    bonus = min(len(matches) * BONUS_PER_MATCH, MAX_BONUS_SCORE)
    final = max(0, min(base + bonus, MAX_SCORE))

    level = level_for(final)
    return Assessment(score=final, level=level, action=action_for(level), matches=matches)


def level_for(value: int) -> Level:
    if value <= LOW_MAX:
        return Level.LOW
    if value <= MEDIUM_MAX:
        return Level.MEDIUM
    return Level.HIGH


def action_for(level: Level) -> Action:
    return _ACTIONS[level]
