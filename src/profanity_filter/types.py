"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Where a match came from.  Each category carries a fixed weight."""
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"
    FOREIGN = "foreign"
    PATTERN = "pattern"

    @property
    def weight(self) -> int:
        return CATEGORY_WEIGHTS[self]


CATEGORY_WEIGHTS: dict[Category, int] = {
    Category.STRONG: 10,
    Category.MEDIUM: 5,
    Category.WEAK: 2,
    Category.FOREIGN: 8,
    Category.PATTERN: 10,   # obfuscated forms always count as strong
}


class Technique(str, Enum):
    """Evasion technique an obfuscation pattern targets."""
    SYMBOL = "symbol"           # 시@발
    DIGIT = "digit"             # 시1발
    WHITESPACE = "whitespace"   # 시 발
    REPETITION = "repetition"   # 시발시발


class Level(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Action(str, Enum):
    NONE = "none"
    FLAGGED = "flagged"
    AUTO_HIDDEN = "auto_hidden"


@dataclass(frozen=True, slots=True)
class TermList:
    """A fixed set of literal terms sharing one severity category."""
    category: Category
    terms: tuple[str, ...]

    @property
    def weight(self) -> int:
        return self.category.weight


@dataclass(frozen=True, slots=True)
class ObfuscationPattern:
    """A rule recognising one base term despite one evasion technique."""
    base_term: str
    technique: Technique
    regex: re.Pattern

    @property
    def weight(self) -> int:
        return Category.PATTERN.weight


@dataclass(frozen=True, slots=True)
class Match:
    """A single detected term or pattern hit."""
    term: str              # literal text that matched
    weight: int
    category: Category
    start: int = field(default=-1, compare=False)  # first occurrence, -1 if unknown

    @property
    def key(self) -> tuple[str, Category]:
        """Identity used for deduplication."""
        return (self.term.casefold(), self.category)

    def to_dict(self) -> dict:
        return {"term": self.term, "weight": self.weight, "category": self.category.value}


@dataclass(frozen=True, slots=True)
class Assessment:
    """Result of scoring a list of matches."""
    score: int                                  # 0-100
    level: Level
    action: Action
    matches: tuple[Match, ...] = ()

    @property
    def detected(self) -> bool:
        return bool(self.matches)

    @property
    def terms(self) -> list[str]:
        return [m.term for m in self.matches]

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "action": self.action.value,
            "matches": [m.to_dict() for m in self.matches],
        }
