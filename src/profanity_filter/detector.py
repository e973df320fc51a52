"""ProfanityFilter: the main API.  Layered: dictionary, foreign words, patterns.

Usage:
    from profanity_filter import ProfanityFilter

    pf = ProfanityFilter()        # reusable, thread-safe after init

    matches = pf.detect("너 진짜 시발")
    print([m.term for m in matches])     # ['시발']

    result = pf.classify("너 진짜 시발")
    print(result.score, result.level)    # 12 Level.LOW

Module-level ``detect`` and ``classify`` use a shared default instance.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable

from . import wordlists
from .patterns import PATTERNS, scan_patterns
from .scoring import score
from .types import Assessment, Category, Match, ObfuscationPattern, TermList


@dataclass
class FilterConfig:
    """Configuration for the ProfanityFilter."""
    dictionary: tuple[TermList, ...] = wordlists.DICTIONARY
    foreign: TermList = wordlists.FOREIGN
    patterns: tuple[ObfuscationPattern, ...] = PATTERNS
    custom_scanners: list[Callable[[str], list[Match]]] = field(default_factory=list)
    # Categories to drop from results (e.g. don't count weak words)
    skip_categories: set[Category] = field(default_factory=set)
    # Allow-list: terms that should NEVER be reported (case-insensitive)
    allow_list: set[str] = field(default_factory=set)


class ProfanityFilter:
    """Layered profanity detector and scorer.

    Pass 1: Dictionary terms, substring containment (strong / medium / weak)
    Pass 2: Foreign terms, whole words only
    Pass 3: Obfuscation patterns (symbols, digits, spaces, repetition)
    Pass 4: Custom scanners (user-provided callables)
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config or FilterConfig()
        self._allowed = {t.casefold() for t in self.config.allow_list}

    def detect(self, text: str) -> list[Match]:
        """Return deduplicated matches in discovery order."""
        if not text or not text.strip():
            return []

        all_matches: list[Match] = []

        # --- Pass 1: Dictionary (over-inclusive on purpose) ---
        all_matches.extend(scan_dictionary(text, self.config.dictionary))

        # --- Pass 2: Foreign words ---
        all_matches.extend(scan_foreign(text, self.config.foreign))

        # --- Pass 3: Obfuscation patterns ---
        all_matches.extend(scan_patterns(text, self.config.patterns))

        # --- Pass 4: Custom scanners ---
        for scanner in self.config.custom_scanners:
            all_matches.extend(scanner(text))

        # --- Filter ---
        filtered = [
            m for m in all_matches
            if m.category not in self.config.skip_categories
            and m.term.casefold() not in self._allowed
        ]

        return deduplicate(filtered)

    def classify(self, text: str) -> Assessment:
        """Detect then score."""
        return score(self.detect(text))


def scan_dictionary(text: str, term_lists: tuple[TermList, ...] | list[TermList]) -> list[Match]:
    """Case-insensitive substring containment for every term of every list."""
    lowered = text.lower()
    matches: list[Match] = []
    for term_list in term_lists:
        for term in term_list.terms:
            idx = lowered.find(term.lower())
            if idx != -1:
                matches.append(Match(term, term_list.weight, term_list.category, idx))
    return matches


def scan_foreign(text: str, term_list: TermList) -> list[Match]:
    """Whole-word, case-insensitive presence of each term."""
    matches: list[Match] = []
    for term in term_list.terms:
        m = _word_regex(term).search(text)
        if m:
            matches.append(Match(term, term_list.weight, term_list.category, m.start()))
    return matches


@lru_cache(maxsize=1024)
def _word_regex(term: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)


def deduplicate(matches: list[Match]) -> list[Match]:
    """Collapse repeats of the same (term, category), keeping the first."""
    seen: set[tuple[str, Category]] = set()
    unique: list[Match] = []
    for m in matches:
        if m.key in seen:
            continue
        seen.add(m.key)
        unique.append(m)
    return unique


_default: ProfanityFilter | None = None


def _get_default() -> ProfanityFilter:
    global _default
    if _default is None:
        _default = ProfanityFilter()
    return _default


def detect(text: str) -> list[Match]:
    """Detect with the built-in tables."""
    return _get_default().detect(text)


def classify(text: str) -> Assessment:
    """Classify with the built-in tables."""
    return _get_default().classify(text)
