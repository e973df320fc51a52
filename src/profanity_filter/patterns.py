"""Obfuscation-tolerant patterns.

Each pattern targets one base term with one evasion technique: a noise
symbol or digit wedged between syllables, inserted whitespace, or the term
repeated back to back.  Every hit counts with the ``pattern`` weight
regardless of how severe the base term is on its own.
"""

from __future__ import annotations
import re
from .types import Category, Match, ObfuscationPattern, Technique

# Noise characters people wedge between syllables
_NOISE = r"[0-9@#$%^&*!~`]"


def _between(base: str, head: str, tail: str, technique: Technique) -> ObfuscationPattern:
    glue = {
        Technique.SYMBOL: _NOISE,
        Technique.DIGIT: r"[0-9]",
        Technique.WHITESPACE: r"\s+",
    }[technique]
    return ObfuscationPattern(
        base, technique, re.compile(re.escape(head) + glue + re.escape(tail), re.IGNORECASE),
    )


def _repeated(base: str) -> ObfuscationPattern:
    return ObfuscationPattern(
        base, Technique.REPETITION, re.compile(f"(?:{re.escape(base)}){{2,}}", re.IGNORECASE),
    )


PATTERNS: tuple[ObfuscationPattern, ...] = (
    # 시@발, 시#발, ...
    _between("시발", "시", "발", Technique.SYMBOL),
    _between("씨발", "씨", "발", Technique.SYMBOL),
    _between("병신", "병", "신", Technique.SYMBOL),
    _between("개새끼", "개", "새끼", Technique.SYMBOL),
    _between("좆", "좆", "", Technique.SYMBOL),
    _between("지랄", "지", "랄", Technique.SYMBOL),

    # 시0발, 시1발, ...
    _between("시발", "시", "발", Technique.DIGIT),
    _between("씨발", "씨", "발", Technique.DIGIT),
    _between("병신", "병", "신", Technique.DIGIT),

    # 시 발, 씨  발, ...
    _between("시발", "시", "발", Technique.WHITESPACE),
    _between("씨발", "씨", "발", Technique.WHITESPACE),
    _between("병신", "병", "신", Technique.WHITESPACE),
    _between("개새끼", "개", "새끼", Technique.WHITESPACE),

    # 시발시발, 병신병신병신, ...
    _repeated("시발"),
    _repeated("씨발"),
    _repeated("병신"),
    _repeated("개새끼"),
)


def scan_patterns(
    text: str,
    patterns: tuple[ObfuscationPattern, ...] | list[ObfuscationPattern] = PATTERNS,
) -> list[Match]:
    """Run every pattern against text.  Reports all non-overlapping hits per pattern."""
    matches: list[Match] = []
    for pattern in patterns:
        for m in pattern.regex.finditer(text):
            if not m.group():
                continue
            matches.append(Match(
                term=m.group(),
                weight=pattern.weight,
                category=Category.PATTERN,
                start=m.start(),
            ))
    return matches
