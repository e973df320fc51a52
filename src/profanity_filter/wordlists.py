"""Built-in term lists.

Loaded once at import and never mutated.  The Korean lists overlap on
purpose (e.g. "바보" is both medium and weak); each list contributes its own
match because matches are keyed by (term, category).
"""

from __future__ import annotations
from .types import Category, TermList

STRONG = TermList(Category.STRONG, (
    "시발", "씨발", "병신", "개새끼", "좆", "지랄", "미친놈", "미친년",
    "개같은", "개소리", "좆같은", "좆도", "좆나", "좆만", "좆밥",
    "씹", "씹새끼", "씹년", "씹놈", "씹창", "씹할", "씹것",
    "호로", "호로새끼", "호로년", "호로놈",
    "조센징", "쪽바리", "왜놈",
))

MEDIUM = TermList(Category.MEDIUM, (
    "미친", "미쳤어", "미쳤나", "미쳤네", "미쳤다",
    "바보", "멍청이", "등신", "찐따", "찐찐따",
    "개", "개같이", "개처럼", "개새", "개지랄",
    "젠장", "망할", "망했어", "망해", "망해라",
    "죽어", "죽어라", "죽여", "죽이고", "죽일",
    "닥쳐", "닥치고", "닥쳐라",
))

WEAK = TermList(Category.WEAK, (
    "바보", "멍청", "등신", "찐따",
    "젠장", "망할", "망해",
    "헐", "헉", "어이",
))

# Matched on whole words only; short English words occur inside unrelated text.
FOREIGN = TermList(Category.FOREIGN, (
    "fuck", "shit", "damn", "bitch", "asshole", "bastard",
    "stupid", "idiot", "moron", "retard",
))

DICTIONARY: tuple[TermList, ...] = (STRONG, MEDIUM, WEAK)

_BY_CATEGORY = {tl.category: tl for tl in (*DICTIONARY, FOREIGN)}


def get_term_list(category: Category | str) -> TermList:
    """Return the built-in list for a category."""
    cat = Category(category)
    if cat not in _BY_CATEGORY:
        raise KeyError(f"no term list for category {cat.value!r}")
    return _BY_CATEGORY[cat]


def extend(term_list: TermList, extra: list[str] | tuple[str, ...]) -> TermList:
    """Return a new list with extra terms appended (duplicates dropped)."""
    seen = {t.casefold() for t in term_list.terms}
    added = []
    for term in extra:
        if term and term.casefold() not in seen:
            seen.add(term.casefold())
            added.append(term)
    return TermList(term_list.category, term_list.terms + tuple(added))
