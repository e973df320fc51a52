"""Sinks: where moderation outcomes are recorded.

The filter itself never persists anything.  The service hands each outcome
to an audit sink (one row per filtered question) and, for auto-hidden
content, to a moderation-state sink that marks the question hidden.

Any object with matching methods works; the classes here cover the
in-process and disabled cases.  See ``sink_sqlite`` and ``sink_supabase``
for durable backends.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


# Reason stored alongside an auto-hidden question
HIDDEN_REASON_FMT = "자동 필터링: 욕설 탐지 (위험도: {level}, 점수: {score})"


def hidden_reason(level: str, score: int) -> str:
    return HIDDEN_REASON_FMT.format(level=level, score=score)


@dataclass(frozen=True, slots=True)
class FilteringLog:
    """One audit entry."""
    question_id: str
    content: str
    detected_profanities: list[str]
    risk_score: int
    risk_level: str
    action_taken: str


@dataclass(frozen=True, slots=True)
class HiddenState:
    """Hidden flag for one question.  hidden_by is None for system actions."""
    question_id: str
    hidden_reason: str
    hidden_at: datetime
    hidden_by: str | None = None


class AuditSink(Protocol):
    def record_filtering(self, log: FilteringLog) -> None: ...


class ModerationStateSink(Protocol):
    def hide_question(self, state: HiddenState) -> None: ...


class NullSink:
    """Sink used when persistence is disabled."""

    def record_filtering(self, log: FilteringLog) -> None:
        return None

    def hide_question(self, state: HiddenState) -> None:
        return None


class MemorySink:
    """In-process audit log and hidden-state store."""

    __slots__ = ("_logs", "_hidden")

    def __init__(self) -> None:
        self._logs: list[FilteringLog] = []
        self._hidden: dict[str, HiddenState] = {}     # question_id → state

    # ------------------------------------------------------------------
    # Sink API
    # ------------------------------------------------------------------

    def record_filtering(self, log: FilteringLog) -> None:
        self._logs.append(log)

    def hide_question(self, state: HiddenState) -> None:
        self._hidden[state.question_id] = state

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def logs(self) -> list[FilteringLog]:
        return list(self._logs)

    def is_hidden(self, question_id: str) -> bool:
        return question_id in self._hidden

    def hidden_state(self, question_id: str) -> HiddenState | None:
        return self._hidden.get(question_id)

    @property
    def size(self) -> int:
        return len(self._logs)

    def clear(self) -> None:
        self._logs.clear()
        self._hidden.clear()
