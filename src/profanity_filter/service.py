"""FilterService: request handling around the filter.

Validates a request payload, classifies the content, records the outcome
and hides auto-hidden questions.  Sink writes are best effort: a failing
sink is logged and never changes the response.

Request:   {"content": "...", "questionId": "..."}      (questionId optional)
Response:  {"success": true, "detected": ..., "detectedProfanities": [...],
            "riskScore": ..., "riskLevel": ..., "actionTaken": ..., "matchCount": ...}
"""

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from .detector import ProfanityFilter
from .sinks import (
    AuditSink, FilteringLog, HiddenState, ModerationStateSink, NullSink, hidden_reason,
)
from .types import Action, Assessment

logger = logging.getLogger(__name__)


class InvalidRequest(ValueError):
    """Raised for payloads that must not reach the filter."""


class FilterService:
    """Classifies content and forwards outcomes to the sinks."""

    def __init__(
        self,
        profanity_filter: ProfanityFilter | None = None,
        *,
        audit_sink: AuditSink | None = None,
        state_sink: ModerationStateSink | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.filter = profanity_filter or ProfanityFilter()
        self.audit_sink = audit_sink or NullSink()
        self.state_sink = state_sink or NullSink()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def handle(self, payload: Any) -> dict[str, Any]:
        """Process one request payload.  Raises InvalidRequest for bad input."""
        content, question_id = parse_request(payload)
        assessment = self.filter.classify(content)
        logger.debug(
            "classified content: score=%d level=%s matches=%d",
            assessment.score, assessment.level.value, len(assessment.matches),
        )

        if question_id:
            self._record(question_id, content, assessment)
            if assessment.action is Action.AUTO_HIDDEN:
                self._hide(question_id, assessment)

        return build_response(assessment)

    def _record(self, question_id: str, content: str, assessment: Assessment) -> None:
        try:
            self.audit_sink.record_filtering(FilteringLog(
                question_id=question_id,
                content=content,
                detected_profanities=assessment.terms,
                risk_score=assessment.score,
                risk_level=assessment.level.value,
                action_taken=assessment.action.value,
            ))
        except Exception:
            logger.exception("failed to record filtering log for question %s", question_id)

    def _hide(self, question_id: str, assessment: Assessment) -> None:
        try:
            self.state_sink.hide_question(HiddenState(
                question_id=question_id,
                hidden_reason=hidden_reason(assessment.level.value, assessment.score),
                hidden_at=self._clock(),
            ))
            logger.info("auto-hid question %s (score %d)", question_id, assessment.score)
        except Exception:
            logger.exception("failed to hide question %s", question_id)


def parse_request(payload: Any) -> tuple[str, str | None]:
    """Return (content, question_id) or raise InvalidRequest."""
    if not isinstance(payload, dict):
        raise InvalidRequest("content is required")
    content = payload.get("content")
    if not content or not isinstance(content, str):
        raise InvalidRequest("content is required")

    question_id = payload.get("questionId")
    if question_id is not None and (
        isinstance(question_id, bool) or not isinstance(question_id, (str, int))
    ):
        raise InvalidRequest("questionId must be a string")
    return content, str(question_id) if question_id not in (None, "") else None


def build_response(assessment: Assessment) -> dict[str, Any]:
    return {
        "success": True,
        "detected": assessment.detected,
        "detectedProfanities": assessment.terms,
        "riskScore": assessment.score,
        "riskLevel": assessment.level.value,
        "actionTaken": assessment.action.value,
        "matchCount": len(assessment.matches),
    }
