"""Supabase sink: writes audit rows and hidden flags to a Supabase project.

Tables:
    filtering_logs   one row per filtered question
    questions        is_hidden / hidden_reason / hidden_at / hidden_by

Use the service-role key: the writes bypass row-level security.
"""

from __future__ import annotations
import logging
import os
from typing import TYPE_CHECKING, Any

from .sinks import FilteringLog, HiddenState

if TYPE_CHECKING:
    from supabase import Client

logger = logging.getLogger(__name__)

LOGS_TABLE = "filtering_logs"
QUESTIONS_TABLE = "questions"


class SupabaseSink:
    """Audit and moderation-state sink backed by supabase-py."""

    def __init__(self, client: Client | Any) -> None:
        self._client = client

    @classmethod
    def from_credentials(cls, url: str | None = None, key: str | None = None) -> "SupabaseSink":
        """Create a client from explicit credentials or SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY."""
        url = url or os.environ.get("SUPABASE_URL", "")
        key = key or os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
        if not url or not key:
            raise ValueError("Supabase URL and service role key are required for the supabase sink")

        from supabase import create_client
        client = create_client(url, key)
        logger.info("Supabase sink initialized for %s", url)
        return cls(client)

    def record_filtering(self, log: FilteringLog) -> None:
        self._client.table(LOGS_TABLE).insert({
            "question_id": log.question_id,
            "content": log.content,
            "detected_profanities": log.detected_profanities,
            "risk_score": log.risk_score,
            "risk_level": log.risk_level,
            "action_taken": log.action_taken,
        }).execute()

    def hide_question(self, state: HiddenState) -> None:
        self._client.table(QUESTIONS_TABLE).update({
            "is_hidden": True,
            "hidden_reason": state.hidden_reason,
            "hidden_at": state.hidden_at.isoformat(),
            "hidden_by": state.hidden_by,
        }).eq("id", state.question_id).execute()
