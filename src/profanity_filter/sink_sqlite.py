"""Persistent sink backed by SQLite: survives process restarts.

Drop-in replacement for MemorySink when you need durability.

Usage:
    sink = SqliteSink(db_path="~/.profanity-filter/moderation.db")
    service = FilterService(audit_sink=sink, state_sink=sink)
"""

from __future__ import annotations
import json
import sqlite3
import threading
from pathlib import Path

from .sinks import FilteringLog, HiddenState


_SCHEMA = """
CREATE TABLE IF NOT EXISTS filtering_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    question_id TEXT NOT NULL,
    content TEXT NOT NULL,
    detected_profanities TEXT NOT NULL,
    risk_score INTEGER NOT NULL,
    risk_level TEXT NOT NULL,
    action_taken TEXT NOT NULL,
    created_at REAL NOT NULL DEFAULT (julianday('now'))
);
CREATE INDEX IF NOT EXISTS idx_filtering_logs_question
    ON filtering_logs(question_id);
CREATE TABLE IF NOT EXISTS question_moderation (
    question_id TEXT PRIMARY KEY,
    is_hidden INTEGER NOT NULL DEFAULT 0,
    hidden_reason TEXT,
    hidden_at TEXT,
    hidden_by TEXT
);
"""


class SqliteSink:
    """Persistent audit log and hidden-state store."""

    __slots__ = ("_db", "_lock")

    def __init__(self, *, db_path: str | Path = "moderation.db") -> None:
        db_path = Path(db_path).expanduser()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        # Shared by the threaded HTTP server; writes go through _lock
        self._db = sqlite3.connect(str(db_path), check_same_thread=False)
        self._db.executescript(_SCHEMA)
        self._lock = threading.Lock()

    def record_filtering(self, log: FilteringLog) -> None:
        with self._lock:
            self._db.execute(
                "INSERT INTO filtering_logs (question_id, content, detected_profanities,"
                " risk_score, risk_level, action_taken) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    log.question_id,
                    log.content,
                    json.dumps(log.detected_profanities, ensure_ascii=False),
                    log.risk_score,
                    log.risk_level,
                    log.action_taken,
                ),
            )
            self._db.commit()

    def hide_question(self, state: HiddenState) -> None:
        with self._lock:
            self._db.execute(
                "INSERT OR REPLACE INTO question_moderation"
                " (question_id, is_hidden, hidden_reason, hidden_at, hidden_by)"
                " VALUES (?, 1, ?, ?, ?)",
                (state.question_id, state.hidden_reason, state.hidden_at.isoformat(), state.hidden_by),
            )
            self._db.commit()

    def list_logs(self, question_id: str | None = None) -> list[dict]:
        """Return audit entries, oldest first."""
        sql = (
            "SELECT question_id, content, detected_profanities, risk_score,"
            " risk_level, action_taken FROM filtering_logs"
        )
        params: tuple = ()
        if question_id is not None:
            sql += " WHERE question_id = ?"
            params = (question_id,)
        with self._lock:
            rows = self._db.execute(sql + " ORDER BY id", params).fetchall()
        return [
            {
                "question_id": qid,
                "content": content,
                "detected_profanities": json.loads(detected),
                "risk_score": risk_score,
                "risk_level": risk_level,
                "action_taken": action,
            }
            for qid, content, detected, risk_score, risk_level, action in rows
        ]

    def is_hidden(self, question_id: str) -> bool:
        with self._lock:
            row = self._db.execute(
                "SELECT is_hidden FROM question_moderation WHERE question_id = ?",
                (question_id,),
            ).fetchone()
        return bool(row and row[0])

    def hidden_reason(self, question_id: str) -> str | None:
        with self._lock:
            row = self._db.execute(
                "SELECT hidden_reason FROM question_moderation WHERE question_id = ?",
                (question_id,),
            ).fetchone()
        return row[0] if row else None

    def clear(self) -> None:
        with self._lock:
            self._db.execute("DELETE FROM filtering_logs")
            self._db.execute("DELETE FROM question_moderation")
            self._db.commit()

    def close(self) -> None:
        self._db.close()
