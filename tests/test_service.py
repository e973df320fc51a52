"""Tests for request handling and the persistence sinks."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import logging
from datetime import datetime, timezone

import pytest

from profanity_filter import FilterService, InvalidRequest, MemorySink, SqliteSink
from profanity_filter.service import parse_request
from profanity_filter.sinks import FilteringLog, HiddenState, NullSink, hidden_reason
from profanity_filter.sink_supabase import SupabaseSink

HIGH_TEXT = "시발 병신 개새끼 좆 지랄 씹 호로 조센징 쪽바리 왜놈"
MEDIUM_TEXT = "씨@발 개새끼 병신"
FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _service(sink) -> FilterService:
    return FilterService(audit_sink=sink, state_sink=sink, clock=lambda: FIXED_NOW)


class _BrokenSink:
    def record_filtering(self, log):
        raise RuntimeError("db down")

    def hide_question(self, state):
        raise RuntimeError("db down")


# ── Request validation ───────────────────────────────────────────────

@pytest.mark.parametrize("payload", [
    None, "시발", [], {}, {"content": ""}, {"content": 42}, {"questionId": "q1"},
])
def test_malformed_requests_are_rejected(payload):
    with pytest.raises(InvalidRequest, match="content is required"):
        FilterService().handle(payload)


def test_question_id_must_be_scalar():
    with pytest.raises(InvalidRequest):
        parse_request({"content": "hi", "questionId": {"id": 1}})
    with pytest.raises(InvalidRequest):
        parse_request({"content": "hi", "questionId": True})


def test_parse_request_normalizes_question_id():
    assert parse_request({"content": "hi"}) == ("hi", None)
    assert parse_request({"content": "hi", "questionId": ""}) == ("hi", None)
    assert parse_request({"content": "hi", "questionId": 7}) == ("hi", "7")


# ── Response shape ───────────────────────────────────────────────────

def test_clean_response():
    response = FilterService().handle({"content": "오늘 날씨 좋다"})
    assert response == {
        "success": True,
        "detected": False,
        "detectedProfanities": [],
        "riskScore": 0,
        "riskLevel": "low",
        "actionTaken": "none",
        "matchCount": 0,
    }


def test_flagged_response():
    response = FilterService().handle({"content": MEDIUM_TEXT})
    assert response["detected"] is True
    assert response["riskScore"] == 50
    assert response["riskLevel"] == "medium"
    assert response["actionTaken"] == "flagged"
    assert response["matchCount"] == 5
    assert "씨@발" in response["detectedProfanities"]


# ── Sink interaction ─────────────────────────────────────────────────

def test_no_question_id_means_no_writes():
    sink = MemorySink()
    _service(sink).handle({"content": HIGH_TEXT})
    assert sink.size == 0
    assert sink.logs == []


def test_flagged_content_is_logged_not_hidden():
    sink = MemorySink()
    _service(sink).handle({"content": MEDIUM_TEXT, "questionId": "q1"})
    assert sink.size == 1
    log = sink.logs[0]
    assert log.question_id == "q1"
    assert log.content == MEDIUM_TEXT
    assert log.risk_score == 50
    assert log.risk_level == "medium"
    assert log.action_taken == "flagged"
    assert not sink.is_hidden("q1")


def test_clean_content_is_still_logged():
    sink = MemorySink()
    _service(sink).handle({"content": "안녕하세요", "questionId": "q0"})
    assert sink.logs[0].action_taken == "none"
    assert sink.logs[0].detected_profanities == []


def test_high_risk_content_is_hidden():
    sink = MemorySink()
    response = _service(sink).handle({"content": HIGH_TEXT, "questionId": "q2"})
    assert response["actionTaken"] == "auto_hidden"
    assert sink.is_hidden("q2")
    state = sink.hidden_state("q2")
    assert state.hidden_reason == "자동 필터링: 욕설 탐지 (위험도: high, 점수: 100)"
    assert state.hidden_at == FIXED_NOW
    assert state.hidden_by is None


def test_sink_failures_do_not_change_response(caplog):
    expected = FilterService().handle({"content": HIGH_TEXT})
    with caplog.at_level(logging.ERROR, logger="profanity_filter"):
        response = _service(_BrokenSink()).handle({"content": HIGH_TEXT, "questionId": "q3"})
    assert response == expected
    assert "failed to record filtering log for question q3" in caplog.text
    assert "failed to hide question q3" in caplog.text


def test_hide_failure_does_not_drop_log():
    class HideFails(MemorySink):
        __slots__ = ()

        def hide_question(self, state):
            raise RuntimeError("update rejected")

    sink = HideFails()
    _service(sink).handle({"content": HIGH_TEXT, "questionId": "q4"})
    assert sink.size == 1
    assert not sink.is_hidden("q4")


def test_null_sink_accepts_everything():
    sink = NullSink()
    assert sink.record_filtering(FilteringLog("q", "c", [], 0, "low", "none")) is None
    assert sink.hide_question(HiddenState("q", "r", FIXED_NOW)) is None


def test_memory_sink_clear():
    sink = MemorySink()
    _service(sink).handle({"content": HIGH_TEXT, "questionId": "q5"})
    sink.clear()
    assert sink.size == 0
    assert not sink.is_hidden("q5")


def test_hidden_reason_format():
    assert hidden_reason("medium", 42) == "자동 필터링: 욕설 탐지 (위험도: medium, 점수: 42)"


# ── SQLite sink ──────────────────────────────────────────────────────

def test_sqlite_sink_records_and_hides(tmp_path):
    sink = SqliteSink(db_path=tmp_path / "mod.db")
    _service(sink).handle({"content": HIGH_TEXT, "questionId": "q1"})
    _service(sink).handle({"content": MEDIUM_TEXT, "questionId": "q2"})

    logs = sink.list_logs()
    assert [row["question_id"] for row in logs] == ["q1", "q2"]
    assert logs[0]["risk_level"] == "high"
    assert "시발" in logs[0]["detected_profanities"]
    assert sink.list_logs("q2")[0]["action_taken"] == "flagged"

    assert sink.is_hidden("q1")
    assert not sink.is_hidden("q2")
    assert sink.hidden_reason("q1") == "자동 필터링: 욕설 탐지 (위험도: high, 점수: 100)"
    assert sink.hidden_reason("q2") is None
    sink.close()


def test_sqlite_sink_persists_across_instances(tmp_path):
    db = tmp_path / "nested" / "mod.db"
    sink = SqliteSink(db_path=db)
    _service(sink).handle({"content": HIGH_TEXT, "questionId": "q1"})
    sink.close()

    reopened = SqliteSink(db_path=db)
    assert len(reopened.list_logs()) == 1
    assert reopened.is_hidden("q1")
    reopened.clear()
    assert reopened.list_logs() == []
    assert not reopened.is_hidden("q1")
    reopened.close()


# ── Supabase sink ────────────────────────────────────────────────────

class _FakeQuery:
    def __init__(self, calls, table):
        self._calls = calls
        self._table = table

    def insert(self, row):
        self._calls.append(("insert", self._table, row))
        return self

    def update(self, values):
        self._calls.append(("update", self._table, values))
        return self

    def eq(self, column, value):
        self._calls.append(("eq", self._table, (column, value)))
        return self

    def execute(self):
        self._calls.append(("execute", self._table, None))
        return self


class _FakeClient:
    def __init__(self):
        self.calls = []

    def table(self, name):
        return _FakeQuery(self.calls, name)


def test_supabase_sink_writes_log_and_hidden_flag():
    client = _FakeClient()
    sink = SupabaseSink(client)
    _service(sink).handle({"content": HIGH_TEXT, "questionId": "q9"})

    ops = [(op, table) for op, table, _ in client.calls]
    assert ops == [
        ("insert", "filtering_logs"), ("execute", "filtering_logs"),
        ("update", "questions"), ("eq", "questions"), ("execute", "questions"),
    ]
    row = client.calls[0][2]
    assert row["question_id"] == "q9"
    assert row["risk_score"] == 100
    assert row["action_taken"] == "auto_hidden"
    update = client.calls[2][2]
    assert update["is_hidden"] is True
    assert update["hidden_by"] is None
    assert update["hidden_at"] == FIXED_NOW.isoformat()
    assert client.calls[3][2] == ("id", "q9")


def test_supabase_sink_requires_credentials(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(ValueError, match="service role key"):
        SupabaseSink.from_credentials()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
