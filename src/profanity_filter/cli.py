"""CLI interface for profanity-filter.

Usage:
    # Score plain text (stdin: text, stdout: assessment JSON)
    echo '너 진짜 시발' | python -m profanity_filter.cli classify

    # Raw matches
    echo '씨@발 개새끼' | python -m profanity_filter.cli detect

    # Full request handling with persistence
    echo '{"questionId": "q1", "content": "..."}' | \
        python -m profanity_filter.cli --db moderation.db check

    # Dump the audit log
    python -m profanity_filter.cli --db moderation.db logs

    # Run the HTTP sidecar
    python -m profanity_filter.cli serve --port 18792
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys

from .config import DEFAULT_DB_PATH, create_filter, create_service, load_config, load_from_yaml
from .detector import ProfanityFilter
from .service import FilterService, InvalidRequest
from .sink_sqlite import SqliteSink


DEFAULT_DB = os.environ.get("PROFANITY_FILTER_DB", DEFAULT_DB_PATH)

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Send the package's log records to stderr."""
    logger = logging.getLogger("profanity_filter")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def _load(args: argparse.Namespace) -> dict:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.db:
        cfg["sink_backend"] = "sqlite"
        cfg["sink_path"] = args.db
    return cfg


def _build_service(args: argparse.Namespace) -> FilterService:
    return create_service(_load(args))


def _build_filter(args: argparse.Namespace) -> ProfanityFilter:
    return create_filter(_load(args))


def _emit(data: object) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_classify(args: argparse.Namespace) -> None:
    """Score plain text on stdin."""
    text = sys.stdin.read()
    _emit(_build_filter(args).classify(text).to_dict())


def cmd_detect(args: argparse.Namespace) -> None:
    """List matches for plain text on stdin."""
    text = sys.stdin.read()
    _emit([m.to_dict() for m in _build_filter(args).detect(text)])


def cmd_check(args: argparse.Namespace) -> None:
    """Handle a JSON request on stdin, recording the outcome."""
    service = _build_service(args)
    try:
        payload = json.loads(sys.stdin.read() or "null")
        _emit(service.handle(payload))
    except (ValueError, InvalidRequest) as e:
        sys.stderr.write(f"error: {e}\n")
        sys.exit(2)
    finally:
        close = getattr(service.audit_sink, "close", None)
        if close is not None:
            close()


def cmd_logs(args: argparse.Namespace) -> None:
    """Dump the SQLite audit log as JSON."""
    sink = SqliteSink(db_path=args.db or DEFAULT_DB)
    json.dump(sink.list_logs(args.question_id), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    sink.close()


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the HTTP sidecar."""
    from .server import serve
    serve(host=args.host, port=args.port, service=_build_service(args))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="profanity_filter",
        description="Profanity detection and risk scoring",
    )
    parser.add_argument("--config", default=os.environ.get("PROFANITY_FILTER_CONFIG", ""),
                        help="YAML config path")
    parser.add_argument("--db", default="", help="SQLite moderation db (enables the sqlite sink)")
    parser.add_argument("--log-level", default="WARNING", help="Log level")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("classify", help="Score plain text (stdin)")
    sub.add_parser("detect", help="List matches for plain text (stdin)")
    sub.add_parser("check", help="Handle a JSON request (stdin)")
    p_logs = sub.add_parser("logs", help="Dump the audit log")
    p_logs.add_argument("--question-id", default=None, help="Only this question")
    p_serve = sub.add_parser("serve", help="Run the HTTP sidecar")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=int(os.environ.get("PROFANITY_FILTER_PORT", "18792")))

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    cmds = {
        "classify": cmd_classify,
        "detect": cmd_detect,
        "check": cmd_check,
        "logs": cmd_logs,
        "serve": cmd_serve,
    }
    cmds[args.command](args)


if __name__ == "__main__":
    main()
