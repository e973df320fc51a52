"""HTTP sidecar server for profanity-filter.

Runs as a lightweight FastAPI/Flask-less HTTP server.  The web app (or an
edge function) calls this via HTTP whenever a question is posted.

Endpoints:
    POST /profanity-filter : Filter content (alias: /classify)
    POST /detect           : Raw match list for display
    GET  /health           : Health check
    OPTIONS *              : CORS preflight

All endpoints expect/return JSON.
Body format: {"content": "...", "questionId": "..."}
"""

from __future__ import annotations
import json
import logging
import os
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .config import create_service, load_config, load_from_yaml
from .service import FilterService, InvalidRequest

logger = logging.getLogger(__name__)

DEFAULT_HOST = os.environ.get("PROFANITY_FILTER_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.environ.get("PROFANITY_FILTER_PORT", "18792"))
DEFAULT_CONFIG = os.environ.get("PROFANITY_FILTER_CONFIG", "")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

FILTER_PATHS = ("/profanity-filter", "/classify")

# Shared state
_service: FilterService | None = None


def _get_service() -> FilterService:
    global _service
    if _service is None:
        cfg = load_from_yaml(DEFAULT_CONFIG) if DEFAULT_CONFIG else load_config({})
        _service = create_service(cfg)
    return _service


class FilterHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the profanity-filter sidecar."""

    def _read_json(self) -> Any:
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length).decode("utf-8")
        return json.loads(body) if body else {}

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        for name, value in CORS_HEADERS.items():
            self.send_header(name, value)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_OPTIONS(self) -> None:
        body = b"ok"
        self.send_response(200)
        for name, value in CORS_HEADERS.items():
            self.send_header(name, value)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self) -> None:
        if self.path == "/health":
            self._respond(200, {"status": "ok"})
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            try:
                body = self._read_json()
            except (ValueError, UnicodeDecodeError):
                self._respond(400, {"error": "invalid JSON body"})
                return

            service = _get_service()

            if self.path in FILTER_PATHS:
                self._respond(200, service.handle(body))

            elif self.path == "/detect":
                text = body.get("content") if isinstance(body, dict) else None
                if not text or not isinstance(text, str):
                    raise InvalidRequest("content is required")
                matches = service.filter.detect(text)
                self._respond(200, {"matches": [m.to_dict() for m in matches]})

            else:
                self._respond(404, {"error": "not found"})

        except InvalidRequest as e:
            self._respond(400, {"error": str(e)})
        except Exception as e:
            logger.exception("unhandled error serving %s", self.path)
            self._respond(500, {"error": str(e)})


def make_server(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    service: FilterService | None = None,
) -> ThreadingHTTPServer:
    """Bind the sidecar without starting it (port 0 picks a free port)."""
    global _service
    if service is not None:
        _service = service
    return ThreadingHTTPServer((host, port), FilterHandler)


def serve(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    service: FilterService | None = None,
) -> None:
    """Start the profanity-filter HTTP sidecar."""
    server = make_server(host, port, service)
    bound_host, bound_port = server.server_address[:2]
    logger.info("profanity-filter sidecar listening on http://%s:%d", bound_host, bound_port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        server.server_close()


if __name__ == "__main__":
    import argparse
    from .cli import configure_logging
    parser = argparse.ArgumentParser(description="Profanity filter HTTP sidecar")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config path")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    configure_logging(args.log_level)
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    serve(host=args.host, port=args.port, service=create_service(cfg))
