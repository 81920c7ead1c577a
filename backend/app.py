#!/usr/bin/env python3
"""
app.py
------
Flask entry point for the follower analyzer API.
Run with:  python3 backend/app.py
Production: gunicorn -c backend/gunicorn_config.py app:app

Routes:
    POST    /analyze, /api/analyze   → ZIP bytes (raw body or 'zipfile' form field) → JSON
                                       (?format=csv → non_followers.csv)
    OPTIONS /analyze, /api/analyze   → CORS preflight
    GET     /healthz                 → health check

Uploads are held in memory only; nothing is written to disk and no usernames are logged.
"""

import io
import logging
import os
import socket
import sys

from flask import Flask, Request, Response, current_app, jsonify, request

_BACKEND_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, _BACKEND_DIR)

import analyzer
from errors import AnalysisError, PayloadTooLarge
from export import to_csv
from ratelimit import RateLimiter

MB = 1024 * 1024

RATE_LIMITED = "Rate limit exceeded. Please try again later."
NO_FILE = "No file uploaded"
METHOD_NOT_ALLOWED = "Method not allowed"
UNEXPECTED = "Something went wrong. Please try again or use a valid Instagram data export."


class InMemoryRequest(Request):
    """Multipart uploads go to a BytesIO instead of a spooled temp file."""

    def _get_file_stream(self, total_content_length, content_type, filename=None, content_length=None):
        return io.BytesIO()


def _env_origins() -> list[str]:
    origins = [o.strip() for o in os.environ.get("ALLOWED_ORIGINS", "").split(",") if o.strip()]
    return origins or ["*"]


# ── Helpers ───────────────────────────────────────────────────────

def _error(status: int, message: str, reasons: list[str] | None = None):
    body = {"success": False, "error": message}
    if reasons:
        body["reasons"] = reasons
    return jsonify(body), status


def client_ip(req) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    forwarded = req.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = req.headers.get("X-Real-IP", "")
    if real_ip:
        return real_ip.strip()
    return req.remote_addr or "unknown"


def _max_upload_bytes() -> int:
    """MAX_CONTENT_LENGTH may be None (Flask's "no limit"); the analyzer still needs one."""
    return current_app.config.get("MAX_CONTENT_LENGTH") or analyzer.DEFAULT_MAX_BYTES


def _read_upload() -> bytes:
    upload = request.files.get("zipfile")
    if upload is not None:
        return upload.read()
    return request.get_data(cache=False)


def _apply_cors(resp: Response) -> Response:
    origin = request.headers.get("Origin", "")
    allowed = current_app.config["ALLOWED_ORIGINS"]
    if "*" in allowed:
        resp.headers["Access-Control-Allow-Origin"] = origin or "*"
    elif origin in allowed:
        resp.headers["Access-Control-Allow-Origin"] = origin
    resp.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    resp.headers["Access-Control-Allow-Headers"] = "Content-Type, X-Requested-With"
    resp.headers["Access-Control-Max-Age"] = "86400"
    resp.vary.add("Origin")
    return resp


# ── Routes ────────────────────────────────────────────────────────

def healthz():
    """Health check for load balancers."""
    return "", 200


def analyze_upload():
    if request.method == "OPTIONS":
        return Response(status=200)

    limiter = current_app.extensions["rate_limiter"]
    if not limiter.allow(client_ip(request)):
        return _error(429, RATE_LIMITED)

    data = _read_upload()
    if not data:
        return _error(400, NO_FILE)

    print("📦 ZIP file received — starting analysis...")
    try:
        result = analyzer.analyze(
            data,
            max_bytes=_max_upload_bytes(),
            max_entry_bytes=current_app.config["MAX_ENTRY_BYTES"],
        )
    except AnalysisError as e:
        print(f"⚠️  Rejected upload: {type(e).__name__}")
        return _error(e.status, e.message, getattr(e, "reasons", None))
    except Exception as e:
        print(f"❌ Error: {type(e).__name__}")
        return _error(500, UNEXPECTED)

    print(f"📊 Followers: {result.total_followers} | Following: {result.total_following} "
          f"| Not following back: {result.count}")

    if request.args.get("format") == "csv":
        return Response(
            to_csv(result.non_followers),
            mimetype="text/csv",
            headers={"Content-Disposition": 'attachment; filename="non_followers.csv"'},
        )
    return jsonify({"success": True, **result.to_dict(), "message": "Analysis complete"})


def _too_large(_e):
    return _error(413, PayloadTooLarge(_max_upload_bytes()).message)


def _method_not_allowed(_e):
    return _error(405, METHOD_NOT_ALLOWED)


# ── App factory ───────────────────────────────────────────────────

def create_app(config: dict | None = None, limiter: RateLimiter | None = None) -> Flask:
    app = Flask(__name__)
    app.request_class = InMemoryRequest

    # Environment first, explicit overrides last
    app.config["PORT"] = int(os.environ.get("PORT", 5000))
    app.config["MAX_CONTENT_LENGTH"] = int(os.environ.get("MAX_UPLOAD_MB", 50)) * MB
    app.config["MAX_ENTRY_BYTES"] = int(os.environ.get("MAX_ENTRY_MB", 100)) * MB
    app.config["ALLOWED_ORIGINS"] = _env_origins()
    app.config["RATE_LIMIT_MAX_REQUESTS"] = int(os.environ.get("RATE_LIMIT_MAX_REQUESTS", 10))
    app.config["RATE_LIMIT_WINDOW_SECONDS"] = float(os.environ.get("RATE_LIMIT_WINDOW_SECONDS", 300))
    if config:
        app.config.update(config)

    if limiter is None:
        limiter = RateLimiter(
            max_requests=app.config["RATE_LIMIT_MAX_REQUESTS"],
            window_seconds=app.config["RATE_LIMIT_WINDOW_SECONDS"],
        )
    app.extensions["rate_limiter"] = limiter

    app.add_url_rule("/healthz", view_func=healthz)
    for path in ("/analyze", "/api/analyze"):
        app.add_url_rule(path, endpoint=f"analyze:{path}", view_func=analyze_upload,
                         methods=["POST", "OPTIONS"])

    app.register_error_handler(413, _too_large)
    app.register_error_handler(405, _method_not_allowed)
    app.after_request(_apply_cors)
    return app


app = create_app()


# ── Main ──────────────────────────────────────────────────────────

def _local_ip():
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
            s.connect(("8.8.8.8", 80))
            return s.getsockname()[0]
    except OSError:
        return "?"


def main():
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    port = app.config["PORT"]
    bind_all = os.environ.get("BIND_ALL", "").strip().lower() in ("1", "true", "yes")
    host = "0.0.0.0" if bind_all else "localhost"

    print(f"🌐 Follower analyzer running at http://127.0.0.1:{port}")
    if bind_all:
        print(f"   Reachable from other devices on the network at http://{_local_ip()}:{port}")
    print("⌨️  Press Ctrl+C to stop")

    try:
        app.run(host=host, port=port, debug=False, use_reloader=False, threaded=True)
    except KeyboardInterrupt:
        print("\n👋 Server stopped")


if __name__ == "__main__":
    main()
