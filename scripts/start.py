#!/usr/bin/env python3
"""
Production startup script.

1. Runs the release phase (release.py); it only migrates for STORAGE_BACKEND=db
2. Starts gunicorn on the single-worker layout the state store needs
   (replaces this process via os.execvp)

Environment:
    PORT              listen port, default 8080
    WEB_THREADS       request threads inside the one worker, default 4
    GUNICORN_TIMEOUT  worker timeout in seconds, default 60
    WEB_CONCURRENCY   ignored beyond 1; every worker would hold its own store

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DEFAULT_PORT = 8080
DEFAULT_THREADS = 4
DEFAULT_TIMEOUT = 60


def resolve_port(raw: str | None) -> int:
    raw = (raw or "").strip()
    if not raw:
        print(f"WARNING: PORT not set, using default {DEFAULT_PORT}", flush=True)
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        port = 0
    if port < 1 or port > 65535:
        raise ValueError(f"Invalid PORT value '{raw}'. Must be integer 1-65535.")
    return port


def _positive_int(env: dict, name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        raise ValueError(f"Invalid {name} value '{raw}'. Must be a positive integer.")
    return value


def gunicorn_argv(port: int, env: dict) -> list[str]:
    """Command line for the gunicorn exec; always one worker."""
    if _positive_int(env, "WEB_CONCURRENCY", 1) > 1:
        print("WARNING: WEB_CONCURRENCY > 1 ignored, the state store lives in one process", flush=True)
    return [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{port}",
        "--workers", "1",
        "--threads", str(_positive_int(env, "WEB_THREADS", DEFAULT_THREADS)),
        "--timeout", str(_positive_int(env, "GUNICORN_TIMEOUT", DEFAULT_TIMEOUT)),
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def main() -> None:
    try:
        port = resolve_port(os.environ.get("PORT"))
        argv = gunicorn_argv(port, dict(os.environ))
    except ValueError as e:
        print(f"ERROR: {e}", flush=True)
        sys.exit(1)

    print("=== Running release phase ===", flush=True)
    from scripts.release import run_release
    try:
        run_release()
    except Exception as e:
        print(f"Release failed: {e}", flush=True)
        sys.exit(1)

    print(f"=== Starting gunicorn on 0.0.0.0:{port} ===", flush=True)
    os.execvp("gunicorn", argv)


if __name__ == "__main__":
    main()
