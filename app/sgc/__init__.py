import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify

from app.sgc.config import load_config
from app.sgc.persistence import build_store
from app.sgc.storage import storage_from_config


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    # Spanish labels stay readable in responses
    app.json.ensure_ascii = False
    app.logger.setLevel(app.config.get("LOG_LEVEL") or "INFO")

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    backend = (app.config.get("STORAGE_BACKEND") or "local").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")
        if backend == "db" and str(app.config.get("DATABASE_URL") or "").startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")

    sessions = None
    if backend == "db":
        from app.sgc.db import init_db
        from app.sgc.models import Base

        sessions = init_db(app)
        Base.metadata.create_all(bind=app.extensions["sqlalchemy_engine"])

        def _dispose_engine_on_fork() -> None:
            if hasattr(os, "register_at_fork"):
                def _after_fork_child():
                    engine = app.extensions.get("sqlalchemy_engine")
                    if engine:
                        engine.dispose()
                        app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

                os.register_at_fork(after_in_child=_after_fork_child)

        _dispose_engine_on_fork()

    storage = storage_from_config(app.config, sessions=sessions)
    app.extensions["sgc_storage"] = storage
    app.extensions["sgc_store"] = build_store(storage, app.config["STATE_KEY"])
    app.logger.info("State store ready (backend=%s, key=%s)", backend, app.config["STATE_KEY"])

    from app.sgc.api import bp as api_bp
    from app.sgc.routes import bp as routes_bp

    app.register_blueprint(routes_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.errorhandler(400)
    def _err_400(e):  # type: ignore[no-redef]
        return jsonify({"error": getattr(e, "description", None) or "Bad request."}), 400

    @app.errorhandler(404)
    def _err_404(e):  # type: ignore[no-redef]
        return jsonify({"error": "Not found."}), 404

    @app.errorhandler(500)
    def _err_500(e):  # type: ignore[no-redef]
        app.logger.exception("Unhandled 500")
        return jsonify({"error": "Internal server error."}), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
