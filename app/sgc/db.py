from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager

from flask import Flask
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker


def make_sessionmaker(db_url: str, *, debug_logger=None) -> sessionmaker:
    is_postgres = db_url.startswith("postgres")
    engine_kwargs: dict[str, object] = {
        "future": True,
        "pool_pre_ping": True,
    }
    if is_postgres:
        engine_kwargs.update(
            {
                "pool_recycle": 1800,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
            }
        )
    engine = create_engine(db_url, **engine_kwargs)
    if debug_logger is not None:
        @event.listens_for(engine, "checkout")
        def _receive_checkout(dbapi_connection, connection_record, connection_proxy):  # type: ignore[no-redef]
            debug_logger.debug("DB connection checkout from pool")
    return sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def init_db(app: Flask) -> sessionmaker:
    """
    Create the engine/session factory for the `db` storage backend and keep
    both on app.extensions.
    """
    sm = make_sessionmaker(
        app.config["DATABASE_URL"],
        debug_logger=app.logger if app.config.get("ENV") != "production" else None,
    )
    app.extensions["sqlalchemy_engine"] = sm.kw["bind"]
    app.extensions["sqlalchemy_sessionmaker"] = sm
    return sm


@contextmanager
def session_scope(sm: sessionmaker) -> Generator[Session, None, None]:
    """
    Yields a session and commits/rolls back.
    """
    s: Session = sm()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
