import sys
from pathlib import Path
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Ensure repo root is on sys.path when running as a script (Windows-friendly).
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.sgc.constants import DEFAULT_STATE_KEY
from app.sgc.models import Base
from app.sgc.persistence import serialize_state
from app.sgc.seed import get_initial_data
from app.sgc.storage import DatabaseStorage


def _sessionmaker(database_url: str) -> sessionmaker:
    engine = create_engine(database_url, future=True)
    return sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


def seed_only(*, database_url: str | None = None, state_key: str | None = None) -> bool:
    """
    Create the snapshot table if needed and write the seed state, unless a
    snapshot already exists under the key. Returns True when seed was written.
    """
    database_url = database_url or (os.environ.get("DATABASE_URL") or "sqlite:///sgc.db").strip()
    state_key = state_key or (os.environ.get("STATE_KEY") or DEFAULT_STATE_KEY).strip()

    sm = _sessionmaker(database_url)
    Base.metadata.create_all(bind=sm.kw["bind"])
    storage = DatabaseStorage(sessions=sm)

    if storage.load(state_key) is not None:
        print(f"Snapshot '{state_key}' already present; leaving it untouched.")
        return False

    storage.save(state_key, serialize_state(get_initial_data()))
    print(f"Initialized database (seed_only): wrote seed snapshot '{state_key}'.")
    return True


def main() -> None:
    seed_only(database_url=None)


if __name__ == "__main__":
    main()
