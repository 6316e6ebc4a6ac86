import os
from dataclasses import dataclass

from app.sgc.constants import DEFAULT_STATE_KEY


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str
    log_level: str
    state_key: str

    storage_backend: str
    storage_root: str
    database_url: str
    s3_endpoint: str
    s3_region: str
    s3_bucket: str
    s3_access_key_id: str
    s3_secret_access_key: str


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def load_settings() -> Settings:
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        log_level=_getenv("LOG_LEVEL", "INFO").upper(),
        state_key=_getenv("STATE_KEY", DEFAULT_STATE_KEY),
        storage_backend=_getenv("STORAGE_BACKEND", "local").lower(),
        storage_root=_getenv("STORAGE_ROOT", ""),
        database_url=_getenv("DATABASE_URL", "sqlite:///sgc.db"),
        s3_endpoint=_getenv("S3_ENDPOINT", ""),
        s3_region=_getenv("S3_REGION", "nyc3"),
        s3_bucket=_getenv("S3_BUCKET", ""),
        s3_access_key_id=_getenv("S3_ACCESS_KEY_ID", ""),
        s3_secret_access_key=_getenv("S3_SECRET_ACCESS_KEY", ""),
    )


def load_config() -> dict:
    s = load_settings()
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "LOG_LEVEL": s.log_level,
        "STATE_KEY": s.state_key,
        "STORAGE_BACKEND": s.storage_backend,
        "STORAGE_ROOT": s.storage_root,
        "DATABASE_URL": s.database_url,
        "S3_ENDPOINT": s.s3_endpoint,
        "S3_REGION": s.s3_region,
        "S3_BUCKET": s.s3_bucket,
        "S3_ACCESS_KEY_ID": s.s3_access_key_id,
        "S3_SECRET_ACCESS_KEY": s.s3_secret_access_key,
        # dispatch bodies are small; snapshots loaded via LOAD_DATA can be larger
        "MAX_CONTENT_LENGTH": 5 * 1024 * 1024,
    }
