from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from sqlalchemy.orm import Session, sessionmaker


class StorageError(RuntimeError):
    pass


class BlobStore:
    """Key -> opaque bytes. `load` returns None when the key has never been saved."""

    def load(self, key: str) -> bytes | None:
        raise NotImplementedError

    def save(self, key: str, blob: bytes) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class LocalStorage(BlobStore):
    root: Path

    def _path(self, key: str) -> Path:
        safe_key = key.lstrip("/").replace("\\", "/")
        return self.root / f"{safe_key}.json"

    def load(self, key: str) -> bytes | None:
        p = self._path(key)
        if not p.exists():
            return None
        return p.read_bytes()

    def save(self, key: str, blob: bytes) -> None:
        p = self._path(key)
        p.parent.mkdir(parents=True, exist_ok=True)
        # write-then-rename so a crash never leaves a half-written snapshot
        tmp = p.with_name(p.name + ".tmp")
        tmp.write_bytes(blob)
        os.replace(tmp, p)


@dataclass(frozen=True)
class S3Storage(BlobStore):
    endpoint: str
    region: str
    bucket: str
    access_key_id: str
    secret_access_key: str
    prefix: str = "state/"

    def _client(self):
        try:
            import boto3  # type: ignore
        except Exception as e:  # pragma: no cover
            raise StorageError("boto3 required for S3 storage. Install boto3.") from e
        return boto3.client(
            "s3",
            endpoint_url=f"https://{self.endpoint}" if self.endpoint else None,
            region_name=self.region or None,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
        )

    def _object_key(self, key: str) -> str:
        return f"{self.prefix}{key}.json"

    def load(self, key: str) -> bytes | None:
        client = self._client()
        try:
            obj = client.get_object(Bucket=self.bucket, Key=self._object_key(key))
        except client.exceptions.NoSuchKey:
            return None
        return obj["Body"].read()

    def save(self, key: str, blob: bytes) -> None:
        self._client().put_object(
            Bucket=self.bucket,
            Key=self._object_key(key),
            Body=blob,
            ContentType="application/json",
        )


@dataclass(frozen=True)
class DatabaseStorage(BlobStore):
    sessions: sessionmaker

    def load(self, key: str) -> bytes | None:
        from app.sgc.models import StateSnapshot

        s: Session = self.sessions()
        try:
            row = s.get(StateSnapshot, key)
            return row.blob if row else None
        finally:
            s.close()

    def save(self, key: str, blob: bytes) -> None:
        from app.sgc.db import session_scope
        from app.sgc.models import StateSnapshot

        with session_scope(self.sessions) as s:
            row = s.get(StateSnapshot, key)
            if row is None:
                s.add(StateSnapshot(key=key, blob=blob, updated_at=datetime.utcnow()))
            else:
                row.blob = blob
                row.updated_at = datetime.utcnow()


def storage_from_config(config: dict, sessions: sessionmaker | None = None) -> BlobStore:
    backend = (config.get("STORAGE_BACKEND") or "local").strip().lower()
    if backend == "s3":
        bucket = (config.get("S3_BUCKET") or "").strip()
        if not bucket:
            raise StorageError("S3_BUCKET is required when STORAGE_BACKEND=s3.")
        return S3Storage(
            endpoint=(config.get("S3_ENDPOINT") or "").strip(),
            region=(config.get("S3_REGION") or "nyc3").strip(),
            bucket=bucket,
            access_key_id=(config.get("S3_ACCESS_KEY_ID") or "").strip(),
            secret_access_key=(config.get("S3_SECRET_ACCESS_KEY") or "").strip(),
        )
    if backend == "db":
        if sessions is None:
            raise StorageError("STORAGE_BACKEND=db needs an initialized database session factory.")
        return DatabaseStorage(sessions=sessions)
    # default local
    root = (config.get("STORAGE_ROOT") or "").strip()
    return LocalStorage(root=Path(root) if root else Path(os.getcwd()) / "storage")
