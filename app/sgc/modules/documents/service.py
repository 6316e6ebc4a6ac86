from __future__ import annotations

import random
from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING

from werkzeug.utils import secure_filename

from app.sgc import actions
from app.sgc.constants import DocumentStatus, DocumentType, Sector
from app.sgc.metrics import aggregate_counts, count_where, filter_by_sector
from app.sgc.records import AppState, Document
from app.sgc.utils import clean, coerce_enum, find_by_id, generate_id, invalid_enum_error, today_iso

if TYPE_CHECKING:
    from app.sgc.store import Store


REQUIRED_FIELDS = (
    ("title", "Title is required."),
    ("author", "Author is required."),
    ("file_name", "File name is required."),
    ("version", "Version is required."),
)


def validate_document_payload(payload: dict) -> list[str]:
    """Validate document creation/update payload. Returns list of errors."""
    errors = [msg for key, msg in REQUIRED_FIELDS if not clean(payload.get(key))]
    for enum_cls, key, label in (
        (Sector, "sector", "sector"),
        (DocumentType, "type", "document type"),
        (DocumentStatus, "status", "status"),
    ):
        err = invalid_enum_error(enum_cls, payload.get(key), label)
        if err:
            errors.append(err)
    return errors


def simulate_upload(rng: random.Random | None = None, original_name: str | None = None) -> tuple[str, str]:
    """
    Stand-in for a file upload: returns (file_name, file_size) without
    storing anything.
    """
    rng = rng or random.Random()
    file_name = secure_filename(original_name or "") or f"documento-{generate_id()}.pdf"
    file_size = f"{rng.uniform(0.5, 5.5):.1f} MB"
    return file_name, file_size


def create_document(store: "Store", payload: dict, *, today: date | None = None) -> Document:
    """New document; status defaults to Borrador and version to 1.0."""
    now = today_iso(today)
    doc = Document(
        id=clean(payload.get("id")) or generate_id(),
        title=clean(payload.get("title")),
        description=clean(payload.get("description")),
        file_name=clean(payload.get("file_name")),
        file_size=clean(payload.get("file_size")),
        upload_date=now,
        sector=coerce_enum(Sector, payload.get("sector"), Sector.DEVELOPMENT),
        type=coerce_enum(DocumentType, payload.get("type"), DocumentType.PROCEDURE),
        status=coerce_enum(DocumentStatus, payload.get("status"), DocumentStatus.DRAFT),
        version=clean(payload.get("version")) or "1.0",
        author=clean(payload.get("author")),
        last_modified=now,
    )
    store.dispatch(actions.add_document(doc))
    return doc


def update_document(store: "Store", document_id: str, payload: dict, *, today: date | None = None) -> Document:
    """
    Overwrite the supplied fields in place. Only last_modified advances;
    no version history is kept.
    """
    current = find_by_id(store.get_state().documents, document_id)
    changes: dict[str, object] = {}
    for key in ("title", "description", "file_name", "file_size", "version", "author"):
        if key in payload:
            changes[key] = clean(payload[key])
    if "sector" in payload:
        changes["sector"] = coerce_enum(Sector, payload["sector"], current.sector)
    if "type" in payload:
        changes["type"] = coerce_enum(DocumentType, payload["type"], current.type)
    if "status" in payload:
        changes["status"] = coerce_enum(DocumentStatus, payload["status"], current.status)
    doc = replace(current, **changes, last_modified=today_iso(today))
    store.dispatch(actions.update_document(doc))
    return doc


def delete_document(store: "Store", document_id: str) -> None:
    store.dispatch(actions.delete_document(document_id))


def document_stats(state: AppState, sector: Sector | None = None) -> list[dict]:
    """
    TOTAL row first, then one row per sector (total / active / review).
    With a sector, TOTAL covers that sector only and it is the single sector row.
    """
    docs = filter_by_sector(state.documents, sector)
    rows = [
        {
            "sector": "TOTAL",
            "total": len(docs),
            "active": count_where(docs, lambda d: d.status == DocumentStatus.ACTIVE),
            "review": count_where(docs, lambda d: d.status == DocumentStatus.IN_REVIEW),
        }
    ]
    for row_sector in ((Sector(sector),) if sector else Sector):
        in_sector = [d for d in docs if d.sector == row_sector]
        rows.append(
            {
                "sector": row_sector.value,
                "total": len(in_sector),
                "active": count_where(in_sector, lambda d: d.status == DocumentStatus.ACTIVE),
                "review": count_where(in_sector, lambda d: d.status == DocumentStatus.IN_REVIEW),
            }
        )
    return rows


def documents_by_status(state: AppState, sector: Sector | None = None) -> dict[DocumentStatus, int]:
    return aggregate_counts(filter_by_sector(state.documents, sector), lambda d: d.status, DocumentStatus)
