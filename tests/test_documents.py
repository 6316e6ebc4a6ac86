"""Tests for the documents module."""
import random
from datetime import date

import pytest

from app.sgc.constants import DocumentStatus, DocumentType, Sector
from app.sgc.modules.documents.service import (
    create_document,
    delete_document,
    document_stats,
    documents_by_status,
    simulate_upload,
    update_document,
    validate_document_payload,
)
from app.sgc.seed import get_initial_data
from app.sgc.store import Store
from app.sgc.utils import RecordNotFound

TODAY = date(2024, 5, 1)


@pytest.fixture()
def store():
    return Store(get_initial_data())


def test_validate_document_payload_required_fields():
    errors = validate_document_payload({})
    assert "Title is required." in errors
    assert "Author is required." in errors
    assert "File name is required." in errors
    assert "Version is required." in errors


def test_validate_document_payload_bad_enum():
    errors = validate_document_payload(
        {"title": "t", "author": "a", "file_name": "f.pdf", "version": "1.0", "status": "Aprobado"}
    )
    assert len(errors) == 1
    assert errors[0].startswith("Invalid status")


def test_create_document_defaults(store):
    doc = create_document(store, {"title": " Guía ", "author": "Ana", "file_name": "guia.pdf"}, today=TODAY)
    assert doc.title == "Guía"
    assert doc.status == DocumentStatus.DRAFT
    assert doc.version == "1.0"
    assert doc.sector == Sector.DEVELOPMENT
    assert doc.type == DocumentType.PROCEDURE
    assert doc.upload_date == doc.last_modified == "2024-05-01"
    assert store.get_state().documents[-1] == doc


def test_create_document_ids_unique(store):
    a = create_document(store, {"title": "a"}, today=TODAY)
    b = create_document(store, {"title": "b"}, today=TODAY)
    assert a.id != b.id


def test_update_document_only_advances_last_modified(store):
    doc = update_document(store, "1", {"title": "Manual v4", "status": "Obsoleto"}, today=TODAY)
    assert doc.title == "Manual v4"
    assert doc.status == DocumentStatus.OBSOLETE
    assert doc.last_modified == "2024-05-01"
    assert doc.upload_date == "2024-01-15"
    assert store.get_state().documents[0] == doc


def test_update_unknown_document_raises(store):
    with pytest.raises(RecordNotFound):
        update_document(store, "nope", {"title": "x"}, today=TODAY)


def test_delete_document(store):
    delete_document(store, "2")
    assert [d.id for d in store.get_state().documents] == ["1", "3", "4"]


def test_simulate_upload():
    name, size = simulate_upload(random.Random(7), original_name="../Informe Final.pdf")
    assert name == "Informe_Final.pdf"
    assert size.endswith(" MB")
    assert 0.5 <= float(size.split()[0]) <= 5.5


def test_document_stats_rows():
    rows = document_stats(get_initial_data())
    assert rows[0] == {"sector": "TOTAL", "total": 4, "active": 2, "review": 2}
    assert [r["sector"] for r in rows[1:]] == [s.value for s in Sector]
    qa = next(r for r in rows if r["sector"] == "QA")
    assert qa == {"sector": "QA", "total": 1, "active": 0, "review": 1}


def test_documents_by_status_after_add(store):
    assert documents_by_status(store.get_state())[DocumentStatus.ACTIVE] == 2
    create_document(store, {"title": "Nuevo", "status": "Activo"}, today=TODAY)
    assert documents_by_status(store.get_state())[DocumentStatus.ACTIVE] == 3


def test_document_stats_for_one_sector():
    state = get_initial_data()
    rows = document_stats(state, Sector.QA)
    assert rows == [
        {"sector": "TOTAL", "total": 1, "active": 0, "review": 1},
        {"sector": "QA", "total": 1, "active": 0, "review": 1},
    ]
    by_status = documents_by_status(state, Sector.QA)
    assert sum(by_status.values()) == 1
    assert by_status[DocumentStatus.IN_REVIEW] == 1
