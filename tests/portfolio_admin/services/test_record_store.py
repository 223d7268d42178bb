import json

import pytest

from portfolio_admin.core.exceptions import RecordStoreError
from portfolio_admin.services.record_store import JsonRecordStore
from portfolio_admin.services.storage import LocalFileSystemStorage


@pytest.fixture()
def store(tmp_path):
    return JsonRecordStore(LocalFileSystemStorage(tmp_path))


def _write(tmp_path, name, payload):
    (tmp_path / f"{name}.json").write_text(json.dumps(payload), encoding="utf-8")


def test_missing_document_is_an_empty_collection(store):
    assert store.list_records("skills") == []


def test_list_records_reads_document(tmp_path, store):
    _write(tmp_path, "skills", [{"id": "s-1", "name": "Python"}, {"id": "s-2", "name": "SQL"}])
    assert [r["name"] for r in store.list_records("skills")] == ["Python", "SQL"]


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "s-1"},
        ["not a record"],
        [{"name": "no id"}],
        [{"id": 7}],
        [{"id": ""}],
    ],
)
def test_invalid_documents_raise(tmp_path, store, payload):
    _write(tmp_path, "skills", payload)
    with pytest.raises(RecordStoreError):
        store.list_records("skills")


def test_invalid_json_raises(tmp_path, store):
    (tmp_path / "skills.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(RecordStoreError):
        store.list_records("skills")


def test_delete_records_removes_only_given_ids(tmp_path, store):
    _write(tmp_path, "projects", [{"id": "p-1"}, {"id": "p-2"}, {"id": "p-3"}])

    removed = store.delete_records("projects", ["p-1", "p-3", "p-404"])

    assert removed == 2
    assert store.list_records("projects") == [{"id": "p-2"}]
    assert not (tmp_path / "projects.json.tmp").exists()


def test_delete_nothing_leaves_document_alone(tmp_path, store):
    _write(tmp_path, "projects", [{"id": "p-1"}])
    before = (tmp_path / "projects.json").read_bytes()

    assert store.delete_records("projects", []) == 0
    assert store.delete_records("projects", ["p-9"]) == 0
    assert (tmp_path / "projects.json").read_bytes() == before


def test_storage_rejects_path_traversal(tmp_path):
    storage = LocalFileSystemStorage(tmp_path / "data")
    with pytest.raises(ValueError):
        storage.read_bytes("../secret.json")

