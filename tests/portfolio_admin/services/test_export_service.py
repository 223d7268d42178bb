import csv
import io
import json

import pytest

from portfolio_admin.services.export_service import ExportService, export_file_name, slugify


@pytest.fixture()
def rows():
    return [
        {"id": "p-1", "title": "Site", "technologies": ["Dash", "pandas"]},
        {"id": "p-2", "title": "CLI", "featured": True},
    ]


def test_export_file_names():
    assert slugify("  My Projects ") == "my-projects"
    assert export_file_name("My Projects", "csv") == "my-projects-export.csv"
    assert export_file_name("My Projects", "json", selected_only=True) == "my-projects-selected-data.json"


def test_csv_has_union_of_fields(rows):
    payload = ExportService().to_csv_bytes(rows, transform=lambda r: {
        k: ", ".join(v) if isinstance(v, list) else v for k, v in r.items()
    })
    reader = csv.DictReader(io.StringIO(payload.decode("utf-8")))

    assert reader.fieldnames == ["id", "title", "technologies", "featured"]
    records = list(reader)
    assert records[0]["technologies"] == "Dash, pandas"
    assert records[1]["featured"] == "True"


def test_csv_of_nothing_is_empty():
    assert ExportService().to_csv_bytes([]) == b""


def test_json_export_keeps_values(rows):
    payload, name = ExportService().export(rows, title="Projects", fmt="json")
    assert name == "projects-export.json"
    assert json.loads(payload) == rows


def test_default_transform_used_when_none_given(rows):
    service = ExportService(transform=lambda r: {"id": r["id"]})
    assert json.loads(service.to_json_bytes(rows)) == [{"id": "p-1"}, {"id": "p-2"}]


def test_unknown_format_rejected(rows):
    with pytest.raises(ValueError):
        ExportService().export(rows, title="Projects", fmt="xlsx")
