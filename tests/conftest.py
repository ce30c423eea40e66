from __future__ import annotations
import json
from pathlib import Path
import pytest

from fixedwidth.schema.registry import Schema
from fixedwidth.engine.record import Record

PERSON_LAYOUT = {
    "fields": [
        {"name": "fname", "format": "%10s"},
        {"name": "lname", "format": "%-10s"},
        {"name": "points", "format": "%04d", "default": "0"},
    ]
}


@pytest.fixture
def person_schema() -> Schema:
    schema = Schema()
    schema.declare_fields([
        "fname", "undef", "%10s",
        "lname", "undef", "%-10s",
        "points", "0", "%04d",
    ])
    return schema


@pytest.fixture
def person(person_schema: Schema) -> Record:
    return Record(person_schema)


@pytest.fixture
def layout_file(tmp_path: Path) -> Path:
    p = tmp_path / "person.json"
    p.write_text(json.dumps(PERSON_LAYOUT), encoding="utf-8")
    return p


@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d


def _get_manifest(dest: Path) -> dict:
    m = dest / "_manifest.json"
    return json.loads(m.read_text(encoding="utf-8"))


def _get_quarantine_lines(dest: Path) -> list[str]:
    q = dest / "_quarantine.jsonl"
    if not q.exists():
        return []
    return q.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def get_manifest():
    return _get_manifest


@pytest.fixture
def get_quarantine_lines():
    return _get_quarantine_lines
