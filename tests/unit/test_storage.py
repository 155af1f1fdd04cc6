from __future__ import annotations

import json

import pytest

from sankey_flows.models import new_row
from sankey_flows.storage import (
    InMemoryFlowRepository,
    JsonDirectoryFlowRepository,
    flows_from_json_bytes,
    flows_to_json_bytes,
)


def test_payload_holds_rows_not_graph():
    rows = [new_row("A", "B", "1")]
    payload = json.loads(flows_to_json_bytes(rows))
    assert payload["schema_version"] == 1
    assert payload["flows"] == [{"id": rows[0].id, "source": "A", "target": "B", "value": "1"}]
    assert "nodes" not in payload


def test_payload_tolerates_loose_rows():
    data = json.dumps({"flows": [{"source": "A", "target": "B", "value": 42}, {"source": None}]}).encode()
    rows = flows_from_json_bytes(data)
    assert [(r.source, r.target, r.value) for r in rows] == [("A", "B", "42"), ("", "", "")]
    assert all(r.id for r in rows)


def test_payload_keeps_falsy_names():
    data = json.dumps({"flows": [{"id": "r1", "source": 0, "target": False, "value": 0}]}).encode()
    rows = flows_from_json_bytes(data)
    assert [(r.source, r.target, r.value) for r in rows] == [("0", "False", "0")]


def test_unsupported_schema_version():
    with pytest.raises(ValueError):
        flows_from_json_bytes(json.dumps({"schema_version": 9, "flows": []}).encode())


def test_in_memory_repository():
    repo = InMemoryFlowRepository()
    rows = [new_row("A", "B", "1"), new_row("B", "C", "2")]
    assert repo.get("d1") is None
    repo.save("d1", rows)
    assert repo.get("d1") == rows
    assert repo.get("d1") is not rows


def test_directory_repository(tmp_path):
    repo = JsonDirectoryFlowRepository(tmp_path / "store")
    rows = [new_row("A", "B", "1")]
    assert repo.get("abc") is None
    repo.save("abc", rows)
    assert (tmp_path / "store" / "abc.json").exists()
    assert repo.get("abc") == rows


def test_directory_repository_rejects_unsafe_ids(tmp_path):
    repo = JsonDirectoryFlowRepository(tmp_path)
    with pytest.raises(ValueError):
        repo.save("../escape", [])
