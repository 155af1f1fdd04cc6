from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

from .models import FlowRow, new_id

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


class FlowRepository(Protocol):
    """Keyed storage for diagram rows. Only rows are stored; graphs are rebuilt on load."""

    def get(self, diagram_id: str) -> Optional[list[FlowRow]]: ...

    def save(self, diagram_id: str, rows: Sequence[FlowRow]) -> None: ...


# ---------- Payload (JSON) ----------
def flows_to_json_bytes(rows: Sequence[FlowRow]) -> bytes:
    payload = {
        "schema_version": SCHEMA_VERSION,
        "updated_utc": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "flows": [r.to_dict() for r in rows],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")


def _text(v: Any) -> str:
    return "" if v is None else str(v)


def _row_from_dict(raw: dict[str, Any]) -> FlowRow:
    return FlowRow(
        id=str(raw.get("id") or new_id()),
        source=_text(raw.get("source")),
        target=_text(raw.get("target")),
        value=_text(raw.get("value")),
    )


def flows_from_json_bytes(b: bytes) -> list[FlowRow]:
    payload = json.loads(b.decode("utf-8"))
    ver = int(payload.get("schema_version", SCHEMA_VERSION))
    if ver != SCHEMA_VERSION:
        raise ValueError("Unsupported flows schema_version.")
    flows = payload.get("flows", []) or []
    return [_row_from_dict(f) for f in flows]


# ---------- Repositories ----------
class InMemoryFlowRepository:
    def __init__(self) -> None:
        self._items: dict[str, bytes] = {}

    def get(self, diagram_id: str) -> Optional[list[FlowRow]]:
        data = self._items.get(diagram_id)
        return None if data is None else flows_from_json_bytes(data)

    def save(self, diagram_id: str, rows: Sequence[FlowRow]) -> None:
        self._items[diagram_id] = flows_to_json_bytes(rows)


_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonDirectoryFlowRepository:
    """One `<diagram_id>.json` file per diagram inside `root`."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _path(self, diagram_id: str) -> Path:
        if not _SAFE_ID.match(diagram_id):
            raise ValueError(f"Invalid diagram id: {diagram_id!r}")
        return self.root / f"{diagram_id}.json"

    def get(self, diagram_id: str) -> Optional[list[FlowRow]]:
        path = self._path(diagram_id)
        if not path.exists():
            return None
        return flows_from_json_bytes(path.read_bytes())

    def save(self, diagram_id: str, rows: Sequence[FlowRow]) -> None:
        path = self._path(diagram_id)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(flows_to_json_bytes(rows))
        logger.debug("saved %d rows to %s", len(rows), path)
