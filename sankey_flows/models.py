from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field, replace
from typing import Any

FLOW_FIELDS = ["source", "target", "value"]


# ---------- Rows ----------
@dataclass(frozen=True)
class FlowRow:
    id: str
    source: str = ""
    target: str = ""
    value: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def new_id() -> str:
    return uuid.uuid4().hex


def new_row(source: str = "", target: str = "", value: str = "") -> FlowRow:
    return FlowRow(id=new_id(), source=source, target=target, value=value)


def add_row(rows: list[FlowRow]) -> list[FlowRow]:
    return [*rows, new_row()]


def remove_row(rows: list[FlowRow], row_id: str) -> list[FlowRow]:
    return [r for r in rows if r.id != row_id]


def update_row(rows: list[FlowRow], row_id: str, field_name: str, value: str) -> list[FlowRow]:
    """
    Returns a new row list with one field of one row replaced.
    Rows are never edited in place, so a list already handed to the normalizer stays intact.
    """
    if field_name not in FLOW_FIELDS:
        raise ValueError(f"Unknown flow field: {field_name}")
    return [replace(r, **{field_name: value}) if r.id == row_id else r for r in rows]


# ---------- Graph ----------
@dataclass(frozen=True)
class Node:
    name: str
    colour: str


@dataclass(frozen=True)
class Link:
    source: int
    target: int
    value: float
    colour: str


@dataclass(frozen=True)
class SankeyGraph:
    nodes: list[Node] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)

    @property
    def total_flow(self) -> float:
        return float(sum(link.value for link in self.links))

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [asdict(n) for n in self.nodes],
            "links": [asdict(link) for link in self.links],
        }
