from __future__ import annotations

import logging
from typing import Iterable, Union

from .models import FlowRow, new_row

logger = logging.getLogger(__name__)

PATH_DELIMITER = ","

Value = Union[str, int, float]


def format_value(value: Value) -> str:
    # 40 -> "40", 40.0 -> "40", 2.5 -> "2.5"; text passes through trimmed
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def split_path(path: str, delimiter: str = PATH_DELIMITER) -> list[str]:
    tokens = [t.strip() for t in path.split(delimiter)]
    return [t for t in tokens if t]


def expand_path(path: str, value: Value, delimiter: str = PATH_DELIMITER) -> list[FlowRow]:
    """
    Turns "A, B, C" at value v into the edges A → B and B → C, each carrying v.
    Paths with fewer than two names produce no edges.
    """
    names = split_path(path, delimiter)
    v = format_value(value)
    return [new_row(source=s, target=t, value=v) for s, t in zip(names, names[1:])]


def expand_path_rows(rows: Iterable[FlowRow], delimiter: str = PATH_DELIMITER) -> list[FlowRow]:
    """Expands path-mode rows (path text held in `source`) into pair rows, keeping row order."""
    out: list[FlowRow] = []
    for row in rows:
        edges = expand_path(row.source, row.value, delimiter)
        if not edges:
            logger.debug("path %r has fewer than two nodes; no edges produced", row.source)
        out.extend(edges)
    return out
