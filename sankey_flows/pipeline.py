from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .config import Settings
from .errors import EmptyResult, FlowError
from .models import FlowRow, SankeyGraph
from .normalize import rows_to_sankey
from .parsing import Dialect, parse_flows_csv
from .paths import expand_path_rows
from .storage import FlowRepository

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    graph: Optional[SankeyGraph] = None
    rows: list[FlowRow] = field(default_factory=list)
    error: Optional[FlowError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.graph is not None


def rows_from_csv(text: str, settings: Optional[Settings] = None) -> list[FlowRow]:
    """Parses either dialect into pair rows. Path rows come back already expanded."""
    settings = settings or Settings()
    dialect, rows = parse_flows_csv(text, settings.field_delimiter)
    if not rows:
        raise EmptyResult("No valid data found in CSV file.")
    if dialect is Dialect.PATH:
        rows = expand_path_rows(rows, settings.path_delimiter)
        if not rows:
            raise EmptyResult("No valid data found in CSV file. Each path needs at least two nodes.")
    logger.info("read %d flows (%s dialect)", len(rows), dialect.value)
    return rows


def build_graph(rows: Sequence[FlowRow], settings: Optional[Settings] = None) -> SankeyGraph:
    settings = settings or Settings()
    if not rows:
        raise EmptyResult("No valid rows found. Add at least one flow with source, target, and value.")
    graph = rows_to_sankey(rows, settings.palette)
    logger.debug("built graph with %d nodes and %d links", len(graph.nodes), len(graph.links))
    return graph


def build_graph_from_csv(text: str, settings: Optional[Settings] = None) -> SankeyGraph:
    return build_graph(rows_from_csv(text, settings), settings)


def run_pipeline(
    text: Optional[str] = None,
    rows: Optional[Sequence[FlowRow]] = None,
    settings: Optional[Settings] = None,
) -> PipelineResult:
    """
    Runs text (or already edited rows) through to a graph and reports failure as a value.
    On failure no graph is returned, so the caller keeps whatever it showed before.
    """
    if (text is None) == (rows is None):
        raise ValueError("Pass exactly one of text or rows.")
    result = PipelineResult()
    try:
        result.rows = rows_from_csv(text, settings) if text is not None else list(rows or [])
        result.graph = build_graph(result.rows, settings)
    except FlowError as e:
        logger.warning("%s", e)
        result.graph = None
        result.error = e
    return result


def load_graph(repository: FlowRepository, diagram_id: str, settings: Optional[Settings] = None) -> SankeyGraph:
    rows = repository.get(diagram_id)
    if rows is None:
        raise KeyError(f"diagram not found: {diagram_id}")
    return build_graph(rows, settings)
