from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from .config import DEFAULT_PALETTE
from .models import FlowRow, Link, Node, SankeyGraph
from .validation import parse_values, rows_to_frame, validate_rows


def get_node_names(frame: pd.DataFrame) -> list[str]:
    """
    Distinct names in first-seen order over source, target of row 1, then row 2, ...
    Matching is exact: "Coal" and "coal" are two nodes.
    """
    flat = frame[["source", "target"]].to_numpy(dtype=object).ravel()
    return [str(n) for n in pd.unique(flat)]


def assign_colours(names: Sequence[str], palette: Sequence[str] = DEFAULT_PALETTE) -> dict[str, str]:
    if not palette:
        raise ValueError("palette must not be empty")
    return {name: palette[i % len(palette)] for i, name in enumerate(names)}


def rows_to_sankey(rows: Sequence[FlowRow], palette: Optional[Sequence[str]] = None) -> SankeyGraph:
    """
    Map rows → {nodes, links}.
    - nodes in first-seen order, each coloured by cycling the palette
    - one link per row in row order; the link takes the colour of its *source* node
    Invalid rows raise IncompleteRow / NonPositiveValue before anything is built.
    """
    validate_rows(rows)
    if not rows:
        return SankeyGraph()

    palette = DEFAULT_PALETTE if palette is None else palette
    tmp = rows_to_frame(rows)

    names = get_node_names(tmp)
    colours = assign_colours(names, palette)
    idx = {name: i for i, name in enumerate(names)}

    sources = tmp["source"].map(idx)
    targets = tmp["target"].map(idx)
    if sources.isna().any() or targets.isna().any():
        raise RuntimeError("node index lookup failed for rows from the same pass")

    values = parse_values(tmp["value"])

    nodes = [Node(name=n, colour=colours[n]) for n in names]
    links = [
        Link(source=int(s), target=int(t), value=float(v), colour=colours[name])
        for s, t, v, name in zip(sources, targets, values, tmp["source"])
    ]
    return SankeyGraph(nodes=nodes, links=links)
