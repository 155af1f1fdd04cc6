from __future__ import annotations

import plotly.graph_objects as go
from plotly.colors import hex_to_rgb

from .models import SankeyGraph

LINK_ALPHA = 0.4


def link_rgba(colour: str, alpha: float = LINK_ALPHA) -> str:
    """Translucent version of a node colour; non-hex colours are passed through unchanged."""
    if not colour.startswith("#") or len(colour) != 7:
        return colour
    r, g, b = hex_to_rgb(colour)
    return f"rgba({r},{g},{b},{alpha})"


def build_sankey_figure(graph: SankeyGraph, title: str = "Sankey Diagram", value_suffix: str = "") -> go.Figure:
    labels = [n.name for n in graph.nodes]
    link_labels = [f"{labels[link.source]} → {labels[link.target]}: {link.value:g}{value_suffix}" for link in graph.links]

    fig = go.Figure(
        data=[
            go.Sankey(
                arrangement="snap",
                node=dict(
                    pad=18,
                    thickness=18,
                    line=dict(width=0.5),
                    label=labels,
                    color=[n.colour for n in graph.nodes],
                ),
                link=dict(
                    source=[link.source for link in graph.links],
                    target=[link.target for link in graph.links],
                    value=[link.value for link in graph.links],
                    label=link_labels,
                    color=[link_rgba(link.colour) for link in graph.links],
                ),
            )
        ]
    )
    fig.update_layout(
        title_text=title,
        font=dict(size=12),
        margin=dict(l=20, r=20, t=60, b=20),
    )
    return fig


def fig_to_html_bytes(fig: go.Figure) -> bytes:
    return fig.to_html(include_plotlyjs="cdn", full_html=True).encode("utf-8")
