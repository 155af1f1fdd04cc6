from __future__ import annotations

import pytest

from sankey_flows.config import Settings
from sankey_flows.errors import EmptyResult, IncompleteRow, MalformedHeader, NonPositiveValue
from sankey_flows.pipeline import build_graph, build_graph_from_csv, load_graph, rows_from_csv, run_pipeline
from sankey_flows.storage import InMemoryFlowRepository


def test_pair_text_to_graph(pair_csv):
    graph = build_graph_from_csv(pair_csv)
    assert [n.name for n in graph.nodes] == ["Solar", "Electricity", "Wind"]
    assert [(link.source, link.target, link.value) for link in graph.links] == [(0, 1, 42.0), (2, 1, 35.0)]


def test_path_text_is_expanded(path_csv):
    rows = rows_from_csv(path_csv)
    assert [(r.source, r.target, r.value) for r in rows] == [
        ("Solar", "Electricity", "40"),
        ("Electricity", "Residential", "40"),
        ("Wind", "Electricity", "35"),
    ]
    graph = build_graph(rows)
    assert [n.name for n in graph.nodes] == ["Solar", "Electricity", "Residential", "Wind"]


def test_path_delimiter_from_settings():
    text = "path,value\nA>B>C,3\n"
    rows = rows_from_csv(text, Settings(path_delimiter=">"))
    assert [(r.source, r.target) for r in rows] == [("A", "B"), ("B", "C")]


def test_header_only_is_empty_result():
    with pytest.raises(EmptyResult):
        rows_from_csv("source,target,value\n")


def test_paths_without_edges_are_empty_result():
    with pytest.raises(EmptyResult):
        rows_from_csv("path,value\nSolo,1\nAlone,2\n")


def test_build_graph_requires_rows():
    with pytest.raises(EmptyResult):
        build_graph([])


def test_run_pipeline_success(pair_csv):
    result = run_pipeline(text=pair_csv)
    assert result.ok
    assert result.error is None
    assert len(result.rows) == 2
    assert len(result.graph.links) == 2


@pytest.mark.parametrize(
    "text, error",
    [
        ("source,value\nA,1\n", MalformedHeader),
        ("source,target,value\nA,B,-5\n", NonPositiveValue),
        ("source,target,value\nA,B\n", IncompleteRow),
        ("path,value\nA,B\n", EmptyResult),
        ("source,target,value\n\n", EmptyResult),
        ('source,target,value\n"A,B,1\nC,D,2\n', IncompleteRow),
    ],
)
def test_run_pipeline_reports_failure_without_graph(text, error):
    result = run_pipeline(text=text)
    assert not result.ok
    assert result.graph is None
    assert isinstance(result.error, error)


def test_run_pipeline_from_rows(make_rows):
    result = run_pipeline(rows=make_rows(("A", "B", "1")))
    assert result.ok
    bad = run_pipeline(rows=make_rows(("A", "B", "abc")))
    assert isinstance(bad.error, NonPositiveValue)
    assert bad.graph is None


def test_run_pipeline_needs_one_input(pair_csv, make_rows):
    with pytest.raises(ValueError):
        run_pipeline()
    with pytest.raises(ValueError):
        run_pipeline(text=pair_csv, rows=make_rows(("A", "B", "1")))


def test_settings_palette_is_used(pair_csv):
    graph = build_graph_from_csv(pair_csv, Settings(palette=("red",)))
    assert {n.colour for n in graph.nodes} == {"red"}


def test_load_graph_recomputes_from_rows(make_rows):
    repo = InMemoryFlowRepository()
    rows = make_rows(("A", "B", "1"), ("B", "C", "2"))
    repo.save("d1", rows)
    assert load_graph(repo, "d1") == build_graph(rows)
    with pytest.raises(KeyError):
        load_graph(repo, "missing")
