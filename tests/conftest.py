# Shared pytest fixtures
from __future__ import annotations

import pytest

from sankey_flows.models import FlowRow, new_row


@pytest.fixture()
def make_rows():
    def _make(*triples: tuple[str, str, str]) -> list[FlowRow]:
        return [new_row(source=s, target=t, value=v) for s, t, v in triples]
    return _make


@pytest.fixture()
def pair_csv() -> str:
    return "source,target,value\nSolar,Electricity,42\nWind,Electricity,35"


@pytest.fixture()
def path_csv() -> str:
    return 'path,value\n"Solar,Electricity,Residential",40\n"Wind,Electricity",35\n'
