from __future__ import annotations

import csv
import logging
from enum import Enum
from typing import Sequence

import pandas as pd

from .errors import MalformedHeader
from .models import FLOW_FIELDS, FlowRow, new_row

logger = logging.getLogger(__name__)

FIELD_DELIMITER = ","
PAIR_COLS = ["source", "target", "value"]
PATH_COLS = ["path", "value"]

EXAMPLE_PAIR_CSV = (
    "source,target,value\n"
    "Solar,Electricity,42\n"
    "Wind,Electricity,35\n"
    "Coal,Heat,50\n"
    "Coal,Electricity,30\n"
    "Gas,Heat,20\n"
    "Gas,Electricity,15\n"
    "Electricity,Residential,40\n"
    "Electricity,Commercial,50\n"
    "Electricity,Industrial,32\n"
    "Heat,Residential,30\n"
    "Heat,Commercial,20\n"
    "Heat,Industrial,20"
)

EXAMPLE_PATH_CSV = (
    "path,value\n"
    '"Solar,Electricity,Residential",40\n'
    '"Wind,Electricity,Commercial",35\n'
    '"Coal,Heat,Industrial",20\n'
    '"Gas,Heat,Residential",15'
)


class Dialect(str, Enum):
    PAIR = "pair"
    PATH = "path"


def _content_lines(text: str) -> list[str]:
    text = text.lstrip("\ufeff")
    return [line for line in text.splitlines() if line.strip()]


# ---------- Dialect sniff ----------
def sniff_dialect(text: str, delimiter: str = FIELD_DELIMITER) -> Dialect:
    lines = _content_lines(text)
    if not lines:
        return Dialect.PAIR
    first_col = lines[0].split(delimiter, 1)[0].strip().strip('"').strip().lower()
    return Dialect.PATH if first_col == PATH_COLS[0] else Dialect.PAIR


# ---------- Table reading ----------
def _split_line(line: str, delimiter: str) -> list[str]:
    # each line is read on its own, so an unclosed quote only affects its own line
    return next(csv.reader([line], delimiter=delimiter, strict=False), [])


def _read_columns(text: str, required: list[str], delimiter: str) -> dict[str, list[str]]:
    """
    Reads a header + body CSV and returns the trimmed text of each required column.
    - header names are matched case-insensitively, first occurrence wins
    - short lines are padded with "", extra trailing fields are dropped
    - blank lines are skipped
    """
    hint = f"Expected header: {delimiter.join(required)}"
    lines = _content_lines(text)
    if not lines:
        raise MalformedHeader(f"CSV is empty. {hint}")

    cols = [c.strip().lower() for c in _split_line(lines[0], delimiter)]
    missing = [c for c in required if c not in cols]
    if missing:
        raise MalformedHeader(
            f"CSV must have {', '.join(required)} columns (missing: {', '.join(missing)}). {hint}"
        )

    width = len(cols)
    records = [(_split_line(line, delimiter) + [""] * width)[:width] for line in lines[1:]]
    df = pd.DataFrame(records, columns=range(width), dtype=object)

    return {
        c: df.iloc[:, cols.index(c)].fillna("").astype(str).str.strip().tolist()
        for c in required
    }


# ---------- Parsers ----------
def parse_pair_csv(text: str, delimiter: str = FIELD_DELIMITER) -> list[FlowRow]:
    cols = _read_columns(text, PAIR_COLS, delimiter)
    rows = [
        new_row(source=s, target=t, value=v)
        for s, t, v in zip(cols["source"], cols["target"], cols["value"])
    ]
    logger.debug("parsed %d pair rows", len(rows))
    return rows


def parse_path_csv(text: str, delimiter: str = FIELD_DELIMITER) -> list[FlowRow]:
    """Path rows keep the raw path text in `source`; splitting it is left to the path expander."""
    cols = _read_columns(text, PATH_COLS, delimiter)
    rows = [new_row(source=p, target="", value=v) for p, v in zip(cols["path"], cols["value"])]
    logger.debug("parsed %d path rows", len(rows))
    return rows


def parse_flows_csv(text: str, delimiter: str = FIELD_DELIMITER) -> tuple[Dialect, list[FlowRow]]:
    dialect = sniff_dialect(text, delimiter)
    logger.debug("sniffed %s dialect", dialect.value)
    if dialect is Dialect.PATH:
        return dialect, parse_path_csv(text, delimiter)
    return dialect, parse_pair_csv(text, delimiter)


# ---------- Export ----------
def rows_to_csv_bytes(rows: Sequence[FlowRow]) -> bytes:
    df = pd.DataFrame([[r.source, r.target, r.value] for r in rows], columns=FLOW_FIELDS)
    return df.to_csv(index=False).encode("utf-8")
