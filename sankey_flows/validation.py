from __future__ import annotations

import logging
from typing import Sequence

import pandas as pd

from .errors import FlowError, IncompleteRow, NonPositiveValue
from .models import FLOW_FIELDS, FlowRow

logger = logging.getLogger(__name__)


def rows_to_frame(rows: Sequence[FlowRow]) -> pd.DataFrame:
    """
    One row per flow, index = row id, columns source/target/value as trimmed strings.
    """
    out = pd.DataFrame(
        [[r.source, r.target, r.value] for r in rows],
        columns=FLOW_FIELDS,
        index=pd.Index([r.id for r in rows], dtype=object),
        dtype=object,
    )
    for c in FLOW_FIELDS:
        out[c] = out[c].fillna("").astype(str).str.strip()
    return out


def parse_values(values: pd.Series) -> pd.Series:
    """Numeric view of a value column; anything unparseable or infinite becomes NaN."""
    num = pd.to_numeric(values, errors="coerce").astype(float)
    return num.replace([float("inf"), float("-inf")], float("nan"))


def _row_list(ids: list[str]) -> str:
    return f"{', '.join(ids[:20])}{'…' if len(ids) > 20 else ''}"


def find_row_error(rows: Sequence[FlowRow]) -> FlowError | None:
    if not rows:
        return None

    tmp = rows_to_frame(rows)

    missing = (tmp["source"] == "") | (tmp["target"] == "") | (tmp["value"] == "")
    if missing.any():
        bad_rows = tmp[missing].index.tolist()
        logger.debug("incomplete rows: %s", bad_rows)
        return IncompleteRow(
            f"All fields are required for each flow (rows: {_row_list(bad_rows)}).",
            row_ids=bad_rows,
        )

    values = parse_values(tmp["value"])
    not_positive = values.isna() | (values.fillna(0) <= 0)
    if not_positive.any():
        bad_rows = tmp[not_positive].index.tolist()
        logger.debug("non-positive values in rows: %s", bad_rows)
        return NonPositiveValue(
            f"Values must be positive numbers (rows: {_row_list(bad_rows)}).",
            row_ids=bad_rows,
        )

    return None


def validate_rows(rows: Sequence[FlowRow]) -> None:
    error = find_row_error(rows)
    if error is not None:
        raise error
