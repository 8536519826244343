"""
csv_table.py — Table model + delimited text parser

This file contains ONLY:
- Table (the numeric grid every chart is built from)
- parse_csv / parse_csv_text

A table is rejected as a whole (MalformedInputError) when any cell is not a
number or rows have different lengths; nothing is rendered from a partial
parse.
"""

from __future__ import annotations

import csv
import io
import math
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .errors import MalformedInputError
from .utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Table:
    values: Tuple[Tuple[float, ...], ...]
    row_labels: Optional[Tuple[str, ...]] = None
    column_labels: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        if not self.values:
            raise MalformedInputError("Table has no rows")

        width = len(self.values[0])
        if width == 0:
            raise MalformedInputError("Table has no columns")
        for i, row in enumerate(self.values):
            if len(row) != width:
                raise MalformedInputError(f"Row {i + 1} has {len(row)} values, expected {width}")

        if self.row_labels is not None and len(self.row_labels) != len(self.values):
            raise MalformedInputError(
                f"{len(self.row_labels)} row labels for {len(self.values)} rows"
            )
        if self.column_labels is not None and len(self.column_labels) != width:
            raise MalformedInputError(
                f"{len(self.column_labels)} column labels for {width} columns"
            )

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[Iterable[float]],
        row_labels: Optional[Sequence[str]] = None,
        column_labels: Optional[Sequence[str]] = None,
    ) -> "Table":
        return cls(
            values=tuple(tuple(float(v) for v in row) for row in rows),
            row_labels=tuple(row_labels) if row_labels is not None else None,
            column_labels=tuple(column_labels) if column_labels is not None else None,
        )

    @property
    def n_rows(self) -> int:
        return len(self.values)

    @property
    def n_columns(self) -> int:
        return len(self.values[0])

    def flat(self) -> List[float]:
        return [v for row in self.values for v in row]


# ============================================================================
# PARSING
# ============================================================================

def _parse_cell(cell: str, row_no: int, col_no: int) -> float:
    try:
        value = float(cell)
    except ValueError:
        raise MalformedInputError(f"Cell ({row_no}, {col_no}) is not a number: {cell!r}") from None
    if not math.isfinite(value):
        raise MalformedInputError(f"Cell ({row_no}, {col_no}) is not finite: {cell!r}")
    return value


def parse_csv_text(
    text: str,
    rows_labels: bool = False,
    columns_labels: bool = False,
    delimiter: str = ",",
) -> Table:
    """
    Parse delimited text into a Table.

    - rows_labels: first column holds the row labels
    - columns_labels: first row holds the column labels (its first cell is
      dropped when rows_labels is on too, it sits above the row labels)
    """
    records = [
        [cell.strip() for cell in record]
        for record in csv.reader(io.StringIO(text), delimiter=delimiter)
    ]
    records = [r for r in records if any(r)]

    if not records:
        raise MalformedInputError("Input has no data")

    column_labels: Optional[List[str]] = None
    if columns_labels:
        header, records = records[0], records[1:]
        column_labels = header[1:] if rows_labels else header
        if not records:
            raise MalformedInputError("Input has a header row but no data rows")

    row_labels: Optional[List[str]] = None
    if rows_labels:
        row_labels = [r[0] for r in records]
        records = [r[1:] for r in records]

    values = [
        [_parse_cell(cell, i + 1, j + 1) for j, cell in enumerate(record)]
        for i, record in enumerate(records)
    ]

    table = Table.from_rows(values, row_labels=row_labels, column_labels=column_labels)
    logger.debug("Parsed table: %d rows x %d columns", table.n_rows, table.n_columns)
    return table


def parse_csv(
    path: Union[str, os.PathLike],
    rows_labels: bool = False,
    columns_labels: bool = False,
    delimiter: str = ",",
) -> Table:
    """
    Read and parse a delimited UTF-8 file (a leading byte-order mark is
    skipped). Bytes that do not decode raise MalformedInputError; other I/O
    errors propagate unchanged.
    """
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{path} is not UTF-8 text: {e}") from e
    return parse_csv_text(text, rows_labels=rows_labels, columns_labels=columns_labels, delimiter=delimiter)
