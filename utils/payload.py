"""
CSV payload preparation.

Bounds the size of a dataset before it is embedded in a prompt: the
header row is always kept, data rows are appended whole while they fit,
and a marker records how many rows were left out.  Nothing here calls
out to the network; every function is pure.
"""

from __future__ import annotations

import csv
from typing import List, Tuple

from dto.dataset import Dataset, DatasetPreview, PreparedPayload

# Default character budgets
MAX_CHARS = 8000
COMPARISON_MAX_CHARS = 4000

# Number of data rows shown in an upload preview
PREVIEW_ROWS = 5

TRUNCATION_MARKER = "\n... [{omitted} more rows omitted]"


def _lines(raw_text: str) -> List[str]:
    """Split into lines, dropping blank ones (trailing newlines included)."""
    return [line for line in raw_text.splitlines() if line.strip()]


def _fit_rows(lines: List[str], max_chars: int) -> Tuple[List[str], int]:
    """
    Keep the header plus as many whole data rows as fit in *max_chars*.

    Each kept line is charged one extra character for its terminator.
    Returns (kept_lines, included_data_rows).
    """
    kept = [lines[0]]
    used = len(lines[0]) + 1
    for line in lines[1:]:
        cost = len(line) + 1
        if used + cost > max_chars:
            break
        kept.append(line)
        used += cost
    return kept, len(kept) - 1


def prepare_payload(dataset: Dataset, max_chars: int = MAX_CHARS) -> PreparedPayload:
    """Return the prompt-ready rendition of *dataset* within *max_chars*."""
    raw_text = dataset.raw_text
    total_rows = dataset.row_count

    if len(raw_text) <= max_chars:
        return PreparedPayload(
            text=raw_text, total_rows=total_rows, included_rows=total_rows
        )

    lines = _lines(raw_text)
    if not lines:
        return PreparedPayload(text="", total_rows=0, included_rows=0)

    kept, included = _fit_rows(lines, max_chars)
    text = "\n".join(kept) + TRUNCATION_MARKER.format(omitted=total_rows - included)
    return PreparedPayload(
        text=text,
        total_rows=total_rows,
        included_rows=included,
        truncated=True,
    )


def truncate_csv(raw_text: str, max_chars: int = MAX_CHARS) -> str:
    """
    Truncate CSV text to roughly *max_chars* without cutting a row in half.

    Inputs within budget are returned unchanged.  The header survives even
    when it alone exceeds the budget.
    """
    return prepare_payload(Dataset(name="", raw_text=raw_text), max_chars).text


def parse_header(raw_text: str) -> List[str]:
    """Column names from the first non-blank line (quoted commas respected)."""
    lines = _lines(raw_text)
    if not lines:
        return []
    return [col.strip() for col in next(csv.reader([lines[0]]))]


def preview_dataset(dataset: Dataset, rows: int = PREVIEW_ROWS) -> DatasetPreview:
    lines = _lines(dataset.raw_text)
    if not lines:
        return DatasetPreview(file_name=dataset.name)

    sample = [[cell.strip() for cell in row] for row in csv.reader(lines[1 : rows + 1])]
    return DatasetPreview(
        file_name=dataset.name,
        columns=parse_header(dataset.raw_text),
        rows=dataset.row_count,
        preview=sample,
    )
