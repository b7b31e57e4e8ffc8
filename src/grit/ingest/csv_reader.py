"""Read fighter spreadsheets into raw string rows."""

from __future__ import annotations

import csv
from io import StringIO
from pathlib import Path
from typing import Dict, List, Tuple


def parse_csv_text(content: str) -> Tuple[List[str], List[Dict[str, str]]]:
    """Return trimmed headers and one dict per data line.

    Short lines are padded with empty cells and extra cells are dropped so
    every row carries exactly the header keys. Blank lines inside the data
    become all-empty rows so row positions match the file.
    """

    text = content.lstrip("\ufeff").strip()
    if not text:
        return [], []
    reader = csv.reader(StringIO(text))
    try:
        headers = [header.strip() for header in next(reader)]
    except StopIteration:
        return [], []

    rows: List[Dict[str, str]] = []
    for values in reader:
        cells = [value.strip() for value in values]
        rows.append(
            {header: cells[i] if i < len(cells) else "" for i, header in enumerate(headers)}
        )
    return headers, rows


def load_fighter_csv(path: Path) -> Tuple[List[str], List[Dict[str, str]]]:
    with path.open(newline="", encoding="utf-8") as f:
        return parse_csv_text(f.read())
