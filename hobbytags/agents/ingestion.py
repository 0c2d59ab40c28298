"""
Survey Ingestion Agent.

Reads the survey CSV export, validates the required question columns and
turns every data row into an immutable SurveyRow.
"""

import logging
from typing import Iterable, List, Tuple

from hobbytags.models.survey import SurveyRow

logger = logging.getLogger(__name__)


def parse_csv(text: str) -> List[List[str]]:
    """
    Parse CSV text into rows of string cells.

    Supports the RFC 4180 subset produced by spreadsheet exports:
    - double-quoted fields, with "" as an escaped quote
    - commas and newlines embedded inside quotes
    - LF terminates a row; a bare CR outside quotes is dropped

    Args:
        text: Full CSV document

    Returns:
        List of rows, each a list of cell strings
    """
    rows = []
    row = []
    value = []
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        ch = text[i]

        if in_quotes:
            if ch == '"':
                if i + 1 < length and text[i + 1] == '"':
                    value.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                value.append(ch)
        elif ch == '"':
            in_quotes = True
        elif ch == ",":
            row.append("".join(value))
            value = []
        elif ch == "\n":
            row.append("".join(value))
            rows.append(row)
            row = []
            value = []
        elif ch != "\r":
            value.append(ch)

        i += 1

    if value or row:
        row.append("".join(value))
        rows.append(row)

    return rows


def _is_blank_row(cells: Iterable[str]) -> bool:
    return all(not (c or "").strip() for c in cells)


class SurveyIngestionAgent:
    """
    Loads survey rows from a CSV export.

    Columns are identified by exact header text. A missing required
    column is fatal and the error lists every parsed header.
    """

    def __init__(self, required_columns: List[str]):
        """
        Initialize ingestion agent.

        Args:
            required_columns: Header strings that must be present
        """
        self.required_columns = list(required_columns)
        logger.info(f"Initialized SurveyIngestionAgent with {len(self.required_columns)} required columns")

    def load(self, csv_path: str) -> Tuple[List[str], List[SurveyRow]]:
        """
        Read and parse a survey CSV file.

        Args:
            csv_path: Path to the CSV export

        Returns:
            (headers, rows) where rows are in file order, blank rows included

        Raises:
            OSError: If the file cannot be read
            ValueError: If the file has no data rows or lacks a required column
        """
        with open(csv_path, "r", encoding="utf-8") as f:
            text = f.read()

        headers, rows = self.parse(text, source=str(csv_path))
        logger.info(f"Ingested {len(rows)} data rows from {csv_path}")
        return headers, rows

    def parse(self, text: str, source: str = "<string>") -> Tuple[List[str], List[SurveyRow]]:
        """Parse CSV text already in memory. See load()."""
        raw_rows = parse_csv(text.lstrip("\ufeff"))

        non_blank = [r for r in raw_rows if not _is_blank_row(r)]
        if len(non_blank) < 2:
            raise ValueError(f"CSV has no data rows: {source}")

        headers = [h.strip() for h in raw_rows[0]]
        self.validate_headers(headers)

        rows = []
        for row_number, cells in enumerate(raw_rows[1:], start=1):
            mapped = {}
            for header, cell in zip(headers, cells):
                mapped.setdefault(header, cell)
            rows.append(SurveyRow(row_number=row_number, cells=mapped, raw_cells=tuple(cells)))

        return headers, rows

    def validate_headers(self, headers: List[str]) -> None:
        """
        Ensure every required column is present.

        Raises:
            ValueError: Naming the first missing column and listing all headers
        """
        for column in self.required_columns:
            if column not in headers:
                logger.error(f"Missing required column: {column}")
                raise ValueError(
                    f"Missing required column: {column!r}. Headers: {headers}"
                )
