"""
Tabular parser for delimited upload text.

The format is deliberately simple: one record per line, the first
non-empty line is the header row and cells are separated by commas.
Quoted cells are not supported, so a comma always starts a new cell.
"""

from dataclasses import dataclass, field

import pandas as pd

from workload_import.utils.logging import get_logger

log = get_logger(__name__)

DELIMITER = ","

RawRecord = dict[str, str]


@dataclass
class ParsedTable:
    """Header row and data records of one upload."""

    headers: list[str] = field(default_factory=list)
    records: list[RawRecord] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        """Number of data records."""
        return len(self.records)

    def to_frame(self, limit: int | None = None) -> pd.DataFrame:
        """
        Build a string DataFrame of the records, columns in header order.

        Args:
            limit: Optional number of leading records to include.

        Returns:
            DataFrame with one column per distinct header.
        """
        columns = list(dict.fromkeys(self.headers))
        records = self.records if limit is None else self.records[:limit]
        return pd.DataFrame(records, columns=columns, dtype=str)


def _split_cells(line: str) -> list[str]:
    return [cell.strip() for cell in line.split(DELIMITER)]


def parse_table(text: str) -> ParsedTable:
    """
    Parse delimited text into headers and header-keyed records.

    Malformed rows never raise: a row with fewer cells than headers gets
    empty strings for the missing trailing columns, surplus cells are
    dropped. Blank lines are skipped.

    Args:
        text: Full upload contents.

    Returns:
        ParsedTable with trimmed headers and cell values.
    """
    text = text.removeprefix("\ufeff")
    headers: list[str] | None = None
    records: list[RawRecord] = []
    short_rows = 0

    for line in text.split("\n"):
        if not line.strip():
            continue

        cells = _split_cells(line)
        if headers is None:
            headers = cells
            continue

        if len(cells) < len(headers):
            short_rows += 1
        records.append(
            {
                header: cells[index] if index < len(cells) else ""
                for index, header in enumerate(headers)
            }
        )

    if headers is None:
        log.warning("Upload contains no header row")
        return ParsedTable()

    log.info(
        "Parsed upload",
        columns=len(headers),
        rows=len(records),
        short_rows=short_rows,
    )
    return ParsedTable(headers=headers, records=records)
