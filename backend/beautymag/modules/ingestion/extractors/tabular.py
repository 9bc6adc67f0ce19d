"""Delimited-text briefs (CSV/TSV) with a header row."""

from __future__ import annotations

import csv
import io

import structlog

from beautymag.core.errors import FormatError
from beautymag.modules.catalog.schemas import RawRecord
from beautymag.modules.ingestion.extractors.base import BaseExtractor

logger = structlog.get_logger()


class TabularExtractor(BaseExtractor):
    """One RawRecord per non-blank data row, keyed by trimmed header names."""

    def __init__(self, delimiter: str = ",", extensions: tuple[str, ...] = (".csv",)) -> None:
        self.delimiter = delimiter
        self.extensions = extensions

    def extract(self, file_bytes: bytes, file_name: str) -> list[RawRecord]:
        try:
            text = file_bytes.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FormatError(f"{file_name} is not valid UTF-8 text") from exc

        try:
            rows = list(csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter))
        except csv.Error as exc:
            raise FormatError(f"{file_name} is not valid delimited text: {exc}") from exc

        rows = [row for row in rows if any(cell.strip() for cell in row)]
        header = [cell.strip() for cell in rows[0]] if rows else None

        if not header or not any(header):
            raise FormatError(f"{file_name} has no header row")

        records: list[RawRecord] = []
        surplus_rows = 0
        for row in rows[1:]:
            if len(row) > len(header):
                surplus_rows += 1

            record: RawRecord = {}
            for idx, column in enumerate(header):
                if not column:
                    continue
                value = row[idx].strip() if idx < len(row) else ""
                record[column] = value
            records.append(record)

        if surplus_rows:
            logger.warning(
                "Dropped cells beyond the header",
                file=file_name,
                rows=surplus_rows,
            )

        logger.info(
            "Tabular brief parsed",
            file=file_name,
            columns=len([c for c in header if c]),
            rows=len(records),
        )
        return records
