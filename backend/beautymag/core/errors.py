"""Request-scoped ingestion failures.

Each error names the pipeline stage that failed and a short reason that is
safe to show to a caller (no paths, no tracebacks).
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for all ingestion failures."""

    stage: str = "ingest"

    def __init__(self, reason: str, *, stage: str | None = None) -> None:
        if stage is not None:
            self.stage = stage
        self.reason = reason
        super().__init__(f"{self.stage} failed: {reason}")


class UnsupportedFormatError(IngestionError):
    """No extractor is registered for the file's format hint."""

    stage = "select"


class FormatError(IngestionError):
    """Tabular input is malformed (missing header, bad encoding)."""

    stage = "extract"


class ExtractionError(IngestionError):
    """The upload could not be staged or its document text could not be read."""

    stage = "extract"


class StoreError(IngestionError):
    """The catalog file could not be read or written."""

    stage = "store"
