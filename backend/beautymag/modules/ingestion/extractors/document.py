"""Free-text briefs (Word .docx) — python-docx text extraction.

Strategy:
  1. Materialize the upload to a temp file and read paragraph + table text.
  2. With a brand matcher: one RawRecord per product mention.
  3. Otherwise (or when nothing matches): one excerpt record per document.
"""

from __future__ import annotations

from pathlib import Path

import docx
import structlog

from beautymag.core.errors import ExtractionError
from beautymag.modules.catalog.schemas import RawRecord
from beautymag.modules.ingestion.entities import MATCHED_BRAND_FIELD, EntityMatcher
from beautymag.modules.ingestion.extractors.base import BaseExtractor, materialized_upload

logger = structlog.get_logger()

EXCERPT_FIELD = "extracted_text"

DEFAULT_EXCERPT_CHARS = 1000


def read_docx_text(path: Path) -> str:
    """Return the document's paragraph text followed by its table cell text."""
    document = docx.Document(str(path))
    lines = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


class DocumentExtractor(BaseExtractor):
    extensions = (".docx",)

    def __init__(
        self,
        matcher: EntityMatcher | None = None,
        excerpt_chars: int = DEFAULT_EXCERPT_CHARS,
        tmp_dir: str | Path | None = None,
    ) -> None:
        self.matcher = matcher
        self.excerpt_chars = excerpt_chars
        self.tmp_dir = tmp_dir

    def extract(self, file_bytes: bytes, file_name: str) -> list[RawRecord]:
        suffix = Path(file_name).suffix or ".docx"
        with materialized_upload(file_bytes, suffix, self.tmp_dir) as path:
            try:
                text = read_docx_text(path)
            except Exception as exc:
                logger.error("Document text extraction failed", file=file_name, error=str(exc))
                raise ExtractionError(f"could not read text from {file_name}") from exc

        text = text.strip()

        if self.matcher is not None:
            matches = self.matcher.find(text)
            if matches:
                logger.info("Brand mentions found", file=file_name, mentions=len(matches))
                return [
                    {"name": m.text, MATCHED_BRAND_FIELD: m.token}
                    for m in matches
                ]
            logger.info("No brand mentions, keeping excerpt", file=file_name)

        excerpt = text[: self.excerpt_chars]
        logger.info("Document excerpt extracted", file=file_name, chars=len(excerpt))
        return [{"source_file": file_name, EXCERPT_FIELD: excerpt}]
