"""Ingestion pipeline controller (no I/O of its own beyond the store).

Pipeline: select extractor -> extract -> normalize -> load -> merge -> save

The load/merge/save block runs under the store's per-path lock so two
uploads cannot interleave their read-modify-write cycles. The catalog file
is only written after the merge has been computed; any earlier failure
leaves it untouched.
"""

from __future__ import annotations

import time
from pathlib import Path

import structlog

from beautymag.core.config import Settings
from beautymag.modules.catalog.merge import merge_catalog
from beautymag.modules.catalog.schemas import IngestResult
from beautymag.modules.catalog.store import CatalogStore
from beautymag.modules.ingestion.entities import EntityMatcher
from beautymag.modules.ingestion.extractors.registry import ExtractorRegistry, default_registry
from beautymag.modules.ingestion.normalizer import Normalizer

logger = structlog.get_logger()


class IngestionPipeline:
    """Runs one uploaded brief through extraction, merge and persistence."""

    def __init__(
        self,
        settings: Settings,
        store: CatalogStore | None = None,
        matcher: EntityMatcher | None = None,
        extractors: ExtractorRegistry | None = None,
        normalizer: Normalizer | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or CatalogStore(settings.catalog_path)
        self.extractors = extractors or default_registry(settings, matcher=matcher)
        self.normalizer = normalizer or Normalizer(content_base_url=settings.content_base_url)

    def run(
        self,
        file_bytes: bytes,
        file_name: str,
        format_hint: str | None = None,
    ) -> IngestResult:
        start = time.monotonic()
        hint = format_hint if format_hint is not None else Path(file_name).suffix

        # --- Step 1: Select extractor (fails before touching the bytes) ---
        extractor = self.extractors.get(hint)

        logger.info(
            "Ingestion started",
            file=file_name,
            format=hint,
            extractor=type(extractor).__name__,
            size_bytes=len(file_bytes),
        )

        # --- Step 2: Extract ---
        raw_records = extractor.extract(file_bytes, file_name)

        # --- Step 3: Normalize ---
        incoming = self.normalizer.normalize(raw_records, source_file=file_name)

        # --- Steps 4-6: Load, merge, save ---
        with self.store.lock():
            existing = self.store.load()
            outcome = merge_catalog(existing, incoming)
            self.store.save(outcome.records)

        tail_size = max(self.settings.recent_tail_size, 0)
        recent_tail = outcome.records[-tail_size:] if tail_size else []

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.info(
            "Ingestion complete",
            file=file_name,
            added=outcome.added_count,
            replaced=outcome.replaced_count,
            total=outcome.total_count,
            elapsed_ms=elapsed_ms,
        )

        return IngestResult(
            added_count=outcome.added_count,
            total_count=outcome.total_count,
            recent_tail=recent_tail,
        )
