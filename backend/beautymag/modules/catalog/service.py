from __future__ import annotations

from beautymag.core.config import Settings
from beautymag.modules.catalog.reports import summarize_catalog, validate_catalog
from beautymag.modules.catalog.schemas import (
    CatalogSummary,
    IngestResult,
    ProductRecord,
    ValidationReport,
)
from beautymag.modules.catalog.store import CatalogStore
from beautymag.modules.ingestion.entities import EntityMatcher
from beautymag.modules.ingestion.pipeline import IngestionPipeline


class CatalogService:
    """Boundary used by the HTTP layer and the batch script."""

    def __init__(
        self,
        settings: Settings,
        store: CatalogStore | None = None,
        matcher: EntityMatcher | None = None,
    ) -> None:
        self.settings = settings
        self.store = store or CatalogStore(settings.catalog_path)
        self.pipeline = IngestionPipeline(settings, store=self.store, matcher=matcher)

    def ingest(self, file_bytes: bytes, file_name: str) -> IngestResult:
        """Run one upload through the pipeline; raises IngestionError subclasses."""
        return self.pipeline.run(file_bytes, file_name)

    def list_catalog(self) -> list[ProductRecord]:
        return self.store.load()

    def summarize(self) -> CatalogSummary:
        return summarize_catalog(self.store.load())

    def validate(self) -> ValidationReport:
        return validate_catalog(self.store.load())
