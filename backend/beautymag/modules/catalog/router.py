"""Catalog API — /catalog/ endpoints.

  - /update-products   — upload a .csv/.tsv/.docx brief and merge it in
  - /products          — full catalog, in stored order
  - /summary           — record counts per category
  - /validate-products — empty-record and duplicate-id counts
"""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from beautymag.core.config import Settings, get_settings
from beautymag.core.errors import (
    ExtractionError,
    FormatError,
    IngestionError,
    StoreError,
    UnsupportedFormatError,
)
from beautymag.modules.catalog.schemas import CatalogSummary, IngestResponse, ValidationReport
from beautymag.modules.catalog.service import CatalogService

logger = structlog.get_logger()

router = APIRouter(prefix="/catalog", tags=["catalog"])

_STATUS_BY_ERROR: list[tuple[type[IngestionError], int]] = [
    (UnsupportedFormatError, 400),
    (FormatError, 400),
    (ExtractionError, 422),
    (StoreError, 500),
]


def get_catalog_service(settings: Settings = Depends(get_settings)) -> CatalogService:
    return CatalogService(settings)


def _to_http_error(exc: IngestionError) -> HTTPException:
    status_code = 500
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    return HTTPException(status_code=status_code, detail=str(exc))


@router.post("/update-products", response_model=IngestResponse)
async def update_products(
    brief_file: UploadFile = File(..., description="Brand brief (.csv, .tsv or .docx)"),
    service: CatalogService = Depends(get_catalog_service),
) -> IngestResponse:
    """Upload a brief, merge its products into the catalog and return the new state."""
    if not brief_file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    file_bytes = await brief_file.read()
    size_mb = len(file_bytes) / (1024 * 1024)
    max_mb = service.settings.max_upload_mb

    if size_mb > max_mb:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {size_mb:.1f} MB (max {max_mb} MB).",
        )

    try:
        result = service.ingest(file_bytes, brief_file.filename)
    except IngestionError as exc:
        logger.warning(
            "Ingestion rejected",
            filename=brief_file.filename,
            stage=exc.stage,
            reason=exc.reason,
        )
        raise _to_http_error(exc) from exc

    return IngestResponse(
        message="Catalog updated successfully.",
        added_count=result.added_count,
        total_count=result.total_count,
        recent_tail=[r.to_document() for r in result.recent_tail],
    )


@router.get("/products")
async def list_products(
    service: CatalogService = Depends(get_catalog_service),
) -> list[dict[str, Any]]:
    try:
        return [r.to_document() for r in service.list_catalog()]
    except StoreError as exc:
        raise _to_http_error(exc) from exc


@router.get("/summary", response_model=CatalogSummary)
async def summary(
    service: CatalogService = Depends(get_catalog_service),
) -> CatalogSummary:
    try:
        return service.summarize()
    except StoreError as exc:
        raise _to_http_error(exc) from exc


@router.get("/validate-products", response_model=ValidationReport)
async def validate_products(
    service: CatalogService = Depends(get_catalog_service),
) -> ValidationReport:
    try:
        return service.validate()
    except StoreError as exc:
        raise _to_http_error(exc) from exc
