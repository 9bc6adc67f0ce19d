"""Read-only catalog reports: category breakdown and data-quality checks."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from beautymag.modules.catalog.schemas import CatalogSummary, ProductRecord, ValidationReport

# Consulted in order; the first non-empty value is the record's category.
CATEGORY_FIELDS: tuple[str, ...] = (
    "categorias_normalizadas",
    "categorias_originales",
    "category",
)
UNKNOWN_CATEGORY = "unknown"

# A record with none of these filled in counts as empty.
CONTENT_FIELDS: tuple[str, ...] = ("name", "nombre", "descripcion_resumida")


def _first_filled(record: ProductRecord, keys: Sequence[str]) -> object | None:
    for key in keys:
        value = record.lookup(key)
        if value not in (None, "", [], {}):
            return value
    return None


def category_of(record: ProductRecord) -> str:
    value = _first_filled(record, CATEGORY_FIELDS)
    if value is None:
        return UNKNOWN_CATEGORY
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def summarize_catalog(records: Sequence[ProductRecord]) -> CatalogSummary:
    counts = Counter(category_of(r) for r in records)
    return CatalogSummary(total=len(records), by_category=dict(counts))


def validate_catalog(records: Sequence[ProductRecord]) -> ValidationReport:
    """Count records with no name/description and records repeating an earlier id."""
    empty = sum(1 for r in records if _first_filled(r, CONTENT_FIELDS) is None)

    seen: set[str] = set()
    duplicates = 0
    for record in records:
        if not record.id:
            continue
        if record.id in seen:
            duplicates += 1
        else:
            seen.add(record.id)

    return ValidationReport(
        total=len(records),
        empty_field_count=empty,
        duplicate_count=duplicates,
    )
