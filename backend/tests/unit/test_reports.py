"""Unit tests for catalog summary and validation reports."""

from __future__ import annotations

from typing import Any

from beautymag.modules.catalog.reports import category_of, summarize_catalog, validate_catalog
from beautymag.modules.catalog.schemas import ProductRecord


def _doc(**fields: Any) -> ProductRecord:
    return ProductRecord.from_document(fields)


def test_category_fallback_order() -> None:
    """Category comes from the first filled category field, else "unknown"."""
    assert category_of(_doc(categorias_normalizadas="labios", category="x")) == "labios"
    assert category_of(_doc(categorias_normalizadas="", categorias_originales="Labiales")) == "Labiales"
    assert category_of(_doc(category="cremas")) == "cremas"
    assert category_of(_doc(name="Sin categoría")) == "unknown"


def test_list_category_is_joined() -> None:
    """List categories are joined with ", "."""
    assert category_of(_doc(categorias_normalizadas=["rostro", "cremas"])) == "rostro, cremas"


def test_summarize_counts_by_category() -> None:
    """Summary totals records per category."""
    records = [
        _doc(name="A", category="cremas"),
        _doc(name="B", category="cremas"),
        _doc(name="C", categorias_originales="labiales"),
        _doc(extracted_text="..."),
    ]

    summary = summarize_catalog(records)

    assert summary.total == 4
    assert summary.by_category == {"cremas": 2, "labiales": 1, "unknown": 1}


def test_validate_counts_empty_and_duplicates() -> None:
    """Validation counts empty records and repeated non-null ids."""
    records = [
        _doc(id="a", name="A"),
        _doc(id="a", nombre="A bis"),
        _doc(id="b", descripcion_resumida="Crema ligera"),
        _doc(id="a", extracted_text="..."),
        _doc(extracted_text="..."),
        _doc(extracted_text="..."),
    ]

    report = validate_catalog(records)

    assert report.total == 6
    assert report.empty_field_count == 3
    # Two repeats of "a"; records without an id are never duplicates.
    assert report.duplicate_count == 2


def test_reports_on_empty_catalog() -> None:
    """Empty catalog → all counts zero."""
    assert summarize_catalog([]).by_category == {}
    report = validate_catalog([])
    assert (report.total, report.empty_field_count, report.duplicate_count) == (0, 0, 0)
