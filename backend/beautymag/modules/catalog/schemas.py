"""Canonical catalog records and the result shapes returned to callers."""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# Extractor output: field name -> string value, no guaranteed key set.
RawRecord = dict[str, str]

# Keys that live on ProductRecord itself in the persisted flat document.
CORE_FIELDS: tuple[str, ...] = ("id", "name", "source_file", "uploaded_at")

# Source column names that carry the display name or identifier, in priority
# order. Matched after field_key().
NAME_ALIASES: tuple[str, ...] = (
    "name",
    "nombre",
    "display_name",
    "product_name",
    "product_title",
    "title",
)
ID_ALIASES: tuple[str, ...] = ("id", "product_id")


def field_key(key: str) -> str:
    """Comparable form of a source column name: ``"Product Title"`` -> ``product_title``."""
    return re.sub(r"[\s\-]+", "_", key.strip().lower())


def key_index(fields: dict[str, Any]) -> dict[str, str]:
    """Map field_key() -> original key; the first column wins on collisions."""
    keys: dict[str, str] = {}
    for original in fields:
        keys.setdefault(field_key(str(original)), original)
    return keys


def pop_alias(fields: dict[str, Any], keys: dict[str, str], aliases: Sequence[str]) -> str | None:
    """Remove and return the first non-empty alias value, as trimmed text."""
    for alias in aliases:
        original = keys.get(alias)
        if original is None or original not in fields:
            continue
        value = fields[original]
        text = "" if value is None else str(value).strip()
        if text:
            del fields[original]
            return text
    return None


# ---------------------------------------------------------------------------
# Product records
# ---------------------------------------------------------------------------


class ProductRecord(BaseModel):
    """One normalized catalog entry with provenance."""

    id: str | None = None
    name: str | None = None
    source_file: str = ""
    uploaded_at: str = ""
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def dedup_key(self) -> str | None:
        """Case-insensitive name used for deduplication, None when unnamed."""
        if not self.name or not self.name.strip():
            return None
        return self.name.strip().casefold()

    def lookup(self, key: str) -> Any:
        """Look up a field by its persisted name, core or extra."""
        if key in CORE_FIELDS:
            return getattr(self, key)
        return self.extra.get(key)

    def to_document(self) -> dict[str, Any]:
        """Flatten into the persisted JSON object (core keys first)."""
        doc: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "source_file": self.source_file,
            "uploaded_at": self.uploaded_at,
        }
        for key, value in self.extra.items():
            if key not in CORE_FIELDS:
                doc[key] = value
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> ProductRecord:
        """Rebuild a record from a persisted object; unknown keys go to extra.

        Name and id resolve through the same aliases as fresh uploads, so
        rows stored verbatim by older versions (``{"nombre": ...}``) keep
        taking part in name dedup.
        """
        fields = dict(doc)
        keys = key_index(fields)
        name = pop_alias(fields, keys, NAME_ALIASES)
        record_id = pop_alias(fields, keys, ID_ALIASES)

        provenance: dict[str, str] = {}
        for core in CORE_FIELDS:
            original = keys.get(core)
            value = fields.pop(original, None) if original is not None else None
            provenance[core] = "" if value is None else str(value)

        return cls(
            id=record_id,
            name=name,
            source_file=provenance["source_file"],
            uploaded_at=provenance["uploaded_at"],
            extra=fields,
        )


# ---------------------------------------------------------------------------
# Store / pipeline outcomes
# ---------------------------------------------------------------------------


class LoadStatus(str, Enum):
    ok = "ok"
    missing = "missing"
    corrupt = "corrupt"


class CatalogSnapshot(BaseModel):
    """Result of reading the catalog file, including how the read went."""

    records: list[ProductRecord] = []
    status: LoadStatus = LoadStatus.ok
    detail: str | None = None


class IngestResult(BaseModel):
    added_count: int
    total_count: int
    recent_tail: list[ProductRecord]


class CatalogSummary(BaseModel):
    total: int
    by_category: dict[str, int]


class ValidationReport(BaseModel):
    total: int
    empty_field_count: int
    duplicate_count: int


# ---------------------------------------------------------------------------
# HTTP response shapes
# ---------------------------------------------------------------------------


class IngestResponse(BaseModel):
    message: str
    added_count: int
    total_count: int
    recent_tail: list[dict[str, Any]]
