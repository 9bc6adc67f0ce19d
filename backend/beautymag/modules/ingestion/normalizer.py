"""Raw extractor output -> canonical ProductRecord.

Field aliases (NAME_ALIASES, ID_ALIASES in the catalog schemas) are
consulted in priority order; the first non-empty value wins. Everything
not consumed is kept in ``extra``.
This step never raises: sparse rows simply become sparse records.
"""

from __future__ import annotations

import re
import secrets
import string
import unicodedata
from collections.abc import Sequence
from datetime import datetime, timezone

import structlog

from beautymag.modules.catalog.schemas import (
    CORE_FIELDS,
    ID_ALIASES,
    NAME_ALIASES,
    ProductRecord,
    RawRecord,
    field_key,
    key_index,
    pop_alias,
)
from beautymag.modules.ingestion.entities import MATCHED_BRAND_FIELD

logger = structlog.get_logger()

# Provenance is always set from the upload, never trusted from the row.
# Leftover (empty) id/name columns are dropped with it.
RESERVED_FIELDS: tuple[str, ...] = CORE_FIELDS

SKU_PREFIX = "AUTO-"
SKU_ALPHABET = string.ascii_uppercase + string.digits
SKU_LENGTH = 6


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def slugify(value: str) -> str:
    """Accent-stripped, case-folded, ``-``-separated identifier.

    ``"Revitalift Crème"`` and ``"revitalift creme"`` both give ``revitalift-creme``.
    Letters outside Latin script are kept: ``"Крем Лифтинг"`` -> ``крем-лифтинг``.
    """
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return re.sub(r"[\W_]+", "-", stripped.casefold()).strip("-")


def auto_sku() -> str:
    return SKU_PREFIX + "".join(secrets.choice(SKU_ALPHABET) for _ in range(SKU_LENGTH))


def join_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/{slug}"


def _has_value(fields: dict[str, str], keys: dict[str, str], key: str) -> bool:
    original = keys.get(key)
    return original is not None and bool((fields.get(original) or "").strip())


# ---------------------------------------------------------------------------
# Normalizer
# ---------------------------------------------------------------------------


class Normalizer:
    """Builds ProductRecords from RawRecords of any extractor."""

    def __init__(
        self,
        content_base_url: str | None = None,
        name_aliases: Sequence[str] = NAME_ALIASES,
        id_aliases: Sequence[str] = ID_ALIASES,
    ) -> None:
        self.content_base_url = content_base_url
        self.name_aliases = tuple(field_key(a) for a in name_aliases)
        self.id_aliases = tuple(field_key(a) for a in id_aliases)

    def normalize(
        self,
        raw_records: Sequence[RawRecord],
        source_file: str,
        uploaded_at: str | None = None,
    ) -> list[ProductRecord]:
        uploaded_at = uploaded_at or datetime.now(timezone.utc).isoformat()
        records = [self._normalize_one(raw, source_file, uploaded_at) for raw in raw_records]

        unnamed = sum(1 for r in records if r.name is None)
        logger.info(
            "Records normalized",
            source_file=source_file,
            records=len(records),
            unnamed=unnamed,
        )
        return records

    def _normalize_one(self, raw: RawRecord, source_file: str, uploaded_at: str) -> ProductRecord:
        fields = {str(k): "" if v is None else str(v) for k, v in raw.items()}
        keys = key_index(fields)

        name = pop_alias(fields, keys, self.name_aliases)
        record_id = pop_alias(fields, keys, self.id_aliases)

        for reserved in RESERVED_FIELDS:
            original = keys.get(reserved)
            if original is not None:
                fields.pop(original, None)

        slug = slugify(name) if name else ""
        if record_id is None and slug:
            record_id = slug

        extra: dict[str, str] = dict(fields)

        if MATCHED_BRAND_FIELD in keys and slug:
            if self.content_base_url and not _has_value(fields, keys, "url"):
                extra["url"] = join_url(self.content_base_url, slug)
            if not _has_value(fields, keys, "sku"):
                extra["sku"] = auto_sku()

        return ProductRecord(
            id=record_id,
            name=name,
            source_file=source_file,
            uploaded_at=uploaded_at,
            extra=extra,
        )
