"""Catalog merge: reconcile freshly normalized records with the stored catalog.

Merge Strategy:
  - Same name (case-insensitive, non-empty): the last occurrence wins and
    earlier ones are dropped from their positions. Incoming records always
    come after existing ones, so they win over the stored catalog.
  - Result order: surviving existing records, then the incoming batch.
  - Unnamed records never collide; they are always appended.

This step is PURELY PROGRAMMATIC and never raises.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from beautymag.modules.catalog.schemas import ProductRecord

logger = structlog.get_logger()


@dataclass
class MergeOutcome:
    """Next catalog snapshot plus what changed."""

    records: list[ProductRecord] = field(default_factory=list)
    added_count: int = 0  # size of the incoming batch, not the net growth
    replaced_count: int = 0
    unnamed_count: int = 0

    @property
    def total_count(self) -> int:
        return len(self.records)


def merge_catalog(
    existing: Sequence[ProductRecord],
    incoming: Sequence[ProductRecord],
) -> MergeOutcome:
    """Merge ``incoming`` into ``existing``; later same-name records win.

    "Later" covers the whole sequence existing + incoming, so duplicates
    already sitting in the stored catalog (e.g. from older versions) are
    collapsed on the next write as well.
    """
    combined = [*existing, *incoming]

    last_index: dict[str, int] = {}
    for idx, record in enumerate(combined):
        if record.dedup_key is not None:
            last_index[record.dedup_key] = idx

    records: list[ProductRecord] = []
    dropped = 0
    unnamed = 0
    for idx, record in enumerate(combined):
        key = record.dedup_key
        if key is None:
            if idx >= len(existing):
                unnamed += 1
        elif last_index[key] != idx:
            dropped += 1
            continue
        records.append(record)

    outcome = MergeOutcome(
        records=records,
        added_count=len(incoming),
        replaced_count=dropped,
        unnamed_count=unnamed,
    )

    if unnamed:
        # Unnamed records accumulate on every re-ingestion of the same source.
        logger.warning(
            "Merge appended unnamed records without dedup",
            unnamed=unnamed,
        )

    logger.info(
        "Merge complete",
        existing=len(existing),
        incoming=len(incoming),
        replaced=outcome.replaced_count,
        total=outcome.total_count,
    )
    return outcome
