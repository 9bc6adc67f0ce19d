#!/usr/bin/env python3
"""BeautyMag Brief Ingestion Runner — merge brief files into the catalog.

Runs every file through the same pipeline as the upload endpoint, in the
order given, and prints per-file results plus a final catalog report.

Usage:
    # Ingest two briefs into the configured catalog
    python -m scripts.ingest_briefs briefs/lanzamientos.csv briefs/nota.docx

    # Use a different catalog file
    python -m scripts.ingest_briefs --catalog /tmp/catalog.json briefs/*.csv

    # Only show which extractor each file would use
    python -m scripts.ingest_briefs --dry-run briefs/*

    # Print summary + validation after ingesting
    python -m scripts.ingest_briefs --report briefs/*.csv
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add backend to path for imports
_backend = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_backend))

# Load .env before importing app modules
from dotenv import load_dotenv
load_dotenv(_backend / ".env")

import structlog

from beautymag.core.config import Settings
from beautymag.core.errors import IngestionError
from beautymag.core.logging_config import configure_logging
from beautymag.modules.catalog.service import CatalogService

logger = structlog.get_logger()


def print_report(service: CatalogService) -> None:
    summary = service.summarize()
    report = service.validate()

    print()
    print("  CATALOG REPORT")
    print("  " + "-" * 40)
    print(f"  Total records:   {summary.total}")
    for category, count in sorted(summary.by_category.items(), key=lambda kv: (-kv[1], kv[0])):
        print(f"    {category:<30} {count}")
    print(f"  Empty records:   {report.empty_field_count}")
    print(f"  Duplicate ids:   {report.duplicate_count}")


def run_batch(
    files: list[Path],
    settings: Settings,
    *,
    dry_run: bool = False,
    report: bool = False,
) -> int:
    """Ingest ``files`` in order. Returns the number of files that failed."""
    service = CatalogService(settings)
    registry = service.pipeline.extractors
    failures = 0

    print("=" * 80)
    print(f"  Catalog: {service.store.path}")
    print(f"  Files:   {len(files)}")
    print("-" * 80)

    for path in files:
        if dry_run:
            try:
                extractor = registry.get(path.suffix)
                print(f"  {path.name:<50} {type(extractor).__name__}")
            except IngestionError as exc:
                failures += 1
                print(f"  {path.name:<50} SKIP ({exc})")
            continue

        try:
            file_bytes = path.read_bytes()
        except OSError as exc:
            failures += 1
            logger.error("Could not read brief", path=str(path), error=str(exc))
            print(f"  FAIL {path.name}: could not read file")
            continue

        try:
            result = service.ingest(file_bytes, path.name)
        except IngestionError as exc:
            failures += 1
            print(f"  FAIL {path.name}: {exc}")
            continue

        print(f"  OK   {path.name}: +{result.added_count} (catalog now {result.total_count})")

    if report and not dry_run:
        print_report(service)

    print("=" * 80)
    return failures


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="BeautyMag Brief Ingestion — merge CSV/TSV/DOCX briefs into the catalog"
    )
    parser.add_argument("files", nargs="+", type=Path, help="Brief files to ingest, in order")
    parser.add_argument(
        "--catalog", type=str, default=None,
        help="Catalog JSON path (default: CATALOG_PATH from env / .env)"
    )
    parser.add_argument(
        "--brand", action="append", default=None,
        help="Brand token for .docx mention matching (repeatable, overrides BRAND_TOKENS)"
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="List files with the extractor that would handle them"
    )
    parser.add_argument(
        "--report", action="store_true",
        help="Print catalog summary and validation after ingesting"
    )

    args = parser.parse_args(argv)

    overrides: dict[str, object] = {}
    if args.catalog:
        overrides["catalog_path"] = args.catalog
    if args.brand:
        overrides["brand_tokens"] = args.brand
    settings = Settings(**overrides)
    configure_logging(settings)

    failures = run_batch(args.files, settings, dry_run=args.dry_run, report=args.report)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
