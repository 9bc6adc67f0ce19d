"""Tests for the batch ingestion CLI (scripts/ingest_briefs.py)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scripts import ingest_briefs


@pytest.fixture
def briefs(tmp_path: Path) -> list[Path]:
    ok = tmp_path / "lanzamientos.csv"
    ok.write_text("name,category\nColor Riche,labiales\nRevitalift,cremas\n", encoding="utf-8")
    bad = tmp_path / "brief.pdf"
    bad.write_bytes(b"%PDF-fake")
    again = tmp_path / "correccion.csv"
    again.write_text("name,category\ncolor riche,labios\n", encoding="utf-8")
    return [ok, bad, again]


def test_batch_continues_after_failure(
    tmp_path: Path, briefs: list[Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """A failing file is reported and the remaining files still ingest."""
    catalog = tmp_path / "out" / "catalog.json"

    exit_code = ingest_briefs.main(["--catalog", str(catalog), "--report", *map(str, briefs)])

    out = capsys.readouterr().out
    assert exit_code == 1
    assert "OK   lanzamientos.csv: +2 (catalog now 2)" in out
    assert "FAIL brief.pdf: select failed" in out
    assert "OK   correccion.csv: +1 (catalog now 2)" in out
    assert "Duplicate ids:   0" in out

    data = json.loads(catalog.read_text(encoding="utf-8"))
    assert [(r["name"], r["category"]) for r in data] == [
        ("Revitalift", "cremas"),
        ("color riche", "labios"),
    ]


def test_dry_run_writes_nothing(
    tmp_path: Path, briefs: list[Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """--dry-run lists extractors and never creates the catalog."""
    catalog = tmp_path / "catalog.json"

    ingest_briefs.main(["--catalog", str(catalog), "--dry-run", *map(str, briefs)])

    out = capsys.readouterr().out
    assert "TabularExtractor" in out
    assert "SKIP" in out
    assert not catalog.exists()
