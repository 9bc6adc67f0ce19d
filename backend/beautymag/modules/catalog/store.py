"""JSON-file catalog store.

The whole catalog lives in one JSON array. Reads degrade to an empty catalog
when the file is missing or corrupt; writes go to a temp file in the same
directory and are swapped in with ``os.replace`` so readers never see a
half-written document.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import structlog

from beautymag.core.errors import StoreError
from beautymag.modules.catalog.schemas import CatalogSnapshot, LoadStatus, ProductRecord

logger = structlog.get_logger()

# One lock per resolved catalog path, shared by every store in the process.
_path_locks: dict[Path, threading.RLock] = {}
_registry_lock = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _registry_lock:
        lock = _path_locks.get(path)
        if lock is None:
            lock = threading.RLock()
            _path_locks[path] = lock
        return lock


class CatalogStore:
    """Durable storage for the full product catalog."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser().resolve()

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Serialize read-modify-write cycles on this catalog path."""
        with _lock_for(self.path):
            yield

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load(self) -> list[ProductRecord]:
        return self.load_snapshot().records

    def load_snapshot(self) -> CatalogSnapshot:
        """Read the catalog and report whether it was ok, missing or corrupt."""
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return CatalogSnapshot(status=LoadStatus.missing)
        except OSError as exc:
            logger.error("Catalog read failed", path=str(self.path), error=str(exc))
            raise StoreError("catalog could not be read") from exc

        try:
            data = json.loads(raw.decode("utf-8") or "[]")
        except (ValueError, RecursionError) as exc:
            # ValueError also covers oversized integers.
            return self._corrupt(f"invalid JSON: {exc}")

        if not isinstance(data, list):
            return self._corrupt(f"expected a JSON array, got {type(data).__name__}")

        records: list[ProductRecord] = []
        skipped = 0
        for entry in data:
            if not isinstance(entry, dict):
                skipped += 1
                continue
            records.append(ProductRecord.from_document(entry))

        if skipped:
            logger.warning(
                "Skipped non-object catalog entries",
                path=str(self.path),
                skipped=skipped,
            )

        return CatalogSnapshot(records=records, status=LoadStatus.ok)

    def _corrupt(self, detail: str) -> CatalogSnapshot:
        logger.warning(
            "Catalog unreadable, treating as empty",
            path=str(self.path),
            detail=detail,
        )
        return CatalogSnapshot(status=LoadStatus.corrupt, detail=detail)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, records: Sequence[ProductRecord]) -> None:
        """Atomically replace the catalog with ``records`` in the given order."""
        payload = json.dumps(
            [r.to_document() for r in records],
            indent=2,
            ensure_ascii=False,
        )

        tmp_path: Path | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            logger.error("Catalog write failed", path=str(self.path), error=str(exc))
            raise StoreError("catalog could not be written") from exc

        logger.info("Catalog saved", path=str(self.path), records=len(records))
