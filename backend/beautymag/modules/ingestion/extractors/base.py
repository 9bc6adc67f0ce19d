from __future__ import annotations

import tempfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog

from beautymag.core.errors import ExtractionError
from beautymag.modules.catalog.schemas import RawRecord

logger = structlog.get_logger()


class BaseExtractor(ABC):
    """Abstract base class for format-specific brief extractors."""

    # Lowercase extensions (with dot) this extractor accepts, e.g. (".csv",)
    extensions: tuple[str, ...] = ()

    @abstractmethod
    def extract(self, file_bytes: bytes, file_name: str) -> list[RawRecord]:
        """Turn raw upload bytes into loosely-typed field maps."""
        ...


@contextmanager
def materialized_upload(
    file_bytes: bytes,
    suffix: str,
    tmp_dir: str | Path | None = None,
) -> Iterator[Path]:
    """Write an upload to a temp file for libraries that want a path.

    The file is removed when the block exits, whether or not it raised.
    Failing to write it (missing tmp dir, full disk) is an ExtractionError.
    """
    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(suffix=suffix, dir=tmp_dir, delete=False) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(file_bytes)
    except OSError as exc:
        logger.error("Could not stage upload", tmp_dir=str(tmp_dir), error=str(exc))
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ExtractionError("could not stage upload") from exc
    try:
        yield tmp_path
    finally:
        tmp_path.unlink(missing_ok=True)
