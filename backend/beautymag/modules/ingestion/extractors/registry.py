"""Extractor registry: format hint (file extension) -> extractor."""

from __future__ import annotations

from collections.abc import Iterable

from beautymag.core.config import Settings
from beautymag.core.errors import UnsupportedFormatError
from beautymag.modules.ingestion.entities import BrandPatternMatcher, EntityMatcher
from beautymag.modules.ingestion.extractors.base import BaseExtractor
from beautymag.modules.ingestion.extractors.document import DocumentExtractor
from beautymag.modules.ingestion.extractors.tabular import TabularExtractor


def normalize_format_hint(hint: str) -> str:
    """``"CSV"``, ``"csv"``, ``".csv"`` and ``"brief.csv"`` all become ``".csv"``."""
    hint = hint.strip().lower()
    if "." in hint:
        hint = hint[hint.rfind("."):]
    elif hint:
        hint = f".{hint}"
    return hint


class ExtractorRegistry:
    """Lookup of extractors by the extensions they declare."""

    def __init__(self, extractors: Iterable[BaseExtractor] = ()) -> None:
        self._extractors: dict[str, BaseExtractor] = {}
        for extractor in extractors:
            self.register(extractor)

    def register(self, extractor: BaseExtractor) -> None:
        for ext in extractor.extensions:
            ext = normalize_format_hint(ext)
            if ext in self._extractors:
                raise ValueError(f"Extractor for '{ext}' is already registered")
            self._extractors[ext] = extractor

    def get(self, format_hint: str) -> BaseExtractor:
        ext = normalize_format_hint(format_hint)
        extractor = self._extractors.get(ext)
        if extractor is None:
            supported = ", ".join(self.extensions) or "none"
            raise UnsupportedFormatError(
                f"unsupported file type '{ext or format_hint}' (supported: {supported})"
            )
        return extractor

    @property
    def extensions(self) -> list[str]:
        return sorted(self._extractors)

    def __repr__(self) -> str:
        return f"ExtractorRegistry({', '.join(self.extensions)})"


def default_registry(
    settings: Settings,
    matcher: EntityMatcher | None = None,
) -> ExtractorRegistry:
    """CSV, TSV and DOCX extractors wired from settings."""
    if matcher is None and settings.brand_tokens:
        matcher = BrandPatternMatcher(settings.brand_tokens)

    return ExtractorRegistry(
        [
            TabularExtractor(delimiter=",", extensions=(".csv",)),
            TabularExtractor(delimiter="\t", extensions=(".tsv",)),
            DocumentExtractor(
                matcher=matcher,
                excerpt_chars=settings.excerpt_chars,
                tmp_dir=settings.upload_tmp_dir,
            ),
        ]
    )
