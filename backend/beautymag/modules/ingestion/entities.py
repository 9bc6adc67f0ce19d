"""Product-mention detection inside free text.

The pipeline only depends on ``EntityMatcher``; the regex brand matcher below
is the default strategy and can be swapped for a dictionary- or NLP-based one.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable

from pydantic import BaseModel

# Set on RawRecords produced from a brand mention; the normalizer keys off it.
MATCHED_BRAND_FIELD = "matched_brand"


class EntityMatch(BaseModel):
    """One product mention found in a document."""

    text: str  # trimmed mention, e.g. "Revitalift Filler serum antiedad"
    token: str  # configured brand token that anchored the match


class EntityMatcher(ABC):
    """Abstract base class for entity extraction strategies."""

    @abstractmethod
    def find(self, text: str) -> list[EntityMatch]:
        """Return every mention in ``text``, in document order."""
        ...


class BrandPatternMatcher(EntityMatcher):
    """Matches a brand token plus the rest of its sentence or line.

    ``"Nuevo Revitalift Filler con ácido hialurónico. Otro texto"`` with token
    ``Revitalift`` yields ``"Revitalift Filler con ácido hialurónico"``.
    """

    def __init__(self, tokens: Iterable[str]) -> None:
        cleaned = {t.strip() for t in tokens if t and t.strip()}
        # Longest first so "Revitalift Filler" wins over "Revitalift".
        self.tokens: list[str] = sorted(cleaned, key=lambda t: (-len(t), t.casefold()))
        self._canonical = {t.casefold(): t for t in self.tokens}
        self._pattern: re.Pattern[str] | None = None
        if self.tokens:
            alternation = "|".join(re.escape(t) for t in self.tokens)
            self._pattern = re.compile(
                rf"(?<!\w)(?P<token>{alternation})(?!\w)[^.!?\r\n]*",
                re.IGNORECASE,
            )

    def find(self, text: str) -> list[EntityMatch]:
        if self._pattern is None or not text:
            return []

        matches: list[EntityMatch] = []
        for m in self._pattern.finditer(text):
            mention = m.group(0).strip()
            if not mention:
                continue
            token = self._canonical.get(m.group("token").casefold(), m.group("token"))
            matches.append(EntityMatch(text=mention, token=token))
        return matches
