"""Unit tests for merge_catalog — pure, no I/O."""

from __future__ import annotations

from beautymag.modules.catalog.merge import merge_catalog
from beautymag.modules.catalog.schemas import ProductRecord


def _rec(name: str | None, **extra: str) -> ProductRecord:
    return ProductRecord(name=name, source_file="t.csv", uploaded_at="now", extra=extra)


def _names(records: list[ProductRecord]) -> list[str | None]:
    return [r.name for r in records]


def test_case_insensitive_replacement_moves_record_to_end() -> None:
    """A same-name incoming record replaces the old one at the end."""
    outcome = merge_catalog([_rec("A"), _rec("B")], [_rec("a")])

    assert _names(outcome.records) == ["B", "a"]
    assert outcome.added_count == 1
    assert outcome.replaced_count == 1


def test_added_count_is_batch_size_not_growth() -> None:
    """added_count counts the whole batch, replacements included."""
    outcome = merge_catalog([_rec("A"), _rec("B")], [_rec("A"), _rec("B"), _rec("C")])

    assert outcome.added_count == 3
    assert outcome.total_count == 3
    assert _names(outcome.records) == ["A", "B", "C"]


def test_incoming_record_contents_win() -> None:
    """The replacing record's fields are kept, not merged."""
    outcome = merge_catalog([_rec("A", price="10")], [_rec("a", price="12")])
    assert outcome.records[0].extra == {"price": "12"}


def test_unnamed_records_always_append() -> None:
    """Unnamed records never dedup, even with identical content."""
    existing = [_rec(None, extracted_text="same"), _rec("A")]
    outcome = merge_catalog(existing, [_rec(None, extracted_text="same")])

    assert _names(outcome.records) == [None, "A", None]
    assert outcome.unnamed_count == 1
    assert outcome.replaced_count == 0


def test_blank_names_are_treated_as_unnamed() -> None:
    """Whitespace-only names do not collide."""
    outcome = merge_catalog([_rec("  ")], [_rec("")])
    assert outcome.total_count == 2


def test_duplicate_names_within_batch_keep_last() -> None:
    """Within one batch the last same-name record wins."""
    outcome = merge_catalog([], [_rec("A", v="1"), _rec("B"), _rec("a", v="2")])

    assert _names(outcome.records) == ["B", "a"]
    assert outcome.records[-1].extra == {"v": "2"}
    assert outcome.added_count == 3


def test_empty_inputs() -> None:
    """Nothing in, nothing out."""
    outcome = merge_catalog([], [])
    assert outcome.records == []
    assert outcome.added_count == 0


def test_merge_does_not_mutate_inputs() -> None:
    """Input sequences are left as they were."""
    existing = [_rec("A"), _rec("B")]
    incoming = [_rec("a")]
    merge_catalog(existing, incoming)
    assert _names(existing) == ["A", "B"]
    assert _names(incoming) == ["a"]


def test_duplicates_already_in_catalog_collapse_to_last() -> None:
    """Same-name records left in the stored catalog are folded on the next merge."""
    existing = [_rec("Labial", v="old"), _rec("B"), _rec("labial", v="newer")]

    outcome = merge_catalog(existing, [_rec("C")])

    assert _names(outcome.records) == ["B", "labial", "C"]
    assert outcome.records[1].extra == {"v": "newer"}
    assert outcome.replaced_count == 1
    assert outcome.total_count == 3
