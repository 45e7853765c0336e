"""Tests for the in-memory catalog."""

from tstranslate.classes import (
    Catalog,
    PluralEntry,
    SingularEntry,
    TranslationLocation,
    plural_key,
)


def loc(line: int, file: str = "a.ts") -> TranslationLocation:
    return TranslationLocation(file, line)


def test_new_key_creates_entry_with_one_location(catalog):
    entry = catalog.add_singular("Hello", loc(1))

    assert isinstance(entry, SingularEntry)
    assert entry.locations == [loc(1)]
    assert "Hello" in catalog
    assert len(catalog) == 1


def test_repeated_key_appends_location(catalog):
    catalog.add_singular("Hello", loc(1))
    catalog.add_singular("Hello", loc(7, "b.ts"))

    assert len(catalog) == 1
    assert catalog.get("Hello").locations == [loc(1), loc(7, "b.ts")]


def test_plural_entry_keeps_both_forms(catalog):
    catalog.add_plural("Goodbye", "Goodbyes", loc(2))
    catalog.add_plural("Goodbye", "Goodbyes", loc(3))

    entry = catalog.get("Goodbye|Goodbyes")
    assert isinstance(entry, PluralEntry)
    assert (entry.singular, entry.plural) == ("Goodbye", "Goodbyes")
    assert entry.locations == [loc(2), loc(3)]


def test_singular_and_plural_with_same_text_are_separate(catalog):
    catalog.add_singular("Goodbye", loc(1))
    catalog.add_plural("Goodbye", "Goodbyes", loc(2))

    assert len(catalog) == 2


def test_insertion_order_is_first_seen(catalog):
    catalog.add_singular("b", loc(1))
    catalog.add_plural("a", "as", loc(2))
    catalog.add_singular("c", loc(3))
    catalog.add_singular("b", loc(4))

    assert [key for key, _ in catalog.items()] == ["b", "a|as", "c"]


def test_colliding_key_keeps_first_variant(catalog):
    catalog.add_singular("a|b", loc(1))
    entry = catalog.add_plural("a", "b", loc(2))

    assert isinstance(entry, SingularEntry)
    assert entry.locations == [loc(1), loc(2)]


def test_plural_key_uses_pipe_separator():
    assert plural_key("one", "many") == "one|many"
