from dataclasses import dataclass, field
from typing import Callable, Iterator

PLURAL_KEY_SEPARATOR = "|"


@dataclass(frozen=True)
class TranslationLocation:
    file: str
    line: int


@dataclass
class SingularEntry:
    locations: list[TranslationLocation] = field(default_factory=list)


@dataclass
class PluralEntry:
    singular: str
    plural: str
    locations: list[TranslationLocation] = field(default_factory=list)


TranslationEntry = SingularEntry | PluralEntry


def plural_key(singular: str, plural: str) -> str:
    # Known limitation: a singular message containing the separator can
    # collide with a plural pair.
    return f"{singular}{PLURAL_KEY_SEPARATOR}{plural}"


class Catalog:
    """Deduplicated translatable messages, kept in first-seen order."""

    def __init__(self) -> None:
        self._entries: dict[str, TranslationEntry] = {}

    def upsert(
        self,
        key: str,
        new_entry: Callable[[], TranslationEntry],
        location: TranslationLocation,
    ) -> TranslationEntry:
        entry = self._entries.get(key)
        if entry is None:
            entry = new_entry()
            self._entries[key] = entry
        entry.locations.append(location)
        return entry

    def add_singular(self, text: str, location: TranslationLocation) -> TranslationEntry:
        return self.upsert(text, SingularEntry, location)

    def add_plural(
        self, singular: str, plural: str, location: TranslationLocation
    ) -> TranslationEntry:
        return self.upsert(
            plural_key(singular, plural),
            lambda: PluralEntry(singular, plural),
            location,
        )

    def get(self, key: str) -> TranslationEntry | None:
        return self._entries.get(key)

    def items(self) -> Iterator[tuple[str, TranslationEntry]]:
        return iter(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
