"""Per-entry search index.

Each ``Index`` is built once from an ``Entry`` and replaced wholesale when the
entry changes; nothing mutates an index in place.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from launchrank.models.entry import Entry

# Only the head of long descriptions goes into the fuzzy-matched text
_MAX_COMMENT_WORDS = 10

_TOKEN_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> list[str]:
    """Split on anything that is not a letter or digit; lowercase, no stemming."""
    return _TOKEN_RE.findall(text.lower())


@dataclass(frozen=True)
class Index:
    entry: Entry
    name_normalized: str
    comment_tokens: tuple[str, ...]
    category_tokens: tuple[str, ...]
    # name + generic name + first words of the comment
    searchable_text: str

    @classmethod
    def from_entry(cls, entry: Entry) -> Index:
        parts = [entry.name]
        if entry.generic_name:
            parts.append(entry.generic_name)
        if entry.comment:
            words = entry.comment.split()[:_MAX_COMMENT_WORDS]
            parts.append(" ".join(words))

        return cls(
            entry=entry,
            name_normalized=entry.name.lower(),
            comment_tokens=tuple(tokenize(entry.comment)),
            category_tokens=tuple(cat.lower() for cat in entry.categories),
            searchable_text=" ".join(parts),
        )


class Indexer:
    """Indexes keyed by ``Entry.path``."""

    def __init__(self) -> None:
        self._indices: dict[str, Index] = {}

    def build(self, entries: Iterable[Entry]) -> None:
        for entry in entries:
            self.add(entry)

    def add(self, entry: Entry) -> None:
        self._indices[entry.path] = Index.from_entry(entry)

    def get(self, path: str) -> Index | None:
        return self._indices.get(path)

    def get_all(self) -> list[Index]:
        return list(self._indices.values())

    def remove(self, path: str) -> None:
        self._indices.pop(path, None)

    def clear(self) -> None:
        self._indices = {}

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, path: object) -> bool:
        return path in self._indices
