"""Per-lesson keyword indexes for questions and places."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .models import Place, Question
from .normalize import normalize_all

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class IndexEntry:
    """Tokens for one indexed entity; title tokens are a subset of tokens."""

    entity_id: str
    title_tokens: frozenset[str]
    tokens: frozenset[str]


class TokenIndex(Generic[T]):
    """Immutable token index in source order."""

    def __init__(self, items: Sequence[T], entries: Sequence[IndexEntry]) -> None:
        self._items = tuple(items)
        self._entries = tuple(entries)
        self._by_id: dict[str, tuple[T, IndexEntry]] = {}
        for item, entry in zip(self._items, self._entries):
            # first occurrence wins, matching source-order lookup
            self._by_id.setdefault(entry.entity_id, (item, entry))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[T, IndexEntry]]:
        return iter(zip(self._items, self._entries))

    def get(self, entity_id: str) -> IndexEntry | None:
        """Return entry for one id, or None when the id is not indexed."""
        found = self._by_id.get(entity_id)
        return None if found is None else found[1]

    def item(self, entity_id: str) -> T | None:
        """Return the indexed item with this id, or None."""
        found = self._by_id.get(entity_id)
        return None if found is None else found[0]


def question_entry(question: Question) -> IndexEntry:
    """Index one question from its prompt, answer title and quick facts."""
    if not isinstance(question, Question):
        raise TypeError(f"Question bank entries must be Question, got {type(question).__name__}")
    title_tokens = normalize_all(question.prompt)
    answer = question.answer
    answer_title = getattr(answer, "title", None)
    facts = getattr(answer, "quick_facts", None) or ()
    fact_text = [part for fact in facts for part in (getattr(fact, "key", None), getattr(fact, "value", None))]
    tokens = title_tokens | normalize_all(answer_title) | normalize_all(fact_text)
    return IndexEntry(entity_id=question.id, title_tokens=title_tokens, tokens=tokens)


def place_entry(place: Place) -> IndexEntry:
    """Index one place from its title, summary, details and category."""
    if not isinstance(place, Place):
        raise TypeError(f"Place list entries must be Place, got {type(place).__name__}")
    title_tokens = normalize_all(place.title)
    tokens = title_tokens | normalize_all(place.summary) | normalize_all(place.details) | normalize_all(place.category)
    return IndexEntry(entity_id=place.id, title_tokens=title_tokens, tokens=tokens)


class IndexCache(Generic[T]):
    """Single-slot cache keyed by the identity of the indexed sequence.

    A different sequence object (a lesson switch) replaces the cached index
    wholesale; the cached index itself is never modified.
    """

    def __init__(self, name: str, build_entry: Callable[[T], IndexEntry]) -> None:
        self._name = name
        self._build_entry = build_entry
        self._owner: Sequence[T] | None = None
        self._index: TokenIndex[T] | None = None

    def get(self, items: Sequence[T]) -> TokenIndex[T]:
        """Return the index for items, building it when the identity changed."""
        if self._index is not None and self._owner is items:
            return self._index
        if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
            raise TypeError(f"{self._name} index expects a sequence, got {type(items).__name__}")
        index = TokenIndex(items, [self._build_entry(item) for item in items])
        logger.debug("Rebuilt %s index with %d entries", self._name, len(index))
        self._owner = items
        self._index = index
        return index

    def clear(self) -> None:
        """Drop the cached index."""
        self._owner = None
        self._index = None


_QUESTION_INDEX: IndexCache[Question] = IndexCache("question", question_entry)
_PLACE_INDEX: IndexCache[Place] = IndexCache("place", place_entry)


def question_index(bank: Sequence[Question]) -> TokenIndex[Question]:
    """Return the cached token index for a question bank."""
    return _QUESTION_INDEX.get(bank)


def place_index(places: Sequence[Place]) -> TokenIndex[Place]:
    """Return the cached token index for a place list."""
    return _PLACE_INDEX.get(places)


def clear_index_caches() -> None:
    """Reset both index caches."""
    _QUESTION_INDEX.clear()
    _PLACE_INDEX.clear()
