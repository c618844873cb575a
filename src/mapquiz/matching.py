"""Pick the best question or place for free user text."""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from .indexing import place_index, question_index
from .models import Lesson, Place, Question
from .normalize import normalize
from .scoring import Score, score

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NoMatch(enum.Enum):
    """Falsy "nothing matched" sentinels, one per result kind."""

    QUESTION = "no-question"
    PLACE = "no-place"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"NO_{self.name}"


NO_QUESTION: Literal[NoMatch.QUESTION] = NoMatch.QUESTION
NO_PLACE: Literal[NoMatch.PLACE] = NoMatch.PLACE

QuestionResult = Question | Literal[NoMatch.QUESTION]
PlaceResult = Place | Literal[NoMatch.PLACE]


@dataclass(frozen=True)
class Ranked(Generic[T]):
    """One positively scored candidate and its position in source order."""

    item: T
    score: Score
    position: int


def rank_questions(bank: Sequence[Question], text: str, *, min_overlap: int = 1) -> list[Ranked[Question]]:
    """Return matching questions in tie-break order.

    Order: higher score, more shared tokens, lower difficulty, earlier bank position.
    """
    query = normalize(text)
    if not query:
        return []
    ranked: list[Ranked[Question]] = []
    for position, (question, entry) in enumerate(question_index(bank)):
        result = score(query, entry)
        if result and result.overlap >= min_overlap:
            ranked.append(Ranked(question, result, position))
    ranked.sort(key=lambda item: (-item.score.value, -item.score.overlap, item.item.difficulty, item.position))
    return ranked


def rank_places(places: Lesson | Sequence[Place], text: str, *, min_overlap: int = 1) -> list[Ranked[Place]]:
    """Return matching places in tie-break order.

    Places carry no difficulty; among equal scores the place whose title has
    fewer tokens wins before source order decides.
    """
    items = places.places if isinstance(places, Lesson) else places
    query = normalize(text)
    if not query:
        return []
    index = place_index(items)
    ranked: list[tuple[int, Ranked[Place]]] = []
    for position, (place, entry) in enumerate(index):
        result = score(query, entry)
        if result and result.overlap >= min_overlap:
            ranked.append((len(entry.title_tokens), Ranked(place, result, position)))
    ranked.sort(key=lambda pair: (-pair[1].score.value, -pair[1].score.overlap, pair[0], pair[1].position))
    return [item for _, item in ranked]


def pick_best_question(bank: Sequence[Question], text: str, *, min_overlap: int = 1) -> QuestionResult:
    """Return the best matching question, or NO_QUESTION."""
    ranked = rank_questions(bank, text, min_overlap=min_overlap)
    if not ranked:
        logger.debug("No question matched %r", text)
        return NO_QUESTION
    best = ranked[0]
    logger.debug("Matched question %s (score=%.3f, overlap=%d)", best.item.id, best.score.value, best.score.overlap)
    return best.item


def find_place_by_text(places: Lesson | Sequence[Place], text: str, *, min_overlap: int = 1) -> PlaceResult:
    """Return the place referenced by free text, or NO_PLACE."""
    ranked = rank_places(places, text, min_overlap=min_overlap)
    if not ranked:
        logger.debug("No place matched %r", text)
        return NO_PLACE
    best = ranked[0]
    logger.debug("Matched place %s (score=%.3f, overlap=%d)", best.item.id, best.score.value, best.score.overlap)
    return best.item


def find_place_by_id(places: Lesson | Sequence[Place], place_id: str | None) -> PlaceResult:
    """Resolve a place id; unknown or missing ids give NO_PLACE."""
    items = places.places if isinstance(places, Lesson) else places
    if place_id is None:
        return NO_PLACE
    place = place_index(items).item(place_id)
    return NO_PLACE if place is None else place
