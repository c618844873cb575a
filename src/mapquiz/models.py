"""Core domain models for map lessons and their question banks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class QuickFact:
    """One key/value line shown under an answer."""

    key: str
    value: str


@dataclass(frozen=True)
class Answer:
    """Answer text attached to a question."""

    title: str
    paragraphs: tuple[str, ...]
    quick_facts: tuple[QuickFact, ...] = ()
    next_suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class TextMark:
    """Text label drawn at a coordinate."""

    at: tuple[float, float]
    text: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class CircleMark:
    """Circle drawn around a coordinate, radius in meters."""

    center: tuple[float, float]
    radius_m: float
    label: str = ""
    kind: Literal["circle"] = "circle"


DrawOp = TextMark | CircleMark


@dataclass(frozen=True)
class AnswerAction:
    """Map effects requested by an answer; interpreted by the UI only."""

    fly_to_place_id: str | None = None
    highlight_place_ids: frozenset[str] = frozenset()
    set_layers: Mapping[str, bool] = field(default_factory=dict, hash=False)
    draw: tuple[DrawOp, ...] = ()


@dataclass(frozen=True)
class Question:
    """One bank question."""

    id: str
    lesson_id: str
    difficulty: int
    prompt: str
    answer: Answer
    action: AnswerAction | None = None


@dataclass(frozen=True)
class PlaceMetrics:
    score: float | None = None
    importance: float | None = None


@dataclass(frozen=True)
class PlaceMedia:
    image: str | None = None
    video: str | None = None
    source: str | None = None
    attribution: str | None = None


@dataclass(frozen=True)
class Place:
    """A point of interest on the lesson map."""

    id: str
    lat: float
    lng: float
    title: str
    summary: str
    details: tuple[str, ...] = ()
    category: str = ""
    metrics: PlaceMetrics | None = None
    media: PlaceMedia | None = None


@dataclass(frozen=True)
class QuizItem:
    """Multiple-choice item from a lesson quiz activity."""

    id: str
    question: str
    choices: tuple[str, ...]
    answer_index: int
    explain: str = ""


@dataclass(frozen=True)
class QuizActivity:
    id: str
    title: str
    questions: tuple[QuizItem, ...]


@dataclass(frozen=True)
class Lesson:
    """Top-level lesson with its places and activities."""

    id: str
    title: str
    description: str
    places: tuple[Place, ...]
    activities: tuple[QuizActivity, ...] = ()
