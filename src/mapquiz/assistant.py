"""Chat assistant session that answers free text for one lesson."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import count
from typing import Literal

from .deck import build_lesson_deck
from .matching import (
    NO_PLACE,
    NO_QUESTION,
    PlaceResult,
    QuestionResult,
    find_place_by_id,
    find_place_by_text,
    pick_best_question,
)
from .models import Answer, AnswerAction, DrawOp, Lesson, Place, Question, QuickFact
from .sampling import RandomSource, random_sample

logger = logging.getLogger(__name__)

DEFAULT_CHIP_COUNT = 22
XP_PER_DIFFICULTY = 5
XP_BONUS_PER_DIFFICULTY = 2
XP_PER_FLY_TO = 8
XP_PER_DRAW = 5
FALLBACK_TEXT = "عذراً، لم أفهم السؤال. حاول اختيار أحد الأسئلة المقترحة."
QUICK_FACTS_HEADER = "حقائق سريعة:"
DEFAULT_LAYERS = {
    "showPlaces": True,
    "showLabels": True,
    "showEgypt": True,
    "showNile": True,
    "showDelta": True,
    "showHeat": False,
    "showClusters": True,
    "showLegend": True,
    "showCoords": True,
}

ReplyKind = Literal["question", "place", "fallback"]


@dataclass(frozen=True)
class Reply:
    """Assistant reply for one user message."""

    kind: ReplyKind
    text: str
    question: QuestionResult = NO_QUESTION
    place: PlaceResult = NO_PLACE
    xp_gained: int = 0


@dataclass
class SessionStats:
    xp: int = 0
    discovered: set[str] = field(default_factory=set)


@dataclass
class MapState:
    """Map effects accumulated from answer actions.

    Layers merge across answers. Highlights and draw marks are replaced by
    each answer, so an answer without them clears them.
    """

    layers: dict[str, bool] = field(default_factory=lambda: dict(DEFAULT_LAYERS))
    highlight_ids: frozenset[str] = frozenset()
    active_place_id: str | None = None
    draw: tuple[DrawOp, ...] = ()

    def apply(self, action: AnswerAction | None, fly_to: PlaceResult = NO_PLACE) -> None:
        """Apply one answer action; fly_to is its resolved target, if any."""
        if action is None:
            action = AnswerAction()
        self.layers.update(action.set_layers)
        self.highlight_ids = action.highlight_place_ids
        self.draw = action.draw
        if fly_to is not NO_PLACE:
            self.active_place_id = fly_to.id


def format_answer(question: Question) -> str:
    """Render an answer the way the chat panel shows it."""
    body = "\n\n".join(question.answer.paragraphs)
    return f"【 {question.answer.title} 】\n\n{body}"


def speech_text(question: Question) -> str:
    """Flatten an answer into one line for a speech collaborator."""
    lines = [question.answer.title, *question.answer.paragraphs]
    if question.answer.quick_facts:
        lines.append(QUICK_FACTS_HEADER)
        lines.extend(quick_fact_lines(question.answer.quick_facts))
    return " ".join(lines)


def focus_place(lesson: Lesson, question: Question) -> PlaceResult:
    """Return the place a question's action points at, if it exists in the lesson."""
    action = question.action
    if action is None:
        return NO_PLACE
    target = action.fly_to_place_id
    if target is None and action.highlight_place_ids:
        target = min(action.highlight_place_ids)
    return find_place_by_id(lesson, target)


class AssistantSession:
    """In-memory chat session for one lesson."""

    def __init__(
        self,
        lesson: Lesson,
        chip_count: int = DEFAULT_CHIP_COUNT,
        rng: RandomSource | None = None,
    ) -> None:
        """Build the lesson bank and pick suggestion chips once."""
        self.lesson = lesson
        self.bank = build_lesson_deck(lesson)
        self.chips = tuple(random_sample(self.bank, chip_count, rng))
        self.stats = SessionStats()
        self.map = MapState()
        self._adhoc_ids = count(1)

    @property
    def progress(self) -> tuple[int, int]:
        """Discovered place count and lesson place count."""
        return len(self.stats.discovered), len(self.lesson.places)

    def ask(self, text: str) -> Reply | None:
        """Answer one user message; blank input sends nothing."""
        message = text.strip()
        if not message:
            return None

        question = pick_best_question(self.bank, message)
        mentioned = find_place_by_text(self.lesson, message)

        if question is not NO_QUESTION:
            if question.action is None or question.action.fly_to_place_id is None:
                place = mentioned or focus_place(self.lesson, question)
            else:
                place = focus_place(self.lesson, question)
            return self._reply("question", question, place)

        if mentioned is not NO_PLACE:
            return self._reply("place", self._adhoc_question(message, mentioned), mentioned)

        logger.debug("Falling back for lesson %s", self.lesson.id)
        return Reply(kind="fallback", text=FALLBACK_TEXT)

    def _adhoc_question(self, message: str, place: Place) -> Question:
        """Wrap a place mention in a one-off question."""
        return Question(
            id=f"adhoc-{next(self._adhoc_ids)}",
            lesson_id=self.lesson.id,
            difficulty=1,
            prompt=message,
            answer=Answer(title=place.title, paragraphs=(place.summary, *place.details)),
            action=AnswerAction(fly_to_place_id=place.id, highlight_place_ids=frozenset({place.id})),
        )

    def _reply(self, kind: ReplyKind, question: Question, place: PlaceResult) -> Reply:
        action = question.action
        gained = question.difficulty * (XP_PER_DIFFICULTY + XP_BONUS_PER_DIFFICULTY)
        fly_to = find_place_by_id(self.lesson, action.fly_to_place_id) if action else NO_PLACE
        self.map.apply(action, fly_to)
        if fly_to is not NO_PLACE:
            self.stats.discovered.add(fly_to.id)
            gained += XP_PER_FLY_TO
        if action is not None and action.draw:
            gained += XP_PER_DRAW
        self.stats.xp += gained
        return Reply(kind=kind, text=format_answer(question), question=question, place=place, xp_gained=gained)


def quick_fact_lines(facts: tuple[QuickFact, ...]) -> list[str]:
    """Format quick facts as "key: value" lines."""
    return [f"{fact.key}: {fact.value}" for fact in facts]
