"""Load declarative lesson content from bundled JSON resources."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from .models import Lesson, Place, PlaceMedia, PlaceMetrics, QuizActivity, QuizItem

CONTENT_PACKAGE = "mapquiz.content.lessons"

logger = logging.getLogger(__name__)


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _place_from_dict(lesson_id: str, raw: dict[str, Any]) -> Place:
    """Build a place from raw JSON content."""
    title = str(raw.get("title", "")).strip()
    if not title:
        raise ValueError(f"Place '{raw.get('id', '<unknown>')}' in lesson '{lesson_id}' has no title.")

    metrics = None
    raw_metrics = raw.get("metrics")
    if isinstance(raw_metrics, dict):
        metrics = PlaceMetrics(
            score=_optional_float(raw_metrics.get("score")),
            importance=_optional_float(raw_metrics.get("importance")),
        )

    media = None
    raw_media = raw.get("media")
    if isinstance(raw_media, dict):
        media = PlaceMedia(
            image=_optional_str(raw_media.get("image")),
            video=_optional_str(raw_media.get("video")),
            source=_optional_str(raw_media.get("source")),
            attribution=_optional_str(raw_media.get("attribution")),
        )

    return Place(
        id=str(raw["id"]),
        lat=float(raw["lat"]),
        lng=float(raw["lng"]),
        title=title,
        summary=str(raw.get("summary", "")),
        details=tuple(str(line) for line in raw.get("details", []) if str(line).strip()),
        category=str(raw.get("category", "")),
        metrics=metrics,
        media=media,
    )


def _quiz_item_from_dict(activity_id: str, raw: dict[str, Any]) -> QuizItem:
    """Build a quiz item from raw JSON content."""
    choices = tuple(str(choice) for choice in raw.get("choices", []))
    answer_index = int(raw.get("answer_index", 0))
    if not 0 <= answer_index < len(choices):
        raise ValueError(
            f"Quiz item '{raw.get('id', '<unknown>')}' in activity '{activity_id}' has answer_index "
            f"{answer_index} outside its {len(choices)} choices."
        )
    return QuizItem(
        id=str(raw["id"]),
        question=str(raw["q"]),
        choices=choices,
        answer_index=answer_index,
        explain=str(raw.get("explain", "")),
    )


def _activity_from_dict(raw: dict[str, Any]) -> QuizActivity | None:
    """Build a quiz activity; other activity types are not part of the deck."""
    if raw.get("type", "quiz") != "quiz":
        return None
    activity_id = str(raw["id"])
    items = tuple(_quiz_item_from_dict(activity_id, item) for item in raw.get("questions", []))
    return QuizActivity(id=activity_id, title=str(raw.get("title", "")), questions=items)


def _lesson_from_dict(raw: dict[str, Any]) -> Lesson:
    """Build a lesson from raw JSON content."""
    lesson_id = str(raw["id"])
    places = tuple(_place_from_dict(lesson_id, item) for item in raw.get("places", []))
    seen: set[str] = set()
    for place in places:
        if place.id in seen:
            raise ValueError(f"Duplicate place id in lesson '{lesson_id}': {place.id}")
        seen.add(place.id)

    activities = tuple(
        activity for activity in (_activity_from_dict(item) for item in raw.get("activities", [])) if activity
    )
    return Lesson(
        id=lesson_id,
        title=str(raw["title"]),
        description=str(raw.get("description", "")),
        places=places,
        activities=activities,
    )


def _add_lesson(lessons: dict[str, Lesson], raw: dict[str, Any]) -> None:
    lesson = _lesson_from_dict(raw)
    if lesson.id in lessons:
        raise ValueError(f"Duplicate lesson id: {lesson.id}")
    lessons[lesson.id] = lesson
    logger.debug("Loaded lesson %s with %d places", lesson.id, len(lesson.places))


def load_lessons() -> dict[str, Lesson]:
    """Load bundled lessons."""
    lessons: dict[str, Lesson] = {}
    entries = sorted(resources.files(CONTENT_PACKAGE).iterdir(), key=lambda entry: entry.name)
    for entry in entries:
        if entry.name.endswith(".json"):
            _add_lesson(lessons, json.loads(entry.read_text(encoding="utf-8-sig")))
    return lessons


def load_lessons_from_dir(path: Path) -> dict[str, Lesson]:
    """Load lessons from directory for tests/tools."""
    lessons: dict[str, Lesson] = {}
    for file_path in sorted(path.glob("*.json")):
        _add_lesson(lessons, json.loads(file_path.read_text(encoding="utf-8-sig")))
    return lessons
