import json
from pathlib import Path

import pytest

from mapquiz.content_loader import load_lessons, load_lessons_from_dir


def _write(root: Path, name: str, payload: dict) -> None:
    root.mkdir(parents=True, exist_ok=True)
    (root / name).write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def _payload(lesson_id: str = "l", places: list | None = None, activities: list | None = None) -> dict:
    return {
        "id": lesson_id,
        "title": "درس",
        "places": places if places is not None else [{"id": "p", "lat": 1, "lng": 2, "title": "مكان"}],
        "activities": activities or [],
    }


def test_load_bundled_lessons() -> None:
    lessons = load_lessons()
    assert set(lessons) >= {"water", "energy"}
    water = lessons["water"]
    dam = next(place for place in water.places if place.id == "high-dam")
    assert dam.title == "السد العالي"
    assert dam.metrics is not None
    assert dam.metrics.importance == 95
    assert dam.category == "mega"
    assert [activity.id for activity in water.activities] == ["water-quiz"]
    assert water.activities[0].questions[1].answer_index == 2


def test_load_lessons_from_dir_defaults_optional_fields(tmp_path: Path) -> None:
    _write(tmp_path, "l.json", _payload())
    lesson = load_lessons_from_dir(tmp_path)["l"]
    place = lesson.places[0]
    assert place.lat == 1.0
    assert place.summary == ""
    assert place.details == ()
    assert place.metrics is None
    assert place.media is None
    assert lesson.description == ""
    assert lesson.activities == ()


def test_duplicate_lesson_id_raises(tmp_path: Path) -> None:
    _write(tmp_path, "a.json", _payload("same"))
    _write(tmp_path, "b.json", _payload("same"))
    with pytest.raises(ValueError, match="Duplicate lesson id"):
        load_lessons_from_dir(tmp_path)


def test_duplicate_place_id_raises(tmp_path: Path) -> None:
    place = {"id": "p", "lat": 1, "lng": 2, "title": "مكان"}
    _write(tmp_path, "l.json", _payload(places=[place, dict(place, title="مكان تاني")]))
    with pytest.raises(ValueError, match="Duplicate place id"):
        load_lessons_from_dir(tmp_path)


def test_place_without_title_raises(tmp_path: Path) -> None:
    _write(tmp_path, "l.json", _payload(places=[{"id": "p", "lat": 1, "lng": 2, "title": "  "}]))
    with pytest.raises(ValueError, match="has no title"):
        load_lessons_from_dir(tmp_path)


def test_quiz_answer_index_out_of_range_raises(tmp_path: Path) -> None:
    quiz = {"id": "quiz", "type": "quiz", "questions": [{"id": "q", "q": "?", "choices": ["a"], "answer_index": 3}]}
    _write(tmp_path, "l.json", _payload(activities=[quiz]))
    with pytest.raises(ValueError, match="answer_index"):
        load_lessons_from_dir(tmp_path)


def test_non_quiz_activities_are_skipped(tmp_path: Path) -> None:
    activities = [
        {"id": "tour", "type": "tour"},
        {"id": "quiz", "questions": [{"id": "q", "q": "سؤال", "choices": ["a", "b"], "answer_index": 1}]},
    ]
    _write(tmp_path, "l.json", _payload(activities=activities))
    lesson = load_lessons_from_dir(tmp_path)["l"]
    assert [activity.id for activity in lesson.activities] == ["quiz"]
