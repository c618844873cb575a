"""Deterministic question deck built from a lesson's places and quizzes."""

from __future__ import annotations

from .models import Answer, AnswerAction, CircleMark, Lesson, Place, Question, QuickFact, TextMark

DEFAULT_IMPORTANCE = 60
DEFAULT_PLACE_SCORE = 70
STORY_RADIUS_M = 85000


def _coords(place: Place) -> str:
    return f"{place.lat:.3f}, {place.lng:.3f}"


def _importance(place: Place) -> float:
    if place.metrics is None or place.metrics.importance is None:
        return DEFAULT_IMPORTANCE
    return place.metrics.importance


def build_location_question(lesson_id: str, place: Place) -> Question:
    """Build the "where is" question for one place."""
    return Question(
        id=f"{lesson_id}-deck-where-{place.id}",
        lesson_id=lesson_id,
        difficulty=1,
        prompt=f"فين {place.title}؟",
        answer=Answer(
            title=f"{place.title} على الخريطة",
            paragraphs=(place.summary, f"الإحداثيات: {_coords(place)}.", *place.details[:2]),
            quick_facts=(
                QuickFact("تصنيف", place.category),
                QuickFact("الطول/العرض", _coords(place)),
            ),
            next_suggestions=(
                f"عايز أتعرف على أهم حاجات {place.title}.",
                f"إزاي نستخدم {place.title} لصالح الناس؟",
            ),
        ),
        action=AnswerAction(
            fly_to_place_id=place.id,
            highlight_place_ids=frozenset({place.id}),
            set_layers={"showLabels": True, "showHeat": True},
            draw=(TextMark(at=(place.lat, place.lng), text="هنا السؤال"),),
        ),
    )


def build_story_question(lesson_id: str, place: Place) -> Question:
    """Build the "what makes it special" question for one place."""
    snippet = place.details[0] if place.details else place.summary
    score = DEFAULT_PLACE_SCORE
    if place.metrics is not None and place.metrics.score is not None:
        score = place.metrics.score
    return Question(
        id=f"{lesson_id}-deck-why-{place.id}",
        lesson_id=lesson_id,
        difficulty=2,
        prompt=f"إيه أهم حاجة بتميز {place.title}؟",
        answer=Answer(
            title=f"{place.title} في سطور",
            paragraphs=tuple(line for line in (snippet, *place.details[1:3]) if line),
            quick_facts=(
                QuickFact("تقييم", f"{score:g} / 100"),
                QuickFact("الإحداثيات", _coords(place)),
            ),
            next_suggestions=("عايز أسمع قصة المكان دا", "إيه اللي يخليني أتعامل مع المكان دا؟"),
        ),
        action=AnswerAction(
            fly_to_place_id=place.id,
            highlight_place_ids=frozenset({place.id}),
            set_layers={"showLabels": True, "showHeat": False},
            draw=(
                CircleMark(center=(place.lat, place.lng), radius_m=STORY_RADIUS_M, label="محور سؤالنا"),
                TextMark(at=(place.lat + 0.1, place.lng - 0.12), text="نركّز هنا"),
            ),
        ),
    )


def build_lesson_deck(lesson: Lesson) -> tuple[Question, ...]:
    """Build the ordered question bank for one lesson.

    Places go first, most important first, two questions each; quiz activity
    items follow in content order.
    """
    places = sorted(lesson.places, key=lambda place: -_importance(place))
    deck: list[Question] = []
    for place in places:
        deck.append(build_location_question(lesson.id, place))
        deck.append(build_story_question(lesson.id, place))

    for activity in lesson.activities:
        for item in activity.questions:
            deck.append(
                Question(
                    id=f"{lesson.id}-static-{item.id}",
                    lesson_id=lesson.id,
                    difficulty=2,
                    prompt=item.question,
                    answer=Answer(
                        title="إجابة الاختبار",
                        paragraphs=tuple(
                            line for line in (f"الإجابة الصحيحة هي: {item.choices[item.answer_index]}", item.explain) if line
                        ),
                        quick_facts=(QuickFact("نوع السؤال", "اختبار سريع"),),
                    ),
                )
            )
    return tuple(deck)
