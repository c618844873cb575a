from mapquiz.content_loader import load_lessons
from mapquiz.deck import build_lesson_deck
from mapquiz.models import (
    AnswerAction,
    CircleMark,
    Lesson,
    Place,
    PlaceMetrics,
    QuickFact,
    QuizActivity,
    QuizItem,
    TextMark,
)


def _lesson() -> Lesson:
    return Lesson(
        id="t",
        title="T",
        description="",
        places=(
            Place(id="low", lat=1.0, lng=2.0, title="مكان صغير", summary="ملخص صغير"),
            Place(
                id="high",
                lat=30.04444,
                lng=31.23571,
                title="نهر النيل",
                summary="شريان الحياة",
                details=("تفصيلة أولى", "تفصيلة تانية", "تفصيلة تالتة"),
                category="fresh",
                metrics=PlaceMetrics(score=95, importance=100),
            ),
            Place(id="mid", lat=3.0, lng=4.0, title="مكان عادي", summary="ملخص", metrics=PlaceMetrics(importance=60)),
        ),
        activities=(
            QuizActivity(
                id="quiz",
                title="Quiz",
                questions=(QuizItem(id="q1", question="سؤال؟", choices=("أ", "ب"), answer_index=1, explain="لأن"),),
            ),
        ),
    )


def test_places_sorted_by_importance_then_content_order() -> None:
    deck = build_lesson_deck(_lesson())
    assert [question.id for question in deck] == [
        "t-deck-where-high",
        "t-deck-why-high",
        "t-deck-where-low",
        "t-deck-why-low",
        "t-deck-where-mid",
        "t-deck-why-mid",
        "t-static-q1",
    ]


def test_location_question_shape() -> None:
    where = build_lesson_deck(_lesson())[0]
    assert where.difficulty == 1
    assert where.prompt == "فين نهر النيل؟"
    assert where.answer.title == "نهر النيل على الخريطة"
    assert where.answer.paragraphs == (
        "شريان الحياة",
        "الإحداثيات: 30.044, 31.236.",
        "تفصيلة أولى",
        "تفصيلة تانية",
    )
    assert where.answer.quick_facts == (
        QuickFact("تصنيف", "fresh"),
        QuickFact("الطول/العرض", "30.044, 31.236"),
    )
    assert where.action == AnswerAction(
        fly_to_place_id="high",
        highlight_place_ids=frozenset({"high"}),
        set_layers={"showLabels": True, "showHeat": True},
        draw=(TextMark(at=(30.04444, 31.23571), text="هنا السؤال"),),
    )


def test_story_question_shape() -> None:
    deck = build_lesson_deck(_lesson())
    story = deck[1]
    assert story.difficulty == 2
    assert story.prompt == "إيه أهم حاجة بتميز نهر النيل؟"
    assert story.answer.paragraphs == ("تفصيلة أولى", "تفصيلة تانية", "تفصيلة تالتة")
    assert story.answer.quick_facts[0] == QuickFact("تقييم", "95 / 100")
    assert story.action is not None
    assert story.action.set_layers == {"showLabels": True, "showHeat": False}
    circle = story.action.draw[0]
    assert isinstance(circle, CircleMark)
    assert circle.kind == "circle"
    assert circle.radius_m == 85000

    plain_story = deck[3]
    assert plain_story.answer.paragraphs == ("ملخص صغير",)
    assert plain_story.answer.quick_facts[0] == QuickFact("تقييم", "70 / 100")


def test_static_quiz_question() -> None:
    static = build_lesson_deck(_lesson())[-1]
    assert static.difficulty == 2
    assert static.prompt == "سؤال؟"
    assert static.answer.paragraphs == ("الإجابة الصحيحة هي: ب", "لأن")
    assert static.action is None


def test_bundled_water_deck() -> None:
    lesson = load_lessons()["water"]
    deck = build_lesson_deck(lesson)
    assert len(deck) == 2 * len(lesson.places) + 2
    assert deck[0].id == "water-deck-where-nile-cairo"
    assert deck[2].id == "water-deck-where-high-dam"
    assert deck[-1].id == "water-static-q2"
    assert all(question.lesson_id == "water" for question in deck)
    assert len({question.id for question in deck}) == len(deck)


def test_deck_is_deterministic() -> None:
    lesson = _lesson()
    assert build_lesson_deck(lesson) == build_lesson_deck(lesson)
