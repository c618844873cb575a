"""CLI entrypoint for the map lesson chat assistant."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Callable

from .assistant import DEFAULT_CHIP_COUNT, AssistantSession, Reply, quick_fact_lines
from .content_loader import load_lessons
from .matching import NO_PLACE, NO_QUESTION
from .models import CircleMark, DrawOp, Lesson

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
BACK_COMMANDS = {":back", ":b"}
FLOW_EXIT_COMMANDS = {":quit", ":exit", ":q"}
CHIPS_COMMANDS = {":chips", ":c"}
MENU_QUIT_COMMANDS = {"q"}


class QuitApp(Exception):
    """Signal immediate app exit from nested menu flows."""


def _lessons() -> dict[str, Lesson]:
    """Load bundled lessons."""
    return load_lessons()


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    parser = argparse.ArgumentParser(prog="mapquiz", description="Map lesson chat assistant")
    parser.add_argument("command", nargs="?", default="play", choices=["play", "lessons"])
    parser.add_argument("--lesson", help="Lesson id to open directly")
    parser.add_argument("--chips", type=int, default=DEFAULT_CHIP_COUNT, help="Number of suggested questions")
    parser.add_argument("--seed", type=int, help="Seed for suggestion sampling")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log matching decisions")
    args = parser.parse_args(argv)
    if args.chips < 0:
        parser.error("--chips must be non-negative")
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    lessons = _lessons()
    if args.command == "lessons":
        _lessons_table(lessons, print)
        return 0
    if args.lesson is not None and args.lesson not in lessons:
        print(f"Unknown lesson: {args.lesson}")
        return 2
    rng = random.Random(args.seed) if args.seed is not None else None
    return play_shell(lessons, lesson_id=args.lesson, chip_count=args.chips, rng=rng)


def play_shell(
    lessons: dict[str, Lesson],
    input_fn: InputFn = input,
    print_fn: PrintFn = print,
    *,
    lesson_id: str | None = None,
    chip_count: int = DEFAULT_CHIP_COUNT,
    rng: random.Random | None = None,
) -> int:
    """Run the lesson picker and chat loop."""
    try:
        while True:
            lesson = lessons[lesson_id] if lesson_id is not None else _select_lesson(lessons, input_fn, print_fn)
            lesson_id = None
            if lesson is None:
                return 0
            session = AssistantSession(lesson, chip_count=chip_count, rng=rng)
            _chat_flow(session, input_fn, print_fn)
    except QuitApp:
        return 0


def _lessons_table(lessons: dict[str, Lesson], print_fn: PrintFn) -> None:
    """Print lesson ids with place and quiz counts."""
    if not lessons:
        print_fn("No lessons available.")
        return
    id_width = max(len("Lesson"), max(len(lesson_id) for lesson_id in lessons))
    header = f"{'Lesson':<{id_width}} {'Places':>6} {'Quiz':>4} Title"
    print_fn(header)
    print_fn("-" * len(header))
    for lesson in lessons.values():
        quiz_count = sum(len(activity.questions) for activity in lesson.activities)
        print_fn(f"{lesson.id:<{id_width}} {len(lesson.places):>6} {quiz_count:>4} {lesson.title}")


def _select_lesson(lessons: dict[str, Lesson], input_fn: InputFn, print_fn: PrintFn) -> Lesson | None:
    """Choose a lesson by number."""
    ordered = list(lessons.values())
    while True:
        print_fn("\n=== Lessons ===")
        if not ordered:
            print_fn("No lessons available.")
            return None
        for idx, lesson in enumerate(ordered, start=1):
            print_fn(f"{idx}) {lesson.title}")
        print_fn("q) Quit")
        choice = input_fn("Choose lesson: ").strip().lower()
        if choice in MENU_QUIT_COMMANDS:
            return None
        if choice.isdecimal():
            index = int(choice) - 1
            if 0 <= index < len(ordered):
                return ordered[index]
        print_fn("Invalid choice.")


def _print_chips(session: AssistantSession, print_fn: PrintFn) -> None:
    if not session.chips:
        return
    print_fn("Suggested questions:")
    for idx, question in enumerate(session.chips, start=1):
        print_fn(f"{idx:>2}) {question.prompt}")


def _chat_flow(session: AssistantSession, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Chat about one lesson until the user goes back."""
    print_fn(f"\n=== {session.lesson.title} ===")
    print_fn(f"أهلاً! أنا مساعدك في درس: {session.lesson.title}. اسألني أي سؤال أو اختار من المقترحات.")
    _print_chips(session, print_fn)
    print_fn("Type a number to pick a suggestion, :c for suggestions, :b to go back, :q to quit.")

    while True:
        raw = input_fn("> ").strip()
        lowered = raw.lower()
        if lowered in BACK_COMMANDS:
            discovered, total = session.progress
            print_fn(f"Session XP: {session.stats.xp}")
            print_fn(f"Discovered: {discovered} / {total}")
            return
        if lowered in FLOW_EXIT_COMMANDS:
            raise QuitApp()
        if lowered in CHIPS_COMMANDS:
            _print_chips(session, print_fn)
            continue
        if raw.isdecimal():
            index = int(raw) - 1
            if not 0 <= index < len(session.chips):
                print_fn("Invalid suggestion number.")
                continue
            raw = session.chips[index].prompt
            print_fn(f"? {raw}")

        reply = session.ask(raw)
        if reply is None:
            continue
        _print_reply(session, reply, print_fn)


def _draw_label(op: DrawOp) -> str:
    if isinstance(op, CircleMark):
        return f"circle {op.radius_m / 1000:g} km {op.label}".rstrip()
    return f"text {op.text}"


def _print_reply(session: AssistantSession, reply: Reply, print_fn: PrintFn) -> None:
    """Print answer text plus the map effects a UI would apply."""
    print_fn(reply.text)
    if reply.question is NO_QUESTION:
        return
    for line in quick_fact_lines(reply.question.answer.quick_facts):
        print_fn(f"  - {line}")
    if reply.place is not NO_PLACE:
        print_fn(f"[map] {reply.place.title} ({reply.place.lat:.3f}, {reply.place.lng:.3f})")
    action = reply.question.action
    if action is not None and action.set_layers:
        states = {name: "on" if session.map.layers[name] else "off" for name in sorted(action.set_layers)}
        print_fn("[layers] " + ", ".join(f"{name}={state}" for name, state in states.items()))
    if session.map.highlight_ids:
        print_fn(f"[highlight] {', '.join(sorted(session.map.highlight_ids))}")
    for op in session.map.draw:
        print_fn(f"[draw] {_draw_label(op)}")
    if reply.xp_gained:
        discovered, total = session.progress
        print_fn(f"+{reply.xp_gained} XP (discovered {discovered} / {total})")


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
