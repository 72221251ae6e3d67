"""A terminal quiz with a couple of bundled quizzes."""

from __future__ import annotations

import argparse
import re
import sys
import time
from dataclasses import dataclass
from typing import TextIO

from termcolor import colored

_ANSWER_RE = re.compile(r"\+?\d+", re.ASCII)


def _paint(text: str, color: str | None = None, attrs: list[str] | None = None) -> str:
    return colored(text, color, attrs=attrs, force_color=True)


@dataclass(frozen=True)
class Question:
    """A multiple-choice question; ``correct`` is the 1-based right option."""

    text: str
    options: tuple[str, str, str, str]
    correct: int


@dataclass(frozen=True)
class Quiz:
    """A named set of questions with the fraction needed to pass."""

    name: str
    title: str
    questions: tuple[Question, ...]
    pass_mark: float


@dataclass(frozen=True)
class QuizResult:
    """The outcome of taking a quiz."""

    correct: int
    total: int
    elapsed: int
    pass_mark: float

    @property
    def fraction(self) -> float:
        return self.correct / self.total

    @property
    def passed(self) -> bool:
        return self.fraction >= self.pass_mark


def quizzes() -> list[Quiz]:
    """Return the bundled quizzes."""
    return [
        Quiz(
            name="general",
            title="🌍  General Knowledge",
            pass_mark=0.7,
            questions=(
                Question(
                    "Which planet is known as the Red Planet?",
                    ("Earth", "Mars", "Jupiter", "Venus"),
                    2,
                ),
                Question(
                    "Who wrote the play 'Romeo and Juliet'?",
                    ("William Shakespeare", "Charles Dickens", "Leo Tolstoy", "Jane Austen"),
                    1,
                ),
                Question(
                    "What is the capital city of Australia?",
                    ("Sydney", "Melbourne", "Canberra", "Brisbane"),
                    3,
                ),
                Question(
                    "How many degrees are in a right angle?",
                    ("45", "90", "180", "360"),
                    2,
                ),
                Question(
                    "Which element has the chemical symbol 'O'?",
                    ("Gold", "Oxygen", "Silver", "Iron"),
                    2,
                ),
            ),
        ),
        Quiz(
            name="science",
            title="🔬  Basic Science",
            pass_mark=0.6,
            questions=(
                Question(
                    "What gas do plants absorb from the atmosphere?",
                    ("Oxygen", "Nitrogen", "Carbon Dioxide", "Hydrogen"),
                    3,
                ),
                Question(
                    "What is H₂O more commonly known as?",
                    ("Salt", "Water", "Hydrogen Peroxide", "Ozone"),
                    2,
                ),
                Question(
                    "How many planets are in our solar system?",
                    ("7", "8", "9", "10"),
                    2,
                ),
                Question(
                    "At what temperature (°C) does water freeze?",
                    ("0", "32", "100", "‑273"),
                    1,
                ),
            ),
        ),
    ]


def find_quiz(name: str) -> Quiz | None:
    """Return the bundled quiz with this short name, or None."""
    return next((quiz for quiz in quizzes() if quiz.name == name), None)


def parse_answer(text: str) -> int | None:
    """Return the chosen option 1-4, or None if the text is not one of them."""
    trimmed = text.strip()
    if not _ANSWER_RE.fullmatch(trimmed):
        return None
    number = int(trimmed)
    return number if 1 <= number <= 4 else None


def _ask(question: Question, stdin: TextIO, stdout: TextIO) -> int:
    while True:
        stdout.write(_paint("Your answer (1 - 4): ", "light_blue", ["bold"]))
        stdout.flush()
        line = stdin.readline()
        if not line:
            raise EOFError("no more input while waiting for an answer")
        answer = parse_answer(line)
        if answer is not None:
            return answer
        print(_paint("Please type a number between 1 and 4.", "light_red"), file=stdout)


def run_quiz(
    quiz: Quiz, stdin: TextIO | None = None, stdout: TextIO | None = None
) -> QuizResult:
    """Ask every question of the quiz, print the results and return them."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    print(
        f"\n{_paint('▶️  Starting quiz:', 'light_cyan', ['bold'])} "
        f"{_paint(quiz.title, attrs=['bold'])}\n",
        file=stdout,
    )

    start = time.monotonic()
    correct = 0
    for number, question in enumerate(quiz.questions, start=1):
        print(
            f"{_paint(f'Q{number}: ', 'light_magenta', ['bold'])} "
            f"{_paint(question.text, attrs=['bold'])}",
            file=stdout,
        )
        for option_number, option in enumerate(question.options, start=1):
            print(f"  {_paint(f'{option_number}.', 'light_yellow')} {option}", file=stdout)

        if _ask(question, stdin, stdout) == question.correct:
            print(f"{_paint('✓ Correct!' + chr(10), 'light_green', ['bold'])}\n", file=stdout)
            correct += 1
        else:
            print(
                f"{_paint('✗ Wrong!', 'light_red', ['bold'])} "
                f"{_paint(f'(correct: {question.correct})', attrs=['dark'])}\n",
                file=stdout,
            )

    result = QuizResult(
        correct=correct,
        total=len(quiz.questions),
        elapsed=int(time.monotonic() - start),
        pass_mark=quiz.pass_mark,
    )

    print(
        f"{_paint('📊  Results', attrs=['bold', 'underline'])}\n"
        f"├── {_paint('Score:', attrs=['bold'])} {result.correct}/{result.total} "
        f"({result.fraction * 100:.0f}%)\n"
        f"└── {_paint('Time:', attrs=['bold'])} {result.elapsed}s\n",
        file=stdout,
    )

    if result.passed:
        print(_paint("🎉  You passed!", "light_green", ["bold"]), file=stdout)
    else:
        print(
            _paint("😞  You did not pass. Better luck next time!", "light_red", ["bold"]),
            file=stdout,
        )
    return result


def _non_empty(text: str) -> str:
    if not text:
        raise argparse.ArgumentTypeError("a value is required")
    return text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-app", description="A terminal quiz application"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List all bundled quizzes")
    take = commands.add_parser("take", help="Take a quiz by name (see `list`)")
    take.add_argument("name", type=_non_empty, help='The quiz\'s short name (e.g. "general")')
    return parser


def main(argv: list[str] | None = None) -> int:
    """List the bundled quizzes or take one."""
    args = _build_parser().parse_args(argv)
    if args.command == "list":
        print(f"{_paint('Available Quizzzes:', attrs=['bold', 'underline'])}\n")
        for quiz in quizzes():
            print(f" • {_paint(quiz.name, 'light_green', ['bold'])} {quiz.title}")
        return 0

    quiz = find_quiz(args.name)
    if quiz is None:
        print(f"{_paint('unknown quiz:', 'light_red')} {args.name}", file=sys.stderr)
        return 0
    run_quiz(quiz)
    return 0


if __name__ == "__main__":
    sys.exit(main())