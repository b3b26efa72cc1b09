"""
WordPecker - terminal learning session

Flow:
1. Intro: level title and language pair.
2. Learning: each word is shown; Enter reveals the translation, Enter moves on.
3. Practice: multiple-choice questions by number, fill-in-the-blank by typing.
4. Complete: score, pass/fail, retry offer, level table.

Setup (from repo root):

    python -m venv .venv
    source .venv/bin/activate   # or .venv\\Scripts\\activate on Windows
    pip install -e .

Optional .env:
    OPENAI_API_KEY=sk-...
    FIREBASE_CREDENTIALS_PATH=./firebase-credentials.json

Then run:
    python main.py --level 1 --source en --target es
"""

import argparse
import asyncio

from wordpecker.api import OpenAIContentProvider
from wordpecker.database import get_store, initialize_store
from wordpecker.languages import language_name
from wordpecker.logger import logger
from wordpecker.models import MultipleChoiceQuestion, get_learning_level
from wordpecker.session import LearningSession, SessionStep


def _ask(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        raise SystemExit(0)


def run_intro(session: LearningSession) -> None:
    level = get_learning_level(session.level_id)
    title = level.title if level else f"Level {session.level_id}"
    print(f"\nLevel {session.level_id}: {title}")
    print(f"{language_name(session.source_language)} → {language_name(session.target_language)}")
    print(f"You'll learn {len(session.words)} new words, then practice with a short quiz.")
    _ask("\nPress Enter to start learning...")
    session.start()


def run_learning(session: LearningSession) -> None:
    total = len(session.words)
    while session.current_step is SessionStep.LEARNING:
        word = session.current_word
        print(f"\nWord {session.state.word_index + 1}/{total}:  {word.original}")
        _ask("  (Enter to reveal) ")
        session.reveal_translation()
        print(f"  → {word.translation}" + (f"  /{word.pronunciation}/" if word.pronunciation else ""))
        for example in word.examples:
            print(f"    • {example}")
        _ask("  (Enter for next) ")
        session.advance_word()


def run_practice(session: LearningSession) -> None:
    total = len(session.questions)
    while session.current_step is SessionStep.PRACTICE:
        question = session.current_question
        print(f"\nQuestion {session.state.question_index + 1}/{total}: {question.prompt}")

        if isinstance(question, MultipleChoiceQuestion):
            for number, option in enumerate(question.options, start=1):
                print(f"  {number}. {option}")
            while True:
                raw = _ask("  Your choice: ").strip()
                if raw.isdigit() and 1 <= int(raw) <= len(question.options):
                    session.select_answer(question.options[int(raw) - 1])
                    break
                print("  Please enter one of the option numbers.")
        else:
            while session.state.selected_answer is None:
                session.select_answer(_ask("  Your answer: "))

        if session.check_answer():
            print("  ✓ Correct!")
        else:
            print(f"  ✗ The correct answer is: {question.correct_answer}")
        session.advance_question()


def print_levels() -> None:
    print("\nLevels:")
    for level in get_store().get_levels():
        info = get_learning_level(level.level_id)
        status = "✓" if level.is_completed else ("·" if level.is_unlocked else "🔒")
        print(f"  {status} {level.level_id}. {info.title if info else ''}  {level.progress}%")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Run one WordPecker learning session.")
    parser.add_argument("--level", type=int, default=1)
    parser.add_argument("--source", default="en", help="language you speak (code)")
    parser.add_argument("--target", default="es", help="language you are learning (code)")
    args = parser.parse_args()

    logger.banner("WordPecker")
    initialize_store()

    store = get_store()
    if not store.get_level(args.level).is_unlocked:
        print(f"Level {args.level} is locked. Complete the previous level first.")
        print_levels()
        return

    provider = OpenAIContentProvider()
    if not provider.is_available():
        logger.info("Running offline: lessons come from the built-in word tables")

    session = await LearningSession.open(
        args.level, args.source, args.target,
        provider=provider,
        store=store,
    )

    run_intro(session)
    while True:
        logger.separator("Learning")
        run_learning(session)
        logger.separator("Practice")
        run_practice(session)
        print(f"\nScore: {session.final_score}%  "
              f"({session.state.correct_count}/{session.state.total_questions} correct)")
        if session.passed:
            print("Level complete! The next level is unlocked.")
            break
        if _ask("Not quite 70%. Try again? [y/N] ").strip().lower() != "y":
            break
        session.retry()

    session.close()
    print_levels()


if __name__ == "__main__":
    asyncio.run(main())
