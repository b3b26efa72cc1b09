"""
Learning session state machine.

A session is one attempt at a level:

    LOADING -> INTRO -> LEARNING -> PRACTICE -> COMPLETE
                           ^                       |
                           +------- retry() -------+   (only when not passed)

Each step carries only the fields that make sense for it (see the *State
classes below), and every transition swaps in a new immutable state object,
so a rejected call can never leave a half-updated session behind.

Calling an action that the current step does not allow is a programming
error. With strict=True (the default, see WORDPECKER_STRICT_TRANSITIONS) it
raises InvalidStateTransition; with strict=False it is logged and ignored and
the action returns False.

Progress is written to the store at exactly two points: the checkpoint when
practice begins, and the outcome when the last question is answered. Store
failures are logged and never block the learner.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, ClassVar, List, Optional, Union

from .api import ContentProvider
from .config import LEARNING_CHECKPOINT, PASS_THRESHOLD, STRICT_TRANSITIONS
from .content import load_level_words
from .database import ProgressStore
from .errors import InvalidStateTransition, PersistenceWriteError
from .fallback import FallbackContentGenerator
from .logger import logger
from .models import LearningWord, PracticeQuestion
from .questions import QuestionSynthesizer


class SessionStep(str, Enum):
    LOADING = "loading"
    INTRO = "intro"
    LEARNING = "learning"
    PRACTICE = "practice"
    COMPLETE = "complete"


@dataclass(frozen=True)
class LoadingState:
    step: ClassVar[SessionStep] = SessionStep.LOADING


@dataclass(frozen=True)
class IntroState:
    step: ClassVar[SessionStep] = SessionStep.INTRO


@dataclass(frozen=True)
class LearningState:
    step: ClassVar[SessionStep] = SessionStep.LEARNING
    word_index: int = 0
    revealed: bool = False


@dataclass(frozen=True)
class PracticeState:
    step: ClassVar[SessionStep] = SessionStep.PRACTICE
    question_index: int = 0
    selected_answer: Optional[str] = None
    answer_checked: bool = False
    correct_count: int = 0


@dataclass(frozen=True)
class CompleteState:
    step: ClassVar[SessionStep] = SessionStep.COMPLETE
    final_score: int
    correct_count: int
    total_questions: int

    @property
    def passed(self) -> bool:
        return self.final_score >= PASS_THRESHOLD


SessionState = Union[LoadingState, IntroState, LearningState, PracticeState, CompleteState]


def score_percent(correct: int, total: int) -> int:
    """correct/total as a percentage, rounded half up."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


class LearningSession:
    """Drives one level from intro to completion."""

    def __init__(
        self,
        level_id: int,
        source_language: str,
        target_language: str,
        provider: ContentProvider,
        store: ProgressStore,
        generator: Optional[FallbackContentGenerator] = None,
        synthesizer: Optional[QuestionSynthesizer] = None,
        strict: bool = STRICT_TRANSITIONS,
    ):
        self.level_id = level_id
        self.source_language = source_language
        self.target_language = target_language
        self.provider = provider
        self.store = store
        self.generator = generator or FallbackContentGenerator()
        self.synthesizer = synthesizer or QuestionSynthesizer()
        self.strict = strict

        self._state: SessionState = LoadingState()
        self._words: List[LearningWord] = []
        self._questions: List[PracticeQuestion] = []
        self._load_started = False
        self._closed = False

    @classmethod
    async def open(cls, *args, **kwargs) -> "LearningSession":
        """Create a session and wait for its content."""
        session = cls(*args, **kwargs)
        await session.load()
        return session

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_step(self) -> SessionStep:
        return self._state.step

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def words(self) -> List[LearningWord]:
        return list(self._words)

    @property
    def questions(self) -> List[PracticeQuestion]:
        return list(self._questions)

    @property
    def current_word(self) -> Optional[LearningWord]:
        if isinstance(self._state, LearningState):
            return self._words[self._state.word_index]
        return None

    @property
    def current_question(self) -> Optional[PracticeQuestion]:
        if isinstance(self._state, PracticeState):
            return self._questions[self._state.question_index]
        return None

    @property
    def final_score(self) -> Optional[int]:
        if isinstance(self._state, CompleteState):
            return self._state.final_score
        return None

    @property
    def passed(self) -> Optional[bool]:
        if isinstance(self._state, CompleteState):
            return self._state.passed
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reject(self, action: str, reason: str = "") -> bool:
        error = InvalidStateTransition(action, self.current_step.name, reason)
        if self.strict:
            raise error
        logger.warning(f"Ignored invalid session action: {error}")
        return False

    def _expect(self, action: str, *allowed: type) -> Optional[SessionState]:
        """Current state if ``action`` is allowed in it; otherwise reject."""
        if self._closed:
            self._reject(action, "session is closed")
            return None
        if not isinstance(self._state, allowed):
            self._reject(action)
            return None
        return self._state

    def _set_state(self, state: SessionState) -> None:
        if state.step is not self._state.step:
            logger.session_transition(
                f"level {self.level_id} {self._state.step.name}", state.step.name
            )
        self._state = state

    def _persist(self, description: str, write: Callable[[], None]) -> None:
        try:
            write()
        except PersistenceWriteError as e:
            logger.error(f"Could not save {description} for level {self.level_id}: {e}")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch the level's words (falling back offline) and build the practice set."""
        if self._closed or self._load_started:
            self._reject("load", "content already requested")
            return
        self._load_started = True

        words = await load_level_words(
            self.provider, self.generator, self.level_id, self.source_language, self.target_language
        )
        if self._closed:
            logger.session(f"Level {self.level_id} session closed while loading, content discarded")
            return

        self._words = list(words)
        self._questions = self.synthesizer.synthesize(
            self._words, self.source_language, self.target_language
        )
        logger.session(
            f"Level {self.level_id} ready: {len(self._words)} words, {len(self._questions)} questions"
        )
        self._set_state(IntroState())

    def close(self) -> None:
        """Abandon the session. Any fetch still in flight is discarded."""
        if not self._closed:
            self._closed = True
            logger.session(f"Level {self.level_id} session closed in step {self.current_step.name}")

    # ------------------------------------------------------------------
    # Intro / Learning
    # ------------------------------------------------------------------

    def start(self) -> bool:
        if self._expect("start", IntroState) is None:
            return False
        self._set_state(LearningState())
        return True

    def reveal_translation(self) -> bool:
        state = self._expect("reveal_translation", LearningState)
        if state is None:
            return False
        self._set_state(replace(state, revealed=True))
        return True

    def advance_word(self) -> bool:
        state = self._expect("advance_word", LearningState)
        if state is None:
            return False
        if not state.revealed:
            return self._reject("advance_word", "translation has not been revealed")

        if state.word_index < len(self._words) - 1:
            self._set_state(LearningState(word_index=state.word_index + 1))
            return True

        self._set_state(PracticeState())
        self._persist(
            "learning checkpoint",
            lambda: self.store.set_progress(self.level_id, LEARNING_CHECKPOINT),
        )
        return True

    # ------------------------------------------------------------------
    # Practice
    # ------------------------------------------------------------------

    def select_answer(self, value: Optional[str]) -> bool:
        """Choose an answer for the current question. Ignored once it was checked."""
        state = self._expect("select_answer", PracticeState)
        if state is None:
            return False
        if state.answer_checked:
            logger.debug("Answer already checked, selection ignored")
            return False

        selected = value if value is not None and value.strip() else None
        self._set_state(replace(state, selected_answer=selected))
        return True

    def check_answer(self) -> bool:
        """Grade the selected answer. Returns True if it was correct."""
        state = self._expect("check_answer", PracticeState)
        if state is None:
            return False
        if state.answer_checked:
            return self._reject("check_answer", "answer already checked")
        if state.selected_answer is None:
            return self._reject("check_answer", "no answer selected")

        correct = self._questions[state.question_index].is_correct(state.selected_answer)
        self._set_state(replace(
            state,
            answer_checked=True,
            correct_count=state.correct_count + (1 if correct else 0),
        ))
        return correct

    def advance_question(self) -> bool:
        state = self._expect("advance_question", PracticeState)
        if state is None:
            return False
        if not state.answer_checked:
            return self._reject("advance_question", "answer has not been checked")

        if state.question_index < len(self._questions) - 1:
            self._set_state(PracticeState(
                question_index=state.question_index + 1,
                correct_count=state.correct_count,
            ))
            return True

        total = len(self._questions)
        complete = CompleteState(
            final_score=score_percent(state.correct_count, total),
            correct_count=state.correct_count,
            total_questions=total,
        )
        self._set_state(complete)
        logger.session(
            f"Level {self.level_id} finished: {complete.correct_count}/{total} correct, "
            f"score {complete.final_score}% ({'passed' if complete.passed else 'not passed'})"
        )

        if complete.passed:
            self._persist("level completion", lambda: self.store.complete_level(self.level_id))
            for word in self._words:
                self._persist(
                    f"learned flag for {word.original!r}",
                    lambda w=word: self.store.mark_word_learned(self.level_id, w.original),
                )
        else:
            self._persist(
                "level progress",
                lambda: self.store.set_progress(self.level_id, complete.final_score),
            )
        return True

    # ------------------------------------------------------------------
    # Complete
    # ------------------------------------------------------------------

    def retry(self) -> bool:
        """Start over from the first word with the same words and questions."""
        state = self._expect("retry", CompleteState)
        if state is None:
            return False
        if state.passed:
            return self._reject("retry", "level already passed")

        self._set_state(LearningState())
        return True
