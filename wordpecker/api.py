"""
OpenAI-backed content services for WordPecker.

This module handles:
- Level vocabulary generation (10 words on the level's topic)
- Single-word translation for the add-to-list flow
- Quiz generation over a learner's own word pairs

Every failure (no client configured, transport error, non-JSON output,
payload that does not match the contract) surfaces as ContentFetchError.
Callers decide what to substitute; see content.py.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from .config import CHAT_MODEL, OPENAI_API_KEY, REQUEST_TIMEOUT
from .errors import ContentFetchError
from .fallback import topic_for_level
from .languages import language_name
from .logger import logger, Timer
from .models import (
    LearningWord, PracticeQuestion, MultipleChoiceQuestion, FillBlankQuestion,
)
from .schemas import LEVEL_WORDS_SCHEMA, TRANSLATION_SCHEMA, QUIZ_SCHEMA

MAX_LEVEL_WORDS = 10


class ContentProvider(ABC):
    """Source of learning material. Implementations raise ContentFetchError on failure."""

    @abstractmethod
    async def fetch_level_words(
        self, level_id: int, source_language: str, target_language: str
    ) -> List[LearningWord]:
        ...

    @abstractmethod
    async def fetch_translation(
        self, word: str, source_language: str, target_language: str
    ) -> LearningWord:
        ...

    @abstractmethod
    async def fetch_quiz(
        self, words: List[LearningWord], source_language: str, target_language: str
    ) -> List[PracticeQuestion]:
        ...


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

def _extract_json(raw: Optional[str]) -> Dict[str, Any]:
    """Parse a model response, tolerating prose around the JSON object."""
    if not raw:
        raise ContentFetchError("Empty response from model")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        match = re.search(r"\{[\s\S]*\}", raw)
        if not match:
            raise ContentFetchError("Invalid response format: no JSON object found")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ContentFetchError(f"Invalid JSON format in response: {e}") from e
    if not isinstance(data, dict):
        raise ContentFetchError("Invalid response format: expected a JSON object")
    return data


def _to_word(entry: Dict[str, Any]) -> LearningWord:
    examples = entry.get("examples")
    if examples is not None and not isinstance(examples, list):
        raise ContentFetchError(f"'examples' must be a list, got {type(examples).__name__}")
    try:
        return LearningWord.from_dict(entry)
    except (KeyError, TypeError, ValueError) as e:
        raise ContentFetchError(f"Malformed word entry: {e}") from e


def parse_level_words(data: Dict[str, Any]) -> List[LearningWord]:
    """Validate a level payload. Entries without original/translation are dropped."""
    entries = data.get("words")
    if not isinstance(entries, list):
        raise ContentFetchError("Response has no 'words' list")

    words: List[LearningWord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if not str(entry.get("original") or "").strip() or not str(entry.get("translation") or "").strip():
            continue
        try:
            words.append(_to_word(entry))
        except ContentFetchError as e:
            logger.debug(f"Dropping word entry: {e}")

    if not words:
        raise ContentFetchError("Response contained no usable words")
    return words[:MAX_LEVEL_WORDS]


def parse_translation(word: str, data: Dict[str, Any]) -> LearningWord:
    translation = str(data.get("translation") or "").strip()
    if not translation:
        raise ContentFetchError(f"No translation returned for {word!r}")
    return _to_word({**data, "original": word.strip(), "translation": translation})


def parse_quiz(data: Dict[str, Any]) -> List[PracticeQuestion]:
    """Keep the multiple-choice and fill-blank questions that are internally consistent."""
    entries = data.get("questions")
    if not isinstance(entries, list):
        raise ContentFetchError("Response has no 'questions' list")

    questions: List[PracticeQuestion] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        kind = str(entry.get("type") or "").strip().lower()
        prompt = str(entry.get("question") or "").strip()
        answer = entry.get("correctAnswer")
        if not prompt or not isinstance(answer, str) or not answer.strip():
            continue

        if kind == "multiple-choice":
            raw_options = entry.get("options")
            if not isinstance(raw_options, list):
                logger.debug(f"Dropping multiple-choice question without an options list: {prompt!r}")
                continue
            options = [str(o) for o in raw_options]
            if options.count(answer) != 1:
                logger.debug(f"Dropping multiple-choice question without a unique correct option: {prompt!r}")
                continue
            questions.append(MultipleChoiceQuestion(prompt=prompt, options=options, correct_answer=answer))
        elif kind == "fill-blank":
            questions.append(FillBlankQuestion(prompt=prompt, correct_answer=answer.strip()))
        else:
            logger.debug(f"Dropping unsupported question type {kind!r}")

    if not questions:
        raise ContentFetchError("Response contained no usable questions")
    return questions


# ---------------------------------------------------------------------------
# OpenAI provider
# ---------------------------------------------------------------------------

class OpenAIContentProvider(ContentProvider):
    """Content provider backed by OpenAI chat completions in JSON mode."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: str = CHAT_MODEL):
        if client is None and OPENAI_API_KEY:
            client = AsyncOpenAI(api_key=OPENAI_API_KEY, timeout=REQUEST_TIMEOUT)
        self.client = client
        self.model = model

    def is_available(self) -> bool:
        """Check if the OpenAI client is configured."""
        return self.client is not None

    async def _complete_json(self, label: str, system: str, user: str, temperature: float) -> Dict[str, Any]:
        if self.client is None:
            raise ContentFetchError("OpenAI client not configured (OPENAI_API_KEY missing)")

        logger.api_call(f"chat.completions.create ({label})", model=self.model)
        try:
            with Timer() as timer:
                completion = await self.client.chat.completions.create(
                    model=self.model,
                    response_format={"type": "json_object"},
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": user},
                    ],
                    temperature=temperature,
                )
            raw = completion.choices[0].message.content
        except Exception as e:
            logger.api_error(f"{label} failed: {e}")
            raise ContentFetchError(f"{label} failed: {e}") from e

        logger.api_response(f"chat.completions.create ({label})", duration_ms=timer.duration_ms)
        return _extract_json(raw)

    async def fetch_level_words(
        self, level_id: int, source_language: str, target_language: str
    ) -> List[LearningWord]:
        topic = topic_for_level(level_id)
        source_name = language_name(source_language)
        target_name = language_name(target_language)

        data = await self._complete_json(
            "level_words",
            system=(
                "You are an experienced language teacher writing vocabulary lessons "
                "for beginners.\n" + LEVEL_WORDS_SCHEMA
            ),
            user=(
                f"Generate 10 {target_name} vocabulary words for level {level_id} language learners.\n"
                f"Topic: {topic}\n"
                f"Source language: {source_name}\n"
                f"Target language: {target_name}"
            ),
            temperature=0.5,
        )
        words = parse_level_words(data)
        logger.success(f"Level {level_id} content: {len(words)} words on '{topic}'")
        return words

    async def fetch_translation(
        self, word: str, source_language: str, target_language: str
    ) -> LearningWord:
        data = await self._complete_json(
            "translation",
            system="You are a precise bilingual dictionary.\n" + TRANSLATION_SCHEMA,
            user=(
                f'Translate the word "{word}" from {language_name(source_language)} '
                f"to {language_name(target_language)}. Give 2 example sentences."
            ),
            temperature=0.2,
        )
        return parse_translation(word, data)

    async def fetch_quiz(
        self, words: List[LearningWord], source_language: str, target_language: str
    ) -> List[PracticeQuestion]:
        if not words:
            raise ContentFetchError("Cannot build a quiz from an empty word list")

        word_list = ", ".join(f"{w.original} ({w.translation})" for w in words)
        data = await self._complete_json(
            "quiz",
            system="You write short vocabulary quizzes for language learners.\n" + QUIZ_SCHEMA,
            user=(
                f"Create a language learning quiz for these specific words: {word_list}.\n"
                f"Source language: {language_name(source_language)}, "
                f"Target language: {language_name(target_language)}.\n"
                "Generate 7 questions."
            ),
            temperature=0.7,
        )
        return parse_quiz(data)
