"""
Fallback policy: ask the provider first, substitute offline content on failure.

None of these functions raise ContentFetchError. The learner always gets
something to study; the failure is only visible in the log.
"""

from typing import List

from .api import ContentProvider
from .errors import ContentFetchError
from .fallback import FallbackContentGenerator
from .logger import logger
from .models import LearningWord, PracticeQuestion
from .questions import QuestionSynthesizer


async def load_level_words(
    provider: ContentProvider,
    generator: FallbackContentGenerator,
    level_id: int,
    source_language: str,
    target_language: str,
) -> List[LearningWord]:
    """Words for one level, never empty."""
    try:
        words = await provider.fetch_level_words(level_id, source_language, target_language)
        if words:
            return words
        logger.warning(f"Provider returned no words for level {level_id}")
    except ContentFetchError as e:
        logger.warning(f"Level {level_id} content unavailable ({e}), using offline words")

    return generator.generate(level_id, source_language, target_language)


async def translate_word(
    provider: ContentProvider,
    generator: FallbackContentGenerator,
    word: str,
    source_language: str,
    target_language: str,
) -> LearningWord:
    """Translation for the add-to-list flow."""
    try:
        return await provider.fetch_translation(word, source_language, target_language)
    except ContentFetchError as e:
        logger.warning(f"Translation of {word!r} unavailable ({e}), using offline lookup")
        return generator.translate(word, source_language, target_language)


async def build_quiz(
    provider: ContentProvider,
    synthesizer: QuestionSynthesizer,
    words: List[LearningWord],
    source_language: str,
    target_language: str,
) -> List[PracticeQuestion]:
    """Quiz over a learner's own words; falls back to the local practice set."""
    try:
        questions = await provider.fetch_quiz(words, source_language, target_language)
        if questions:
            return questions
        logger.warning("Provider returned an empty quiz")
    except ContentFetchError as e:
        logger.warning(f"Quiz generation unavailable ({e}), synthesizing locally")

    return synthesizer.synthesize(words, source_language, target_language)
