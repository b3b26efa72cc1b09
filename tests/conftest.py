"""
Shared fixtures: in-memory progress store and scripted content providers.
"""

import random
from typing import List

import pytest

from wordpecker.api import ContentProvider
from wordpecker.database import ProgressStore
from wordpecker.errors import ContentFetchError
from wordpecker.models import LearningWord
from wordpecker.questions import QuestionSynthesizer


def make_words(count: int, with_examples: bool = False) -> List[LearningWord]:
    words = []
    for i in range(count):
        translation = f"palabra{i}"
        examples = [f"Esta es la {translation} de hoy.", f"This is word {i} of today."] if with_examples else []
        words.append(LearningWord(original=f"word{i}", translation=translation, examples=examples))
    return words


class StaticProvider(ContentProvider):
    """Always answers with the same words."""

    def __init__(self, words: List[LearningWord]):
        self.words = words
        self.level_calls = 0

    async def fetch_level_words(self, level_id, source_language, target_language):
        self.level_calls += 1
        return list(self.words)

    async def fetch_translation(self, word, source_language, target_language):
        return LearningWord(original=word, translation=f"{word}-translated")

    async def fetch_quiz(self, words, source_language, target_language):
        raise ContentFetchError("quiz not scripted")


class FailingProvider(ContentProvider):
    """Every fetch fails as if the network were down."""

    def __init__(self):
        self.calls = 0

    async def fetch_level_words(self, level_id, source_language, target_language):
        self.calls += 1
        raise ContentFetchError("network unreachable")

    async def fetch_translation(self, word, source_language, target_language):
        self.calls += 1
        raise ContentFetchError("network unreachable")

    async def fetch_quiz(self, words, source_language, target_language):
        self.calls += 1
        raise ContentFetchError("network unreachable")


@pytest.fixture
def store():
    return ProgressStore(user_id="test-user")


@pytest.fixture
def synthesizer():
    return QuestionSynthesizer(rng=random.Random(42))
