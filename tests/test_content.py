"""
Tests for the provider-first, offline-second content policy.
"""

import pytest

from conftest import FailingProvider, StaticProvider, make_words

from wordpecker.content import build_quiz, load_level_words, translate_word
from wordpecker.fallback import FallbackContentGenerator


@pytest.fixture
def generator():
    return FallbackContentGenerator()


@pytest.mark.asyncio
async def test_level_words_come_from_provider_when_it_answers(generator):
    words = make_words(4)
    provider = StaticProvider(words)
    assert await load_level_words(provider, generator, 1, "en", "es") == words
    assert provider.level_calls == 1


@pytest.mark.asyncio
async def test_level_words_fall_back_to_offline_table(generator):
    provider = FailingProvider()
    words = await load_level_words(provider, generator, 2, "en", "es")
    assert words == generator.generate(2, "en", "es")
    assert len(words) == 10
    assert provider.calls == 1


@pytest.mark.asyncio
async def test_empty_provider_answer_falls_back(generator):
    words = await load_level_words(StaticProvider([]), generator, 1, "en", "fr")
    assert words == generator.generate(1, "en", "fr")


@pytest.mark.asyncio
async def test_translation_falls_back_to_offline_lookup(generator):
    assert (await translate_word(StaticProvider([]), generator, "cat", "en", "es")).translation == "cat-translated"

    word = await translate_word(FailingProvider(), generator, "cat", "en", "es")
    assert word.translation == "cat (es)"
    word = await translate_word(FailingProvider(), generator, "water", "en", "es")
    assert word.translation == "agua"


@pytest.mark.asyncio
async def test_quiz_falls_back_to_local_questions(synthesizer):
    words = make_words(5)
    questions = await build_quiz(FailingProvider(), synthesizer, words, "en", "es")
    assert len(questions) == 5
    assert {q.correct_answer for q in questions} <= {w.translation for w in words} | {w.original for w in words}
