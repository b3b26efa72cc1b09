"""
Tests for the offline content generator.
"""

import pytest

from wordpecker.fallback import (
    _CURATED, HEADWORDS, TOPICS, FallbackContentGenerator, topic_for_level,
)

PAIRS = [("en", "es"), ("en", "fr"), ("es", "en"), ("fr", "en"), ("es", "fr"), ("de", "it"), ("en", "en")]


@pytest.fixture
def generator():
    return FallbackContentGenerator()


@pytest.mark.parametrize("source,target", PAIRS)
def test_always_ten_words_and_deterministic(generator, source, target):
    for level_id in range(0, 9):
        first = generator.generate(level_id, source, target)
        second = generator.generate(level_id, source, target)
        assert len(first) == 10
        assert first == second


def test_levels_beyond_table_reuse_last_topic(generator):
    assert generator.generate(99, "en", "es") == generator.generate(len(TOPICS), "en", "es")
    assert generator.generate(0, "en", "es") == generator.generate(1, "en", "es")
    assert topic_for_level(1) == "basic greetings and introductions"
    assert topic_for_level(42) == TOPICS[-1]


def test_curated_english_to_spanish(generator):
    hello = generator.generate(1, "en", "es")[0]
    assert hello.original == "hello"
    assert hello.translation == "hola"
    assert hello.pronunciation == "OH-lah"
    assert hello.examples == ["¡Hola! ¿Cómo estás?", "Hello! How are you?"]


def test_reverse_pair_swaps_sides(generator):
    hola = generator.generate(1, "es", "en")[0]
    assert hola.original == "hola"
    assert hola.translation == "hello"
    assert hola.pronunciation is None
    assert hola.examples[0] == "Hello! How are you?"


def test_pivot_pair_goes_through_english_row(generator):
    words = generator.generate(3, "es", "fr")
    assert (words[0].original, words[0].translation) == ("agua", "eau")
    assert words[0].pronunciation == "OH"


def test_language_codes_are_case_insensitive(generator):
    assert generator.generate(2, "EN", "Es") == generator.generate(2, "en", "es")


def test_unknown_pair_uses_templated_entries(generator):
    words = generator.generate(1, "de", "it")
    assert words[0].original == "hello (de)"
    assert words[0].translation == "hello (it)"
    assert all(not w.examples for w in words)
    assert [w.original for w in words] == [f"{h} (de)" for h in HEADWORDS[0]]


def test_same_language_pair_is_templated(generator):
    assert generator.generate(1, "en", "en")[0].translation == "hello (en)"


def test_tables_share_english_headwords():
    for language, topics in _CURATED.items():
        assert len(topics) == len(TOPICS)
        for index, rows in enumerate(topics):
            assert [row[0] for row in rows] == HEADWORDS[index], language


@pytest.mark.parametrize("source,target", [p for p in PAIRS if p not in (("de", "it"), ("en", "en"))])
def test_first_example_contains_translation(generator, source, target):
    for level_id in range(1, len(TOPICS) + 1):
        for word in generator.generate(level_id, source, target):
            assert word.translation.lower() in word.examples[0].lower(), word


def test_translate_known_word(generator):
    word = generator.translate("Thank you", "en", "fr")
    assert word.original == "Thank you"
    assert word.translation == "merci"
    assert word.examples


def test_translate_unknown_word_is_templated(generator):
    word = generator.translate("computer", "en", "es")
    assert word.translation == "computer (es)"
    assert word.examples == []
    assert generator.translate("hallo", "de", "en").translation == "hallo (en)"
