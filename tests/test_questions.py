"""
Tests for practice question synthesis.
"""

import random

from conftest import make_words

from wordpecker.fallback import FallbackContentGenerator
from wordpecker.models import (
    BLANK_MARKER, FillBlankQuestion, LearningWord, MultipleChoiceQuestion,
)
from wordpecker.questions import QuestionSynthesizer


def _multiple_choice(questions):
    return [q for q in questions if isinstance(q, MultipleChoiceQuestion)]


def _fill_blank(questions):
    return [q for q in questions if isinstance(q, FillBlankQuestion)]


def test_correct_answer_appears_exactly_once_among_distinct_options():
    generator = FallbackContentGenerator()
    for seed in range(20):
        synthesizer = QuestionSynthesizer(rng=random.Random(seed))
        for level_id in range(1, 6):
            for pair in (("en", "es"), ("en", "fr"), ("fr", "en"), ("de", "it")):
                words = generator.generate(level_id, *pair)
                for question in _multiple_choice(synthesizer.synthesize(words, *pair)):
                    assert question.options.count(question.correct_answer) == 1
                    assert len(set(question.options)) == len(question.options)
                    assert len(question.options) == 4


def test_question_count_bounds(synthesizer):
    for count in range(1, 12):
        plain = synthesizer.synthesize(make_words(count))
        assert len(plain) == count

        with_examples = synthesizer.synthesize(make_words(count, with_examples=True))
        assert count <= len(with_examples) <= count + 1
        assert len(_fill_blank(with_examples)) == 1


def test_empty_word_list_gives_no_questions(synthesizer):
    assert synthesizer.synthesize([]) == []


def test_two_thirds_forward_one_third_reverse(synthesizer):
    words = make_words(9)
    questions = synthesizer.synthesize(words, "en", "es")
    forward = [q for q in questions if q.prompt.startswith("What is the Spanish translation of")]
    reverse = [q for q in questions if q.prompt.startswith("What does")]
    assert len(forward) == 6
    assert len(reverse) == 3
    # reverse questions are asked for positions 2, 5, 8 and answered with the source word
    assert sorted(q.correct_answer for q in reverse) == ["word2", "word5", "word8"]
    assert all(q.prompt.endswith("mean in English?") for q in reverse)


def test_distractors_only_come_from_the_same_set(synthesizer):
    words = make_words(6)
    translations = {w.translation for w in words}
    originals = {w.original for w in words}
    for question in synthesizer.synthesize(words):
        assert set(question.options) <= translations or set(question.options) <= originals


def test_distractor_shortfall_shrinks_options_instead_of_padding(synthesizer):
    # Only one other distinct translation exists for "uno"
    words = [
        LearningWord("one", "uno"),
        LearningWord("two", "dos"),
        LearningWord("also two", "dos"),
    ]
    questions = synthesizer.synthesize(words)
    by_answer = {q.correct_answer: q for q in questions}

    assert sorted(by_answer["uno"].options) == ["dos", "uno"]
    # "dos" questions exclude every word whose translation is also "dos"
    forward_dos = [q for q in questions if q.correct_answer == "dos"]
    assert len(forward_dos) == 1
    assert sorted(forward_dos[0].options) == ["dos", "uno"]
    # reverse question for position 2 keys on the original word
    assert sorted(by_answer["also two"].options) == ["also two", "one", "two"]


def test_single_word_question_has_only_the_answer(synthesizer):
    questions = synthesizer.synthesize([LearningWord("cat", "gato")])
    assert len(questions) == 1
    assert questions[0].options == ["gato"]


def test_fill_blank_replaces_every_occurrence_case_insensitively(synthesizer):
    words = [
        LearningWord("hello", "hola", examples=["¡Hola! Hola, hola.", "Hello! Hello, hello."]),
        LearningWord("cat", "gato"),
    ]
    blank = _fill_blank(synthesizer.synthesize(words, "en", "es"))[0]
    assert blank.prompt == f'Complete the sentence in Spanish: "¡{BLANK_MARKER}! {BLANK_MARKER}, {BLANK_MARKER}."'
    assert blank.correct_answer == "hola"


def test_fill_blank_escapes_regex_characters(synthesizer):
    words = [LearningWord("what", "¿qué?", examples=["Dijo ¿qué? y se fue."])]
    blank = _fill_blank(synthesizer.synthesize(words, "en", "es"))[0]
    assert BLANK_MARKER in blank.prompt
    assert "¿qué?" not in blank.prompt


def test_no_fill_blank_when_examples_do_not_contain_translation(synthesizer):
    words = [
        LearningWord("dog", "perro", examples=["Tengo un gato.", "I have a cat."]),
        LearningWord("cat", "gato"),
    ]
    assert _fill_blank(synthesizer.synthesize(words)) == []


def test_same_seed_same_questions():
    words = FallbackContentGenerator().generate(2, "en", "fr")
    first = QuestionSynthesizer(rng=random.Random(7)).synthesize(words, "en", "fr")
    second = QuestionSynthesizer(rng=random.Random(7)).synthesize(words, "en", "fr")
    assert first == second


def test_answers_are_graded_by_question_kind():
    choice = MultipleChoiceQuestion(prompt="?", options=["Hola", "adiós"], correct_answer="Hola")
    assert choice.is_correct("Hola")
    assert not choice.is_correct("hola")

    blank = FillBlankQuestion(prompt="?", correct_answer="Hola")
    assert blank.is_correct("  hOLA ")
    assert not blank.is_correct("adiós")
