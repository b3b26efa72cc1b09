"""
Practice question synthesis.

One multiple-choice question per learning word. Positions 0 and 1 of every
group of three ask for the translation of the source word (production);
position 2 asks what a target word means (recognition). Distractors come
only from the other words of the same set. When the set holds fewer than
three other distinct answers, the question simply has fewer options; it is
never padded with duplicates or outside words.

When some word's first example sentence contains its translation, one
fill-in-the-blank question is added on top. The final list is shuffled once.
"""

import random
import re
from typing import List, Optional

from .languages import language_name
from .logger import logger
from .models import (
    BLANK_MARKER, LearningWord, PracticeQuestion,
    MultipleChoiceQuestion, FillBlankQuestion,
)

DISTRACTOR_COUNT = 3


class QuestionSynthesizer:
    """Builds the practice set for a session. Randomness comes from ``rng`` only."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def synthesize(
        self,
        words: List[LearningWord],
        source_language: str = "en",
        target_language: str = "es",
    ) -> List[PracticeQuestion]:
        questions: List[PracticeQuestion] = []
        source_name = language_name(source_language)
        target_name = language_name(target_language)

        for index, word in enumerate(words):
            if index % 3 != 2:
                questions.append(self._multiple_choice(
                    prompt=f'What is the {target_name} translation of "{word.original}"?',
                    answer=word.translation,
                    pool=[w.translation for w in words],
                ))
            else:
                questions.append(self._multiple_choice(
                    prompt=f'What does "{word.translation}" mean in {source_name}?',
                    answer=word.original,
                    pool=[w.original for w in words],
                ))

        fill_blank = self._fill_blank(words, target_name)
        if fill_blank is not None:
            questions.append(fill_blank)

        self.rng.shuffle(questions)
        logger.debug(f"Synthesized {len(questions)} practice questions from {len(words)} words")
        return questions

    def _multiple_choice(self, prompt: str, answer: str, pool: List[str]) -> MultipleChoiceQuestion:
        # dict.fromkeys keeps first-seen order, so sampling stays reproducible for a seed
        candidates = [c for c in dict.fromkeys(pool) if c != answer]
        distractors = self.rng.sample(candidates, min(DISTRACTOR_COUNT, len(candidates)))
        if len(distractors) < DISTRACTOR_COUNT:
            logger.debug(f"Only {len(distractors)} distractor(s) available for {answer!r}")

        options = distractors + [answer]
        self.rng.shuffle(options)
        return MultipleChoiceQuestion(prompt=prompt, options=options, correct_answer=answer)

    def _fill_blank(self, words: List[LearningWord], target_name: str) -> Optional[FillBlankQuestion]:
        candidates = [
            w for w in words
            if w.examples and w.translation and w.translation.lower() in w.examples[0].lower()
        ]
        if not candidates:
            return None

        word = self.rng.choice(candidates)
        blanked = re.sub(re.escape(word.translation), BLANK_MARKER, word.examples[0], flags=re.IGNORECASE)
        return FillBlankQuestion(
            prompt=f'Complete the sentence in {target_name}: "{blanked}"',
            correct_answer=word.translation,
        )
