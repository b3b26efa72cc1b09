from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any, Union

BLANK_MARKER = "_____"


@dataclass(frozen=True)
class LearningWord:
    """A vocabulary item fetched for a session. Never mutated after fetch."""
    original: str                        # word in the source language
    translation: str                     # word in the target language
    pronunciation: Optional[str] = None  # pronunciation guide, if any
    examples: List[str] = field(default_factory=list)  # [target sentence, source sentence, ...]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LearningWord":
        return cls(
            original=str(data["original"]).strip(),
            translation=str(data["translation"]).strip(),
            pronunciation=str(data.get("pronunciation") or "").strip() or None,
            examples=[str(e).strip() for e in data.get("examples") or [] if str(e).strip()],
        )


@dataclass(frozen=True)
class MultipleChoiceQuestion:
    """Pick the correct answer among the options (exact match)."""
    prompt: str
    options: List[str]
    correct_answer: str
    kind: str = field(default="multiple_choice", init=False)

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer


@dataclass(frozen=True)
class FillBlankQuestion:
    """Type the word that fills the blank (case-insensitive)."""
    prompt: str
    correct_answer: str
    kind: str = field(default="fill_blank", init=False)

    def is_correct(self, answer: str) -> bool:
        return answer.strip().lower() == self.correct_answer.strip().lower()


PracticeQuestion = Union[MultipleChoiceQuestion, FillBlankQuestion]


@dataclass
class LearningLevel:
    """A themed bundle of vocabulary in the level catalog."""
    id: int
    title: str
    description: str
    word_count: int = 10


@dataclass
class LevelProgress:
    """Persisted state of one level. Invariant: is_completed implies progress == 100."""
    level_id: int
    is_unlocked: bool = False
    is_completed: bool = False
    progress: int = 0                    # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LevelProgress":
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class UserStats:
    """Aggregate learner statistics kept next to level progress."""
    total_xp: int = 0
    words_learned: int = 0
    levels_completed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserStats":
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


# Default level catalog; level 1 starts unlocked.
LEARNING_LEVELS: List[LearningLevel] = [
    LearningLevel(1, "Basics", "Learn essential vocabulary", 10),
    LearningLevel(2, "Greetings", "Common greetings and phrases", 10),
    LearningLevel(3, "Food & Drinks", "Vocabulary for restaurants and meals", 15),
    LearningLevel(4, "Travel", "Essential travel vocabulary", 15),
    LearningLevel(5, "Daily Life", "Words for everyday situations", 20),
]


def get_learning_level(level_id: int) -> Optional[LearningLevel]:
    for level in LEARNING_LEVELS:
        if level.id == level_id:
            return level
    return None
