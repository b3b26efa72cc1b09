"""
Firebase Firestore persistence for learning progress.

This module handles:
- Per-level progress, unlock and completion state
- Per-word learned flags
- Aggregate learner stats (XP, words learned, levels completed)

Without credentials the store runs entirely on its in-process cache, which
is also what the tests use. Writes go to the cache first and then to
Firestore; a failed Firestore write raises PersistenceWriteError. Reads never
raise: on backend errors they are answered from the cache or from defaults.
"""

import hashlib
import os
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials, firestore

from .config import FIREBASE_CREDENTIALS_PATH, LEVEL_COMPLETION_XP, USER_ID
from .errors import PersistenceWriteError
from .logger import logger
from .models import LEARNING_LEVELS, LearningLevel, LevelProgress, UserStats


class ProgressStore:
    """
    Progress store for one learner.

    Collection structure:
    - users/{user_id}                        -> UserStats
    - users/{user_id}/levels/{level_id}      -> LevelProgress
    - users/{user_id}/words/{word_hash}      -> {"level_id", "word", "learned"}
    """

    def __init__(self, user_id: str = USER_ID, levels: Optional[List[LearningLevel]] = None):
        self.db = None
        self._initialized = False
        self._user_id = user_id
        self._catalog = levels if levels is not None else LEARNING_LEVELS

        # Local cache, authoritative while offline
        self._cache: Dict[str, Dict[str, Any]] = {}

    def initialize(self, credentials_path: Optional[str] = None) -> bool:
        """
        Connect to Firestore.

        Args:
            credentials_path: Path to a Firebase service account JSON.
                              If None, uses FIREBASE_CREDENTIALS_PATH.

        Returns:
            True if connected, False if the store stays on its local cache.
        """
        if self._initialized:
            return True

        creds_path = credentials_path or FIREBASE_CREDENTIALS_PATH
        if not creds_path:
            logger.db("FIREBASE_CREDENTIALS_PATH not set, progress is kept in memory")
            return False
        if not os.path.exists(creds_path):
            logger.error(f"[DB] Credentials file not found at: {creds_path}")
            return False

        try:
            try:
                app = firebase_admin.get_app()
            except ValueError:
                app = firebase_admin.initialize_app(credentials.Certificate(creds_path))
            self.db = firestore.client(app)
            self._initialized = True
            logger.success("[DB] Firebase Firestore connected")
            return True
        except Exception as e:
            logger.error(f"[DB] Failed to initialize Firebase: {e}", exc_info=True)
            return False

    def is_connected(self) -> bool:
        return self._initialized and self.db is not None

    # ---------------------------------------------------------------------------
    # Key-value plumbing
    # ---------------------------------------------------------------------------

    def _doc(self, collection: Optional[str], doc_id: Optional[str]):
        ref = self.db.collection("users").document(self._user_id)
        if collection:
            ref = ref.collection(collection).document(doc_id)
        return ref

    def _read(self, cache_key: str, collection: Optional[str] = None,
              doc_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        if not self.is_connected():
            return self._cache.get(cache_key)

        try:
            doc = self._doc(collection, doc_id).get()
            if doc.exists:
                data = doc.to_dict()
                self._cache[cache_key] = data
                return data
            return self._cache.get(cache_key)
        except Exception as e:
            logger.error(f"[DB] Read of {cache_key} failed, using cache: {e}")
            return self._cache.get(cache_key)

    def _write(self, cache_key: str, data: Dict[str, Any], collection: Optional[str] = None,
               doc_id: Optional[str] = None) -> None:
        self._cache[cache_key] = data
        logger.debug(f"[DB] {cache_key} <- {data}")
        if not self.is_connected():
            return

        try:
            self._doc(collection, doc_id).set(data)
        except Exception as e:
            raise PersistenceWriteError(f"Writing {cache_key} failed: {e}") from e

    # ---------------------------------------------------------------------------
    # Levels
    # ---------------------------------------------------------------------------

    def _default_level(self, level_id: int) -> LevelProgress:
        first_id = self._catalog[0].id if self._catalog else 1
        return LevelProgress(level_id=level_id, is_unlocked=(level_id == first_id))

    def get_level(self, level_id: int) -> LevelProgress:
        data = self._read(f"level_{level_id}", "levels", str(level_id))
        if data is None:
            return self._default_level(level_id)
        return LevelProgress.from_dict(data)

    def get_levels(self) -> List[LevelProgress]:
        """Progress for every level in the catalog, in catalog order."""
        return [self.get_level(level.id) for level in self._catalog]

    def _save_level(self, level: LevelProgress) -> None:
        self._write(f"level_{level.level_id}", level.to_dict(), "levels", str(level.level_id))

    def set_progress(self, level_id: int, progress: int) -> None:
        """Record progress (clamped to 0-100). A completed level is never lowered."""
        progress = max(0, min(100, int(progress)))
        level = self.get_level(level_id)
        if level.is_completed and progress < 100:
            logger.debug(f"[DB] Level {level_id} already completed, keeping progress at 100")
            return

        level.progress = progress
        self._save_level(level)
        logger.db(f"Level {level_id} progress = {progress}%")

    def unlock_level(self, level_id: int) -> None:
        level = self.get_level(level_id)
        if level.is_unlocked:
            return
        level.is_unlocked = True
        self._save_level(level)
        logger.db(f"Level {level_id} unlocked")

    def complete_level(self, level_id: int) -> None:
        """Mark a level completed (progress 100) and unlock the next one."""
        level = self.get_level(level_id)
        first_completion = not level.is_completed

        level.is_unlocked = True
        level.is_completed = True
        level.progress = 100

        # A backend failure does not stop later steps; the first one is re-raised at the end.
        steps = [lambda: self._save_level(level), lambda: self.unlock_level(level_id + 1)]
        if first_completion:
            steps.append(self._award_completion)

        failure: Optional[PersistenceWriteError] = None
        for step in steps:
            try:
                step()
            except PersistenceWriteError as e:
                logger.error(f"[DB] {e}")
                failure = failure or e
        logger.db(f"Level {level_id} completed")
        if failure is not None:
            raise failure

    def _award_completion(self) -> None:
        stats = self.get_stats()
        stats.total_xp += LEVEL_COMPLETION_XP
        stats.levels_completed += 1
        self._save_stats(stats)

    # ---------------------------------------------------------------------------
    # Words
    # ---------------------------------------------------------------------------

    def _word_hash(self, level_id: int, word: str) -> str:
        """Generate consistent hash for a word within a level."""
        key = f"{level_id}:{word.lower().strip()}"
        return hashlib.md5(key.encode()).hexdigest()[:16]

    def is_word_learned(self, level_id: int, word: str) -> bool:
        word_id = self._word_hash(level_id, word)
        data = self._read(f"word_{word_id}", "words", word_id)
        return bool(data and data.get("learned"))

    def mark_word_learned(self, level_id: int, word: str, learned: bool = True) -> None:
        was_learned = self.is_word_learned(level_id, word)
        word_id = self._word_hash(level_id, word)
        try:
            self._write(
                f"word_{word_id}",
                {"level_id": level_id, "word": word, "learned": learned},
                "words",
                word_id,
            )
        finally:
            if learned != was_learned:
                stats = self.get_stats()
                stats.words_learned = max(0, stats.words_learned + (1 if learned else -1))
                self._save_stats(stats)

    # ---------------------------------------------------------------------------
    # Stats
    # ---------------------------------------------------------------------------

    def get_stats(self) -> UserStats:
        data = self._read("stats")
        return UserStats.from_dict(data) if data else UserStats()

    def _save_stats(self, stats: UserStats) -> None:
        self._write("stats", stats.to_dict())


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

progress_store = ProgressStore()


def initialize_store(credentials_path: Optional[str] = None) -> bool:
    """Initialize the global progress store."""
    return progress_store.initialize(credentials_path)


def get_store() -> ProgressStore:
    """Get the global progress store."""
    return progress_store
