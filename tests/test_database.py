"""
Tests for the progress store, offline and against a mocked Firestore client.
"""

from unittest.mock import MagicMock

import pytest

from wordpecker.database import ProgressStore, get_store
from wordpecker.errors import PersistenceWriteError
from wordpecker.models import LearningLevel, LevelProgress, UserStats


def _firestore_store(existing=None, set_error=None, get_error=None):
    """A store wired to a mock Firestore whose documents hold ``existing`` (or nothing)."""
    snapshot = MagicMock()
    snapshot.exists = existing is not None
    snapshot.to_dict.return_value = existing

    doc = MagicMock()
    doc.get.return_value = snapshot
    if get_error:
        doc.get.side_effect = get_error
    if set_error:
        doc.set.side_effect = set_error
    doc.collection.return_value.document.return_value = doc

    db = MagicMock()
    db.collection.return_value.document.return_value = doc

    store = ProgressStore(user_id="test-user")
    store.db = db
    store._initialized = True
    return store, db, doc


def test_defaults_only_first_level_unlocked(store):
    levels = store.get_levels()
    assert [lvl.level_id for lvl in levels] == [1, 2, 3, 4, 5]
    assert levels[0] == LevelProgress(level_id=1, is_unlocked=True)
    assert all(not lvl.is_unlocked and lvl.progress == 0 for lvl in levels[1:])
    assert store.get_stats() == UserStats()


def test_custom_catalog_unlocks_its_first_level():
    store = ProgressStore(user_id="u", levels=[LearningLevel(10, "A", "a"), LearningLevel(11, "B", "b")])
    assert store.get_level(10).is_unlocked
    assert not store.get_level(11).is_unlocked


def test_set_progress_is_clamped(store):
    store.set_progress(2, 150)
    assert store.get_level(2).progress == 100
    store.set_progress(2, -5)
    assert store.get_level(2).progress == 0
    store.set_progress(2, 50)
    assert store.get_level(2).progress == 50


def test_completed_level_is_never_lowered(store):
    store.complete_level(1)
    store.set_progress(1, 50)
    level = store.get_level(1)
    assert level.is_completed
    assert level.progress == 100


def test_complete_level_unlocks_next_and_awards_xp_once(store):
    store.complete_level(1)
    assert store.get_level(2).is_unlocked
    assert store.get_stats() == UserStats(total_xp=50, words_learned=0, levels_completed=1)

    store.complete_level(1)
    assert store.get_stats().total_xp == 50
    assert store.get_stats().levels_completed == 1


def test_complete_level_keeps_progress_of_next_level(store):
    store.set_progress(2, 30)
    store.complete_level(1)
    assert store.get_level(2) == LevelProgress(level_id=2, is_unlocked=True, progress=30)


def test_word_flags_update_stats_only_on_change(store):
    assert not store.is_word_learned(1, "hello")

    store.mark_word_learned(1, "hello")
    store.mark_word_learned(1, "Hello ")
    assert store.is_word_learned(1, "hello")
    assert store.get_stats().words_learned == 1

    # same word in another level is a separate flag
    assert not store.is_word_learned(2, "hello")

    store.mark_word_learned(1, "hello", learned=False)
    assert not store.is_word_learned(1, "hello")
    assert store.get_stats().words_learned == 0


def test_offline_store_is_not_connected(store):
    assert not store.is_connected()
    assert not store.initialize(credentials_path="")


def test_missing_credentials_file_keeps_store_offline(tmp_path):
    store = ProgressStore(user_id="u")
    assert not store.initialize(credentials_path=str(tmp_path / "missing.json"))
    assert not store.is_connected()


def test_global_store_is_a_singleton():
    assert get_store() is get_store()


def test_firestore_reads_use_user_scoped_documents():
    store, db, doc = _firestore_store(existing={"level_id": 3, "is_unlocked": True, "progress": 40})

    level = store.get_level(3)

    assert level == LevelProgress(level_id=3, is_unlocked=True, progress=40)
    db.collection.assert_called_with("users")
    db.collection.return_value.document.assert_called_with("test-user")
    doc.collection.assert_called_with("levels")
    doc.collection.return_value.document.assert_called_with("3")


def test_firestore_writes_go_through_set():
    store, _, doc = _firestore_store()
    store.set_progress(2, 50)
    doc.set.assert_called_with({"level_id": 2, "is_unlocked": False, "is_completed": False, "progress": 50})


def test_firestore_write_failure_raises_persistence_error():
    store, _, _ = _firestore_store(set_error=RuntimeError("permission denied"))
    with pytest.raises(PersistenceWriteError):
        store.set_progress(2, 50)


def test_firestore_read_failure_falls_back_to_cache():
    store, _, _ = _firestore_store(get_error=RuntimeError("unavailable"))
    store._cache["level_2"] = {"level_id": 2, "is_unlocked": True, "progress": 20}
    assert store.get_level(2).progress == 20
    assert store.get_level(4) == LevelProgress(level_id=4)


def test_rejected_completion_still_unlocks_next_level_and_awards_xp():
    store, _, _ = _firestore_store(set_error=RuntimeError("permission denied"))

    with pytest.raises(PersistenceWriteError):
        store.complete_level(1)

    assert store.get_level(1).is_completed
    assert store.get_level(2).is_unlocked
    assert store.get_stats() == UserStats(total_xp=50, words_learned=0, levels_completed=1)


def test_rejected_word_flag_still_counts_in_stats():
    store, _, _ = _firestore_store(set_error=RuntimeError("permission denied"))

    with pytest.raises(PersistenceWriteError):
        store.mark_word_learned(1, "hello")

    assert store.is_word_learned(1, "hello")
    assert store.get_stats().words_learned == 1
