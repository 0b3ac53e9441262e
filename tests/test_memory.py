"""InMemoryStoreAdapter のユニットテスト"""

import time

import pytest
from k1s0_simple_lock import InMemoryStoreAdapter, ScriptUnknownError, StoreError
from k1s0_simple_lock.scripts import SCRIPTS

LOCK = SCRIPTS["lock"]
UNLOCK = SCRIPTS["unlock"]


def _loaded_store() -> InMemoryStoreAdapter:
    store = InMemoryStoreAdapter()
    for script in SCRIPTS.values():
        store.load_script(script.source)
    return store


def test_load_script_returns_sha() -> None:
    """load_script が Script.sha と同じダイジェストを返すこと。"""
    store = InMemoryStoreAdapter()
    assert store.load_script(LOCK.source) == LOCK.sha


def test_unloaded_script_is_unknown() -> None:
    """未ロードのスクリプトは ScriptUnknownError。"""
    store = InMemoryStoreAdapter()
    with pytest.raises(ScriptUnknownError, match="NOSCRIPT"):
        store.execute_by_hash(LOCK.sha, ["k"], [1000])


def test_lock_sets_key_once() -> None:
    """lock スクリプトはキーが無い場合のみ設定すること。"""
    store = _loaded_store()
    assert store.execute_by_hash(LOCK.sha, ["k"], [1000]) == "OK"
    assert store.get("k") == "1"
    assert store.execute_by_hash(LOCK.sha, ["k"], [1000]) is None


def test_unlock_deletes_key() -> None:
    """unlock スクリプトはキーを削除すること。"""
    store = _loaded_store()
    store.execute_by_hash(LOCK.sha, ["k"], [1000])
    store.execute_by_hash(UNLOCK.sha, ["k"])
    assert store.exists("k") is False


def test_lock_expires() -> None:
    """ttl 経過後にキーが消えること。"""
    store = _loaded_store()
    store.execute_by_hash(LOCK.sha, ["k"], [1])
    time.sleep(0.01)
    assert store.exists("k") is False
    assert store.execute_by_hash(LOCK.sha, ["k"], [1000]) == "OK"


def test_invalid_ttl() -> None:
    """不正な ttl は StoreError。"""
    store = _loaded_store()
    with pytest.raises(StoreError):
        store.execute_by_hash(LOCK.sha, ["k"], ["true"])
    with pytest.raises(StoreError):
        store.execute_by_hash(LOCK.sha, ["k"], [0])


def test_flush_scripts() -> None:
    """flush_scripts 後は再ロードが必要になること。"""
    store = _loaded_store()
    store.flush_scripts()
    with pytest.raises(ScriptUnknownError):
        store.execute_by_hash(UNLOCK.sha, ["k"])


def test_unsupported_script() -> None:
    """登録外のスクリプトは StoreError。"""
    store = InMemoryStoreAdapter()
    sha = store.load_script("return 42")
    with pytest.raises(StoreError, match="Unsupported"):
        store.execute_by_hash(sha, [])
