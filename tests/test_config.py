"""LockConfig と override のユニットテスト"""

import pytest
from k1s0_simple_lock import ConfigError, ConfigErrorCodes, LockConfig, override


def test_default_config() -> None:
    """デフォルト設定の確認。"""
    cfg = LockConfig()
    assert cfg.retry_count == 3
    assert cfg.retry_delay == 200
    assert cfg.retry_jitter == 50
    assert cfg.retry_proc is None
    assert cfg.key_prefix == "simple_lock:"


def test_override_sets_and_restores() -> None:
    """override がブロック内だけ値を変更すること。"""
    cfg = LockConfig()
    with override(cfg, key_prefix="other:", retry_count=0) as inner:
        assert inner is cfg
        assert cfg.key_prefix == "other:"
        assert cfg.retry_count == 0
    assert cfg.key_prefix == "simple_lock:"
    assert cfg.retry_count == 3


def test_override_restores_on_exception() -> None:
    """例外発生時も値が復元されること。"""
    cfg = LockConfig()
    with pytest.raises(RuntimeError):
        with override(cfg, retry_delay=1):
            raise RuntimeError("boom")
    assert cfg.retry_delay == 200


def test_override_unknown_option() -> None:
    """未知の属性で ConfigError(UNKNOWN_OPTION) が発生し、何も変更されないこと。"""
    cfg = LockConfig()
    with pytest.raises(ConfigError) as exc_info:
        with override(cfg, retry_delay=1, nope=2):
            pass
    assert exc_info.value.code == ConfigErrorCodes.UNKNOWN_OPTION
    assert "nope" in str(exc_info.value)
    assert cfg.retry_delay == 200
