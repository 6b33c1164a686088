"""运行时配置测试。"""
import logging

import pytest

from config import configure_logging
from config.settings import DEFAULT_CACHE_TTL, get_cache_ttl, get_log_level


@pytest.fixture
def root_level():
    root = logging.getLogger()
    saved = root.level
    yield root
    root.setLevel(saved)


def test_configure_logging_from_env(monkeypatch, root_level):
    monkeypatch.setenv("HOLDINGS_LOG_LEVEL", "debug")
    assert get_log_level() == logging.DEBUG
    configure_logging()
    assert root_level.level == logging.DEBUG


def test_configure_logging_explicit_level(root_level):
    configure_logging(logging.ERROR)
    assert root_level.level == logging.ERROR


def test_unknown_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("HOLDINGS_LOG_LEVEL", "chatty")
    assert get_log_level() == logging.WARNING


@pytest.mark.parametrize("raw", ["", "abc", "0", "-5"])
def test_cache_ttl_falls_back(monkeypatch, raw):
    monkeypatch.setenv("HOLDINGS_CACHE_TTL", raw)
    assert get_cache_ttl() == DEFAULT_CACHE_TTL


def test_cache_ttl_from_env(monkeypatch):
    monkeypatch.setenv("HOLDINGS_CACHE_TTL", "60")
    assert get_cache_ttl() == 60
