import pytest
from config.settings import Settings


def test_settings_has_matcher_defaults():
    s = Settings()
    assert s.MATCHER_THRESHOLD == 30000
    assert s.MATCHER_REFRESH_SECONDS == 60.0
    assert s.MATCHER_SIZING == "max"
    assert s.MATCHER_ORIENTATION == "first_seen"


def test_settings_has_market_address():
    s = Settings()
    assert s.MARKET_ADDRESS.startswith("0x")
    assert len(s.MARKET_ADDRESS) == 42


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MATCHER_THRESHOLD", "1234")
    monkeypatch.setenv("MATCHER_REFRESH_SECONDS", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings()
    assert s.MATCHER_THRESHOLD == 1234
    assert s.MATCHER_REFRESH_SECONDS == 2.5
    assert s.LOG_LEVEL == "debug"
