import pytest

from config.validators import validate_log_level, validate_market_address
from twinarb.exceptions import ConfigError


def test_valid_market_address():
    address = "0x5661e7bc2403c7cc08df539e4a8e2972ec256d11"
    assert validate_market_address(address) == address


@pytest.mark.parametrize("address", ["", "5661e7bc2403c7cc08df539e4a8e2972ec256d11",
                                     "0x1234", "0xZZ61e7bc2403c7cc08df539e4a8e2972ec256d11"])
def test_invalid_market_address(address):
    with pytest.raises(ConfigError):
        validate_market_address(address)


def test_market_address_defaults_to_settings(monkeypatch):
    from config.settings import settings
    monkeypatch.setattr(settings, "MARKET_ADDRESS", "not-an-address")
    with pytest.raises(ConfigError):
        validate_market_address()


def test_log_level_case_insensitive():
    assert validate_log_level("warning") == "WARNING"


def test_unknown_log_level():
    with pytest.raises(ConfigError):
        validate_log_level("LOUD")
