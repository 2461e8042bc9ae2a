from __future__ import annotations

import pytest

from cruiser.config import (WebConfig, log_level_from_env, pin_table_from_env,
                            web_config_from_env)
from cruiser.hardware.outputs import (DEFAULT_PINS, PinSpec, bcm_number,
                                     get_pin_specs)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CRUISER_WEB_HOST", "CRUISER_WEB_PORT", "CRUISER_WEB_DEBUG", "CRUISER_LOG_LEVEL", "CRUISER_PINS"):
        monkeypatch.delenv(name, raising=False)


def test_web_config_defaults():
    assert web_config_from_env() == WebConfig(host="0.0.0.0", port=9090, debug=False)


def test_web_config_from_env(monkeypatch):
    monkeypatch.setenv("CRUISER_WEB_HOST", "127.0.0.1")
    monkeypatch.setenv("CRUISER_WEB_PORT", "8080")
    monkeypatch.setenv("CRUISER_WEB_DEBUG", "yes")
    assert web_config_from_env() == WebConfig(host="127.0.0.1", port=8080, debug=True)


def test_log_level(monkeypatch):
    assert log_level_from_env() == "INFO"
    monkeypatch.setenv("CRUISER_LOG_LEVEL", "debug")
    assert log_level_from_env() == "DEBUG"


def test_default_pin_table_skips_disabled_left_roof():
    specs = get_pin_specs()
    assert [(p.pin_id, p.name) for p in specs] == [("15", "Roof Bar"), ("16", "Roof (Right)")]
    assert all(not p.initial_level for p in specs)
    assert any(p.pin_id == "17" and not p.enabled for p in DEFAULT_PINS)


def test_pin_table_override(monkeypatch):
    monkeypatch.setenv("CRUISER_PINS", "17=Roof (Left); 15=Roof Bar ;")
    assert pin_table_from_env() == [("17", "Roof (Left)"), ("15", "Roof Bar")]
    assert get_pin_specs() == [PinSpec("17", "Roof (Left)"), PinSpec("15", "Roof Bar")]


@pytest.mark.parametrize("raw", ["15", "=Roof Bar", "15=", ";;"])
def test_malformed_pin_table_is_rejected(monkeypatch, raw):
    monkeypatch.setenv("CRUISER_PINS", raw)
    with pytest.raises(ValueError):
        get_pin_specs()


@pytest.mark.parametrize("raw", ["8=Storage clock", "GPIO8=Storage clock", "08=Storage clock", "BCM9=x", "gpio7=x"])
def test_spi_pins_are_rejected(monkeypatch, raw):
    monkeypatch.setenv("CRUISER_PINS", raw)
    with pytest.raises(ValueError, match="SPI"):
        get_pin_specs()


@pytest.mark.parametrize("pin_id, number", [("15", 15), ("015", 15), ("GPIO15", 15), ("gpio16", 16), ("BCM17", 17)])
def test_bcm_number(pin_id, number):
    assert bcm_number(pin_id) == number


@pytest.mark.parametrize("pin_id", ["BOARD24", "J8:24", "GPIO", "pin15", "-8"])
def test_unsupported_pin_names_are_rejected(pin_id):
    with pytest.raises(ValueError, match="Unsupported"):
        bcm_number(pin_id)


def test_pin_table_override_accepts_gpio_names(monkeypatch):
    monkeypatch.setenv("CRUISER_PINS", "GPIO15=Roof Bar")
    assert get_pin_specs() == [PinSpec("GPIO15", "Roof Bar")]
