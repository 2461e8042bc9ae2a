from __future__ import annotations

import pytest
from gpiozero.pins.mock import MockFactory

from cruiser.hardware.outputs import PinSpec
from cruiser.hardware.registry import PinRegistry
from cruiser.web.app import create_app

ROOF_PINS = [
    PinSpec("15", "Roof Bar"),
    PinSpec("16", "Roof (Right)"),
]


@pytest.fixture
def pin_factory():
    factory = MockFactory()
    yield factory
    factory.reset()


@pytest.fixture
def registry(pin_factory):
    reg = PinRegistry(pin_factory=pin_factory).initialize(ROOF_PINS)
    yield reg
    reg.close()


@pytest.fixture
def client(registry):
    app = create_app(registry)
    app.config["TESTING"] = True
    return app.test_client()


class FailingLine:
    """Wraps a device whose backend fails on every read, like a lost /dev/gpiomem."""

    def __init__(self, device, error):
        self._device = device
        self._error = error

    @property
    def value(self):
        raise self._error

    def on(self):
        raise self._error

    def off(self):
        raise self._error

    def close(self):
        self._device.close()


@pytest.fixture
def break_line(registry):
    def _break(pin_id, error=None):
        pin = registry.lookup(pin_id)
        pin.device = FailingLine(pin.device, error or OSError(5, "Input/output error"))

    return _break
