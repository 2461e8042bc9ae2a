"""
Ownership of the GPIO output lines.

A PinRegistry opens one gpiozero OutputDevice per configured pin, keeps the
cached "On"/"Off" label next to it and releases every line on close().
Devices are opened with active_high=True so `device.value` is the raw
electrical level; the active-low polarity lives in `toggle_level`.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from gpiozero import OutputDevice

from cruiser.hardware.outputs import PinSpec, bcm_number

logger = logging.getLogger(__name__)

STATE_ON = "On"
STATE_OFF = "Off"
DISPLAY_STATES = (STATE_ON, STATE_OFF)


class PinError(Exception):
    """Base class for pin registry errors."""


class PinSetupError(PinError):
    """A configured pin could not be opened. Fatal at startup."""


class UnknownPinError(PinError, KeyError):
    """No pin with the requested identifier is configured."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class PinIOError(PinError):
    """The GPIO backend failed while reading or writing a line."""


def label_for_level(level: bool) -> str:
    # Active-low: a Low line means the LED is lit.
    return STATE_OFF if level else STATE_ON


def toggle_level(device: OutputDevice) -> str:
    """
    Invert the electrical level of `device` and return the new label.

    Low is rewritten High and reported "Off"; anything else is rewritten Low
    and reported "On".
    """
    if not device.value:
        device.on()
        return STATE_OFF
    device.off()
    return STATE_ON


@dataclass
class PinDescriptor:
    pin_id: str
    name: str
    device: OutputDevice = field(repr=False)
    state: str = STATE_ON
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class PinRegistry:
    """
    Table of configured pins, keyed by identifier, in configuration order.

    Pass `pin_factory` to open the lines on a specific gpiozero backend
    (tests use gpiozero.pins.mock.MockFactory); otherwise gpiozero picks its
    default, honoring GPIOZERO_PIN_FACTORY.
    """

    def __init__(self, pin_factory=None):
        self._pin_factory = pin_factory
        self._pins: Dict[str, PinDescriptor] = {}
        self._closed = False

    def initialize(self, pin_specs: Iterable[PinSpec]) -> "PinRegistry":
        """
        Open every spec's line. Either all pins resolve or none stay open.
        """
        if self._pins:
            raise PinSetupError("Pin registry is already initialized")

        try:
            for spec in pin_specs:
                if spec.pin_id in self._pins:
                    raise PinSetupError(f"Duplicate pin identifier {spec.pin_id!r}")
                try:
                    device = OutputDevice(
                        bcm_number(spec.pin_id),
                        active_high=True,
                        initial_value=spec.initial_level,
                        pin_factory=self._pin_factory,
                    )
                except Exception as e:
                    # RPi.GPIO raises RuntimeError, lgpio raises OSError.
                    raise PinSetupError(f"Failed to open GPIO {spec.pin_id} ({spec.name}): {e}") from e

                self._pins[spec.pin_id] = PinDescriptor(
                    pin_id=spec.pin_id,
                    name=spec.name,
                    device=device,
                    state=label_for_level(bool(spec.initial_level)),
                )
                logger.info("Opened GPIO %s (%s)", spec.pin_id, spec.name)
        except PinSetupError:
            self._release_all()
            raise

        if not self._pins:
            raise PinSetupError("No pins configured")
        return self

    def lookup(self, pin_id: str) -> PinDescriptor:
        try:
            return self._pins[pin_id]
        except KeyError:
            raise UnknownPinError(f"Unknown pin {pin_id!r}") from None

    def list_pins(self) -> List[PinDescriptor]:
        return list(self._pins.values())

    def set_display_state(self, pin_id: str, state: str) -> None:
        if state not in DISPLAY_STATES:
            raise ValueError(f"Invalid display state {state!r}")
        self.lookup(pin_id).state = state

    def toggle(self, pin_id: str) -> str:
        """Flip the line of `pin_id` and return its new label."""
        return self.toggle_pin(self.lookup(pin_id))

    def toggle_pin(self, pin: PinDescriptor) -> str:
        """
        Flip the line of a descriptor obtained from `lookup` and record the
        resulting label.

        The read-modify-write runs under the pin's lock so concurrent requests
        for the same pin cannot both act on the same level.
        """
        with pin.lock:
            try:
                next_state = toggle_level(pin.device)
            except Exception as e:
                raise PinIOError(f"Failed to toggle GPIO {pin.pin_id} ({pin.name}): {e}") from e
            pin.state = next_state
        return next_state

    def close(self) -> None:
        """Release every line once, in registry order. Safe to call again."""
        if self._closed:
            return
        self._closed = True
        self._release_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def _release_all(self) -> None:
        for pin in self._pins.values():
            try:
                pin.device.close()
            except Exception:
                logger.exception("Failed to release GPIO %s", pin.pin_id)
            else:
                logger.debug("Released GPIO %s", pin.pin_id)
        self._pins.clear()

    def __enter__(self) -> "PinRegistry":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None

    def __len__(self) -> int:
        return len(self._pins)
