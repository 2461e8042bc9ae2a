"""
Pin table for the expansion dock RGB LED.

GPIO 17 drives the red LED, GPIO 16 the green one and GPIO 15 the blue one.
The LED is active-low: driving a line Low turns its colour on.

GPIOs 7, 8 and 9 carry the SPI bus used by the on-board storage and must never
appear here. Never drive external current into a pin configured as output.

Keep this module free of gpiozero imports so it can be safely imported on
machines without a GPIO backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from cruiser.config import pin_table_from_env

ROOF_BAR = "15"
ROOF_RIGHT = "16"
ROOF_LEFT = "17"

RESERVED_PINS = frozenset({7, 8, 9})


@dataclass(frozen=True)
class PinSpec:
    pin_id: str
    name: str
    # Electrical level driven when the line is opened (False = Low = LED on).
    initial_level: bool = False
    enabled: bool = True


DEFAULT_PINS: List[PinSpec] = [
    PinSpec(ROOF_BAR, "Roof Bar"),
    PinSpec(ROOF_RIGHT, "Roof (Right)"),
    PinSpec(ROOF_LEFT, "Roof (Left)", enabled=False),
]


def get_pin_specs() -> List[PinSpec]:
    """
    Return the enabled pins in display order.

    `CRUISER_PINS` replaces the built-in table when set, which allows
    rewiring without changing code.
    """
    override = pin_table_from_env()
    if override is None:
        specs = [p for p in DEFAULT_PINS if p.enabled]
    else:
        specs = [PinSpec(pin_id, name) for pin_id, name in override]

    for spec in specs:
        bcm_number(spec.pin_id)
    return specs


def _parse_bcm(pin_id: str) -> Optional[int]:
    name = pin_id.strip().upper()
    for prefix in ("GPIO", "BCM"):
        if name.startswith(prefix):
            name = name[len(prefix):]
            break
    return int(name) if name.isdecimal() else None


def bcm_number(pin_id: str) -> int:
    """
    Resolve a pin identifier ("15", "015", "GPIO15", "BCM15") to its BCM number.

    Physical-header names ("BOARD10", "J8:10") are refused: they cannot be
    checked against the SPI lines without the board layout.
    """
    number = _parse_bcm(pin_id)
    if number is None:
        raise ValueError(f"Unsupported pin identifier {pin_id!r} (use a BCM number such as '15' or 'GPIO15')")
    if number in RESERVED_PINS:
        raise ValueError(f"GPIO {number} is reserved for SPI and cannot be used as an output")
    return number

