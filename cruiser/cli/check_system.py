#!/usr/bin/env python3
"""
System check script for Cruiser Controller.
Verifies the Python dependencies and that every configured pin can be opened.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from cruiser.hardware.outputs import PinSpec, get_pin_specs


def check_python_package(package_name: str, import_name: Optional[str] = None) -> bool:
    """Check if a Python package is available."""
    if import_name is None:
        import_name = package_name

    try:
        __import__(import_name)
        print(f"✅ {package_name} is installed")
        return True
    except ImportError:
        print(f"❌ {package_name} is NOT installed")
        return False


def check_pins(specs: List[PinSpec], pin_factory=None) -> bool:
    """Open and release every configured pin."""
    try:
        from cruiser.hardware.registry import PinRegistry, PinSetupError
    except ImportError as e:
        print(f"❌ GPIO library is NOT accessible: {e}")
        return False

    try:
        with PinRegistry(pin_factory=pin_factory).initialize(specs) as registry:
            for pin in registry.list_pins():
                print(f"✅ GPIO {pin.pin_id} ({pin.name}) opened")
        return True
    except PinSetupError as e:
        print(f"❌ {e}")
        print("   Check the wiring table, GPIOZERO_PIN_FACTORY and gpio group membership")
        return False


def main() -> int:
    print("=" * 50)
    print("Cruiser Controller System Check")
    print("=" * 50)
    print()

    all_ok = True

    print("Checking Python packages...")
    all_ok &= check_python_package("flask", "flask")
    all_ok &= check_python_package("gpiozero", "gpiozero")
    print()

    print("Checking pin table...")
    try:
        specs = get_pin_specs()
    except ValueError as e:
        print(f"❌ Invalid pin table: {e}")
        specs = []
        all_ok = False
    print()

    if specs:
        print("Checking GPIO lines...")
        all_ok &= check_pins(specs)
        print()

    print("=" * 50)
    if all_ok:
        print("✅ All checks passed! System is ready.")
        print()
        print("Next step:")
        print("  cruiser-backend")
        return 0

    print("⚠️  Some checks failed. Please fix the issues above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
