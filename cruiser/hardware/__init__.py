"""
Hardware-related modules (pin table, GPIO line ownership).

`outputs` stays import-safe on machines without a GPIO backend; `registry`
is the only module that talks to gpiozero.
"""

from __future__ import annotations
