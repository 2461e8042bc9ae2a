"""
Cruiser Controller package.

Web front end for toggling the RGB-LED control lines on an expansion board.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
