"""
Gestor Core Time - Public API
===============================
Injectable clock used by the store and the engines.
"""

from core.time.clock import Clock, FixedClock, SystemClock

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
]
