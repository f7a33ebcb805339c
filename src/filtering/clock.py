"""
Clock Sources
=============
Time sources the adaptive median filter reads on every call.

A clock is any zero-argument callable returning seconds as a float.
Only differences between readings matter, so the epoch is arbitrary.
"""

import time
from typing import Callable


Clock = Callable[[], float]


class MonotonicClock:
    """Wall-clock source backed by time.monotonic()."""
    
    def __call__(self) -> float:
        return time.monotonic()
    
    def __repr__(self) -> str:
        return "MonotonicClock()"


class ManualClock:
    """
    Deterministic clock for tests and offline replay.
    
    The reading only changes when advance() or set() is called.
    set() may move time backwards, which is how clock skew is simulated.
    """
    
    def __init__(self, start: float = 0.0):
        self._now = float(start)
    
    def __call__(self) -> float:
        return self._now
    
    @property
    def now(self) -> float:
        return self._now
    
    def advance(self, dt: float) -> float:
        """
        Move the clock forward.
        
        Args:
            dt: Seconds to add (must be >= 0)
            
        Returns:
            The new reading
        """
        if dt < 0:
            raise ValueError(f"Cannot advance clock by negative amount: {dt}")
        self._now += dt
        return self._now
    
    def set(self, t: float) -> float:
        """Jump to an absolute reading."""
        self._now = float(t)
        return self._now
    
    def __repr__(self) -> str:
        return f"ManualClock(now={self._now!r})"
