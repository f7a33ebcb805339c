"""
Sample Rate Estimation
======================
Running-average estimate of how fast samples are arriving.

rate = samples since start / seconds since start

The average covers the whole session since the last reset, so it is
stable but slow to follow a change in the producer's delivery rate.
"""

import logging
import math
from typing import Optional


logger = logging.getLogger(__name__)


class RateEstimator:
    """
    Estimates samples per second from clock readings taken on each call.
    
    The first call of a session only records the start time. Every later
    call counts one sample and divides by the elapsed time.
    """
    
    def __init__(self, initial_rate: float = 0.0):
        """
        Initialize the estimator.
        
        Args:
            initial_rate: Rate reported on the first call of a session,
                          before any elapsed time exists (Hz)
        """
        if not math.isfinite(initial_rate) or initial_rate < 0:
            raise ValueError(f"initial_rate must be >= 0, got {initial_rate}")
        self.initial_rate = float(initial_rate)
        self.reset()
    
    def reset(self) -> None:
        """Forget the session; the next update() starts a new one."""
        self._start_time: Optional[float] = None
        self._last_timestamp: Optional[float] = None
        self._sample_count = 0
        self._estimated_rate = 0.0
        self._skew_reported = False
    
    @property
    def started(self) -> bool:
        return self._start_time is not None
    
    @property
    def start_time(self) -> Optional[float]:
        return self._start_time
    
    @property
    def last_timestamp(self) -> Optional[float]:
        return self._last_timestamp
    
    @property
    def sample_count(self) -> int:
        return self._sample_count
    
    @property
    def estimated_rate(self) -> float:
        return self._estimated_rate
    
    @property
    def elapsed(self) -> float:
        """Seconds between the session start and the latest reading."""
        if self._start_time is None:
            return 0.0
        return self._last_timestamp - self._start_time
    
    def update(self, now: float) -> float:
        """
        Record a clock reading and return the new rate estimate.
        
        Args:
            now: Current clock reading in seconds
            
        Returns:
            Estimated sample rate in Hz
        """
        self._last_timestamp = now
        
        if self._start_time is None:
            self._start_time = now
            self._sample_count = 0
            self._estimated_rate = self.initial_rate
            return self._estimated_rate
        
        self._sample_count += 1
        elapsed = now - self._start_time
        
        if elapsed > 0:
            self._estimated_rate = self._sample_count / elapsed
        else:
            # Clock did not move forward since the session started
            if not self._skew_reported:
                logger.warning(
                    "Clock reading %.6f is not after session start %.6f; "
                    "treating rate as 0", now, self._start_time
                )
                self._skew_reported = True
            self._estimated_rate = 0.0
        
        return self._estimated_rate
    
    def __repr__(self) -> str:
        return (
            f"RateEstimator(sample_count={self._sample_count}, "
            f"estimated_rate={self._estimated_rate:.3f})"
        )
