"""
Adaptive Median Filter
======================
Streaming median filter whose window is defined in seconds, not samples.

Each call to process():
1. Rate   → update the running-average sample rate from the clock
2. Window → window length = int(rate * time_constant), evict to >= 1
3. Buffer → append the vector to per-channel histories, drop the oldest
4. Median → return the 50th percentile of every channel's history

Devices deliver samples at different (and drifting) rates. Expressing the
window as a time constant gives the same smoothing on all of them.
"""

import logging
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Dict, Optional, Sequence

import numpy as np

from src.config import FilterConfig, validate_time_constant
from src.filtering.buffers import ChannelBufferSet
from src.filtering.clock import Clock, ManualClock, MonotonicClock
from src.filtering.rate import RateEstimator
from src.filtering.window import eviction_target, window_length


logger = logging.getLogger(__name__)


class FilterPhase(Enum):
    """Lifecycle of the channel buffers."""
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"


@dataclass
class FilterSnapshot:
    """Point-in-time view of filter state."""
    phase: FilterPhase
    channel_count: Optional[int]
    time_constant: float
    sample_count: int
    elapsed: float
    estimated_rate: float
    window_length: int
    buffer_length: int
    
    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['phase'] = self.phase.value
        return data


class AdaptiveMedianFilter:
    """
    Median filter for multi-channel sample vectors at an unknown rate.
    
    The channel count is fixed by the first non-empty vector. Later
    vectors of a different length raise ChannelCountMismatchError.
    
    Settings are read from self.config on every call, so changing
    config.time_constant (or calling configure()) applies to the next
    process() call.
    
    Not thread-safe; callers sharing an instance must serialize access.
    """
    
    def __init__(
        self,
        time_constant: Optional[float] = None,
        clock: Optional[Clock] = None,
        config: Optional[FilterConfig] = None
    ):
        """
        Initialize the filter.
        
        Args:
            time_constant: Smoothing window in seconds; when given, the
                           filter works on a copy of config with this value
            clock: Zero-argument callable returning seconds
                   (defaults to a monotonic wall clock)
            config: Filter settings, read on every call; defaults to FilterConfig()
        """
        config = config if config is not None else FilterConfig()
        if time_constant is not None:
            config = replace(config, time_constant=validate_time_constant(time_constant))
        self.config = config
        self.clock: Clock = clock if clock is not None else MonotonicClock()
        
        self._rate = RateEstimator(initial_rate=self.config.initial_rate)
        self._buffers: Optional[ChannelBufferSet] = None
        self._window_length = 0
    
    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    
    @property
    def time_constant(self) -> float:
        return self.config.time_constant
    
    def configure(self, time_constant: float) -> None:
        """
        Set the smoothing time constant.
        
        Takes effect on the next process() call.
        
        Args:
            time_constant: Seconds of history to keep (> 0)
        """
        value = validate_time_constant(time_constant)
        current = self.config.time_constant
        if value != current:
            logger.info("Time constant changed from %.3fs to %.3fs", current, value)
        self.config.time_constant = value
    
    set_time_constant = configure
    
    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    
    @property
    def phase(self) -> FilterPhase:
        if self._buffers is None:
            return FilterPhase.UNINITIALIZED
        return FilterPhase.RUNNING
    
    @property
    def channel_count(self) -> Optional[int]:
        return self._buffers.channel_count if self._buffers is not None else None
    
    @property
    def estimated_rate(self) -> float:
        return self._rate.estimated_rate
    
    @property
    def sample_count(self) -> int:
        return self._rate.sample_count
    
    @property
    def window_length(self) -> int:
        """Raw window length from the latest call (may be <= 0)."""
        return self._window_length
    
    @property
    def buffer_length(self) -> int:
        return self._buffers.length if self._buffers is not None else 0
    
    def snapshot(self) -> FilterSnapshot:
        return FilterSnapshot(
            phase=self.phase,
            channel_count=self.channel_count,
            time_constant=self.config.time_constant,
            sample_count=self._rate.sample_count,
            elapsed=self._rate.elapsed,
            estimated_rate=self._rate.estimated_rate,
            window_length=self._window_length,
            buffer_length=self.buffer_length,
        )
    
    def reset(self) -> None:
        """
        Restart rate estimation as if the session were new.
        
        With config.clear_buffers_on_reset (the default) the channel
        histories are dropped too and the next vector fixes a new channel
        count. Otherwise histories are kept; the restarted rate estimate
        shrinks them to a single sample on the next call.
        """
        self._rate.reset()
        self._window_length = 0
        
        if self.config.clear_buffers_on_reset:
            self._buffers = None
            logger.debug("Filter reset; channel buffers cleared")
        else:
            logger.debug("Filter reset; channel buffers kept (%d samples)", self.buffer_length)
    
    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    
    def process(self, samples: Sequence[float]) -> np.ndarray:
        """
        Add one sample vector and return the per-channel medians.
        
        An empty vector returns an empty array and leaves all state
        untouched, whatever the phase.
        
        Args:
            samples: One value per channel
        
        Returns:
            Median of each channel's windowed history, in channel order
        """
        values = np.asarray(samples, dtype=float)
        if values.ndim != 1:
            raise ValueError(f"Expected a 1-D sample vector, got shape {values.shape}")
        
        if values.size == 0:
            logger.debug("Ignoring empty sample vector")
            return np.empty(0, dtype=float)
        
        if self._buffers is not None:
            self._buffers.validate(values)
        time_constant = validate_time_constant(self.config.time_constant)
        
        rate = self._rate.update(self.clock())
        self._window_length = window_length(rate, time_constant)
        target = eviction_target(self._window_length, self.config.max_window_length)
        
        if self._buffers is None:
            self._buffers = ChannelBufferSet(values.size)
            logger.debug("Initialized %d channel buffer(s)", values.size)
        
        self._buffers.push(values, target)
        return self._buffers.medians()
    
    def __repr__(self) -> str:
        return (
            f"AdaptiveMedianFilter(time_constant={self.config.time_constant}, "
            f"phase={self.phase.value}, channels={self.channel_count})"
        )


def filter_series(
    timestamps: Sequence[float],
    samples: Sequence,
    time_constant: float = 1.0,
    config: Optional[FilterConfig] = None
) -> np.ndarray:
    """
    Convenience function to replay a recorded series through the filter.
    
    Args:
        timestamps: Sample times in seconds, shape (N,)
        samples: Sample values, shape (N, C) or (N,) for one channel
        time_constant: Smoothing window in seconds
        config: Optional filter settings
    
    Returns:
        Filtered values with the same shape as samples
    """
    t = np.asarray(timestamps, dtype=float)
    values = np.asarray(samples, dtype=float)
    
    single_channel = values.ndim == 1
    if single_channel:
        values = values.reshape(-1, 1)
    if values.ndim != 2:
        raise ValueError(f"Expected samples of shape (N,) or (N, C), got {values.shape}")
    if len(t) != len(values):
        raise ValueError(
            f"timestamps ({len(t)}) and samples ({len(values)}) differ in length"
        )
    
    clock = ManualClock()
    median_filter = AdaptiveMedianFilter(time_constant=time_constant, clock=clock, config=config)
    
    filtered = np.empty_like(values)
    for i, (ts, row) in enumerate(zip(t, values)):
        clock.set(ts)
        filtered[i] = median_filter.process(row)
    
    if single_channel:
        return filtered[:, 0]
    return filtered


if __name__ == "__main__":
    # Test the filter
    print("🔧 Testing Adaptive Median Filter")
    print("=" * 50)
    
    np.random.seed(42)
    rate_hz = 50.0
    n_samples = 500
    t = np.arange(n_samples) / rate_hz
    
    # Three noisy axes with occasional spikes
    signal = np.column_stack([
        np.sin(2 * np.pi * 0.2 * t),
        np.cos(2 * np.pi * 0.2 * t),
        np.full(n_samples, 9.81),
    ])
    noisy = signal + np.random.normal(0, 0.2, signal.shape)
    noisy[::37] += 5.0
    
    smoothed = filter_series(t, noisy, time_constant=0.5)
    
    print(f"Samples: {n_samples} at {rate_hz:.0f} Hz")
    print(f"Raw error (std):      {np.std(noisy - signal, axis=0).round(3).tolist()}")
    print(f"Smoothed error (std): {np.std(smoothed - signal, axis=0).round(3).tolist()}")
    
    print("\n✅ Adaptive median filter working!")
