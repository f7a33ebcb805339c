"""
Filtering Module
================
Adaptive-window streaming median filter for multi-channel sensor data.

Modules:
- clock: Injectable time sources (monotonic and manual)
- rate: Running-average sample rate estimation
- window: Rate x time constant -> window length
- buffers: Per-channel FIFO histories and percentile computation
- median_filter: Filter facade and offline replay helper
"""

from src.filtering.clock import (
    Clock,
    MonotonicClock,
    ManualClock
)

from src.filtering.rate import RateEstimator

from src.filtering.window import (
    window_length,
    eviction_target
)

from src.filtering.buffers import (
    ChannelBuffer,
    ChannelBufferSet,
    ChannelCountMismatchError,
    percentile,
    median
)

from src.filtering.median_filter import (
    AdaptiveMedianFilter,
    FilterPhase,
    FilterSnapshot,
    filter_series
)

__all__ = [
    # Clock
    'Clock',
    'MonotonicClock',
    'ManualClock',
    
    # Rate
    'RateEstimator',
    
    # Window
    'window_length',
    'eviction_target',
    
    # Buffers
    'ChannelBuffer',
    'ChannelBufferSet',
    'ChannelCountMismatchError',
    'percentile',
    'median',
    
    # Filter
    'AdaptiveMedianFilter',
    'FilterPhase',
    'FilterSnapshot',
    'filter_series',
]
