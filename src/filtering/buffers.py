"""
Channel History Buffers
=======================
Per-channel FIFO histories and the median computed over them.

Every channel of a sample vector gets its own buffer. Buffers are
appended and evicted in lockstep, so all of them always hold the same
number of samples.
"""

from collections import deque
from typing import Deque, List, Optional, Sequence, Union

import numpy as np


class ChannelCountMismatchError(ValueError):
    """A sample vector does not match the channel count fixed at startup."""
    
    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {expected} channel(s), received {received}"
        )


def percentile(
    values: Sequence[float],
    q: float,
    axis: Optional[int] = None
) -> Union[float, np.ndarray]:
    """
    q-th percentile with linear interpolation between order statistics.
    
    With n values sorted ascending, rank = q / 100 * (n - 1). An integral
    rank selects that order statistic; otherwise the two neighbours are
    blended by the fractional part.
    
    Args:
        values: Sample values (any order)
        q: Percentile in [0, 100]
        axis: Axis to reduce along; None treats values as one flat set
        
    Returns:
        Percentile value, or an array of them when axis is given
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise ValueError("Cannot compute a percentile of an empty buffer")
    if not 0.0 <= q <= 100.0:
        raise ValueError(f"Percentile must be within [0, 100], got {q}")
    result = np.percentile(arr, q, axis=axis, method='linear')
    if axis is None:
        return float(result)
    return result


def median(values: Sequence[float]) -> float:
    """50th percentile of values."""
    return percentile(values, 50.0)


class ChannelBuffer:
    """Ordered history of one channel, oldest sample first."""
    
    def __init__(self):
        self._values: Deque[float] = deque()
    
    def __len__(self) -> int:
        return len(self._values)
    
    def append(self, value: float) -> None:
        self._values.append(float(value))
    
    def evict_to(self, length: int) -> int:
        """
        Drop the oldest samples until at most `length` remain.
        
        Returns:
            Number of samples removed
        """
        removed = 0
        while len(self._values) > length:
            self._values.popleft()
            removed += 1
        return removed
    
    def clear(self) -> None:
        self._values.clear()
    
    def values(self) -> np.ndarray:
        """Buffer contents in arrival order."""
        return np.fromiter(self._values, dtype=float, count=len(self._values))
    
    def median(self) -> float:
        return median(self.values())


class ChannelBufferSet:
    """
    Fixed set of channel buffers that move in lockstep.
    
    The channel count is fixed at construction; a vector of any other
    length is rejected before any buffer is touched.
    """
    
    def __init__(self, channel_count: int):
        if channel_count < 1:
            raise ValueError(f"channel_count must be >= 1, got {channel_count}")
        self._buffers: List[ChannelBuffer] = [
            ChannelBuffer() for _ in range(channel_count)
        ]
    
    @property
    def channel_count(self) -> int:
        return len(self._buffers)
    
    @property
    def length(self) -> int:
        """Common length of all buffers."""
        return len(self._buffers[0])
    
    def __len__(self) -> int:
        return self.channel_count
    
    def __getitem__(self, channel: int) -> ChannelBuffer:
        return self._buffers[channel]
    
    def validate(self, samples: Sequence[float]) -> None:
        """Raise ChannelCountMismatchError unless samples fits this set."""
        if len(samples) != self.channel_count:
            raise ChannelCountMismatchError(self.channel_count, len(samples))
    
    def push(self, samples: Sequence[float], target: int) -> None:
        """
        Append one sample vector and evict down to the target length.
        
        Args:
            samples: One value per channel, in channel order
            target: Maximum buffer length after eviction (>= 1)
        """
        self.validate(samples)
        
        for buffer, value in zip(self._buffers, samples):
            buffer.append(value)
            buffer.evict_to(target)
    
    def medians(self) -> np.ndarray:
        """Median of every buffer, in channel order."""
        history = np.stack([buffer.values() for buffer in self._buffers])
        return percentile(history, 50.0, axis=1)
    
    def clear(self) -> None:
        for buffer in self._buffers:
            buffer.clear()
