"""
Window Sizing
=============
Converts an estimated sample rate and a time constant into the number of
samples each channel keeps.

window_length = int(rate * time_constant)
"""

import math
from typing import Optional


def window_length(rate: float, time_constant: float) -> int:
    """
    Number of samples covering time_constant seconds at the given rate.
    
    Truncates toward zero. A non-finite product resolves to 0.
    
    Args:
        rate: Estimated sample rate in Hz
        time_constant: Smoothing time constant in seconds
        
    Returns:
        Raw window length, possibly 0 or negative
    """
    product = rate * time_constant
    if not math.isfinite(product):
        return 0
    return int(product)


def eviction_target(length: int, max_length: Optional[int] = None) -> int:
    """
    Buffer length to evict down to for a raw window length.
    
    A median needs at least one sample, so anything below 1 becomes 1.
    
    Args:
        length: Raw window length from window_length()
        max_length: Optional upper bound on buffer length
        
    Returns:
        Target length >= 1
    """
    target = max(length, 1)
    if max_length is not None:
        target = min(target, max(max_length, 1))
    return target
