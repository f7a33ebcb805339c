"""
Accelerometer Simulator
=======================
Synthetic three-axis accelerometer data for demos and tests.
Produces a slow motion signal plus gravity, Gaussian noise, random
spikes and a jittered sample interval.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple


AXES = ("x", "y", "z")


@dataclass
class SimulationConfig:
    """Configuration for a simulated accelerometer run."""
    
    rate_hz: float = 50.0            # nominal delivery rate
    duration_seconds: float = 10.0
    rate_jitter: float = 0.0         # +/- fraction of the nominal interval
    
    noise_std: float = 0.05          # m/s^2, per-axis Gaussian noise
    spike_probability: float = 0.02  # chance a sample carries a spike
    spike_magnitude: float = 4.0     # m/s^2
    gravity: float = 9.81            # m/s^2 on the z axis
    
    seed: Optional[int] = None
    
    def __post_init__(self):
        if self.rate_hz <= 0:
            raise ValueError(f"rate_hz must be > 0, got {self.rate_hz}")
        if not 0.0 <= self.rate_jitter < 1.0:
            raise ValueError(f"rate_jitter must be within [0, 1), got {self.rate_jitter}")
        if not 0.0 <= self.spike_probability <= 1.0:
            raise ValueError(f"spike_probability must be within [0, 1], got {self.spike_probability}")


@dataclass
class SimulatedRun:
    """All samples of a simulated run."""
    timestamps: np.ndarray = field(repr=False)   # (N,)
    samples: np.ndarray = field(repr=False)      # (N, 3) with noise and spikes
    clean: np.ndarray = field(repr=False)        # (N, 3) motion + gravity only
    spike_mask: np.ndarray = field(repr=False)   # (N, 3) bool
    
    @property
    def sample_count(self) -> int:
        return len(self.timestamps)
    
    @property
    def spike_count(self) -> int:
        return int(self.spike_mask.sum())
    
    @property
    def mean_rate_hz(self) -> float:
        if self.sample_count < 2:
            return 0.0
        return (self.sample_count - 1) / (self.timestamps[-1] - self.timestamps[0])


class AccelSimulator:
    """Generates jittered, noisy three-axis acceleration samples."""
    
    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config if config is not None else SimulationConfig()
    
    def motion(self, t: np.ndarray) -> np.ndarray:
        """Noise-free acceleration at times t, shape (len(t), 3)."""
        return np.column_stack([
            0.5 * np.sin(2 * np.pi * 0.25 * t),
            0.3 * np.cos(2 * np.pi * 0.15 * t),
            np.full(len(t), self.config.gravity),
        ])
    
    def timestamps(self, rng: np.random.Generator) -> np.ndarray:
        """Sample times from 0 to duration with a jittered interval."""
        dt = 1.0 / self.config.rate_hz
        n_samples = int(self.config.duration_seconds * self.config.rate_hz)
        
        if self.config.rate_jitter > 0:
            jitter = rng.uniform(-self.config.rate_jitter, self.config.rate_jitter, n_samples)
            intervals = dt * (1.0 + jitter)
        else:
            intervals = np.full(n_samples, dt)
        
        # First sample at t=0
        return np.concatenate([[0.0], np.cumsum(intervals[:-1])]) if n_samples else np.array([])
    
    def simulate(self) -> SimulatedRun:
        """Generate a complete run."""
        rng = np.random.default_rng(self.config.seed)
        
        t = self.timestamps(rng)
        clean = self.motion(t)
        noisy = clean + rng.normal(0.0, self.config.noise_std, clean.shape)
        
        spike_mask = rng.random(clean.shape) < self.config.spike_probability
        signs = rng.choice([-1.0, 1.0], size=clean.shape)
        noisy[spike_mask] += signs[spike_mask] * self.config.spike_magnitude
        
        return SimulatedRun(timestamps=t, samples=noisy, clean=clean, spike_mask=spike_mask)
    
    def generate(self) -> Iterator[Tuple[float, np.ndarray]]:
        """
        Generate samples one at a time.
        
        Yields:
            (timestamp, sample vector of length 3)
        """
        run = self.simulate()
        for ts, sample in zip(run.timestamps, run.samples):
            yield float(ts), sample
    
    def generate_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate a run as plain arrays.
        
        Returns:
            Tuple of (timestamps (N,), samples (N, 3))
        """
        run = self.simulate()
        return run.timestamps, run.samples


def main():
    """Test the simulator."""
    print("📈 Accelerometer Simulator")
    print("=" * 60)
    
    config = SimulationConfig(rate_hz=100.0, duration_seconds=2.0, rate_jitter=0.2, seed=7)
    run = AccelSimulator(config).simulate()
    
    print(f"\nConfiguration:")
    print(f"  Nominal rate: {config.rate_hz} Hz (jitter ±{config.rate_jitter:.0%})")
    print(f"  Duration: {config.duration_seconds}s")
    
    print(f"\n  Generated {run.sample_count:,} samples")
    print(f"  Mean delivery rate: {run.mean_rate_hz:.1f} Hz")
    print(f"  Spikes: {run.spike_count}")
    for i, axis in enumerate(AXES):
        print(f"    {axis}: mean={run.samples[:, i].mean():.3f} std={run.samples[:, i].std():.3f}")
    
    print("\n✅ Simulator working!")


if __name__ == "__main__":
    main()
