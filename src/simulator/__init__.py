"""
Simulator Module
================
Synthetic sensor data for demos and tests.
"""

from src.simulator.accel_simulator import (
    AXES,
    AccelSimulator,
    SimulatedRun,
    SimulationConfig
)

__all__ = [
    'AXES',
    'AccelSimulator',
    'SimulatedRun',
    'SimulationConfig',
]
