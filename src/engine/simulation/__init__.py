"""Simulation subsystem — kinematic step and the host-owned tick clock."""
from .clock import SimulationClock
from .kinematics import SimulationStep, heading_band, jitter_fraction, speed_band

__all__ = [
    "SimulationClock",
    "SimulationStep",
    "heading_band",
    "jitter_fraction",
    "speed_band",
]
