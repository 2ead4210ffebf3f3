"""
Configuration for force-directed layout runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["LayoutConfig"]


@dataclass
class LayoutConfig:
    """Physical constants and run controls for ForceDirected."""

    # Force constants
    stiffness: float = 400.0  # Spring constant for Hooke's law
    repulsion: float = 400.0  # Charge constant for Coulomb repulsion
    damping: float = 0.5  # Velocity multiplier per tick, in (0, 1]

    # Integration
    timestep: float = 0.03

    # Convergence
    energy_threshold: float = 0.01  # Stop when kinetic energy below this
    max_ticks: Optional[int] = None  # Stop unconverged after this many ticks (None = never)

    # Seed for random initial placement (None = unseeded)
    seed: Optional[int] = None
