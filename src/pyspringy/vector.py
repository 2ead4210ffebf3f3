"""
Immutable 2D vector used by the physics model.

Every operation returns a new Vector. Division by zero yields the zero
vector instead of raising, so normalising a zero-length vector is safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import math

import numpy as np


@dataclass(frozen=True)
class Vector:
    """2D vector value."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None) -> Vector:
        """
        Random vector with each coordinate uniform in [-5, 5).

        Args:
            rng: Optional numpy generator; a fresh unseeded one is used otherwise

        Returns:
            New random Vector
        """
        if rng is None:
            rng = np.random.default_rng()
        x, y = rng.uniform(-5.0, 5.0, size=2)
        return cls(float(x), float(y))

    def add(self, v2: Vector) -> Vector:
        return Vector(self.x + v2.x, self.y + v2.y)

    def subtract(self, v2: Vector) -> Vector:
        return Vector(self.x - v2.x, self.y - v2.y)

    def multiply(self, n: float) -> Vector:
        return Vector(self.x * n, self.y * n)

    def divide(self, n: float) -> Vector:
        """Scale by 1/n; the zero vector when n is 0."""
        if n == 0:
            return Vector(0.0, 0.0)
        return Vector(self.x / n, self.y / n)

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normal(self) -> Vector:
        """Perpendicular vector (90 degrees counter-clockwise)."""
        return Vector(-self.y, self.x)

    def normalise(self) -> Vector:
        """Unit vector in the same direction, or zero for a zero vector."""
        return self.divide(self.magnitude())

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector) -> Vector:
        return self.subtract(other)

    def __mul__(self, scalar: float) -> Vector:
        return self.multiply(scalar)

    def __rmul__(self, scalar: float) -> Vector:
        return self.multiply(scalar)

    def __truediv__(self, scalar: float) -> Vector:
        return self.divide(scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)
