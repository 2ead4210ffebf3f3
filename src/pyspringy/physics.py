"""
Simulation state for the force-directed layout.

A Point carries one node's position, velocity, acceleration and mass.
A Spring joins two Points with a rest length and stiffness.
"""

from __future__ import annotations

from enum import IntEnum

from .vector import Vector


class Point:
    """
    Per-node simulation state.

    Attributes:
        position: Current position
        mass: Node mass, must be > 0
        velocity: Current velocity, zero on creation
        acceleration: Force accumulated this tick divided by mass
    """

    def __init__(self, position: Vector, mass: float = 1.0):
        self.position = position
        self.mass = mass
        self.velocity = Vector(0.0, 0.0)
        self.acceleration = Vector(0.0, 0.0)

    def apply_force(self, force: Vector) -> None:
        """Accumulate a force for the current tick."""
        self.acceleration = self.acceleration.add(force.divide(self.mass))

    def __repr__(self) -> str:
        return (
            f"Point(position={self.position!r}, velocity={self.velocity!r}, "
            f"mass={self.mass!r})"
        )


class SpringKind(IntEnum):
    """
    Role of a spring in the layout.

    - active: exerts Hooke's law force between its endpoints
    - shared: placeholder for a parallel or reverse edge whose node pair
      already has an active spring; exerts no force
    """
    active = 0
    shared = 1


class Spring:
    """
    Spring between two points.

    Attributes:
        point1: First endpoint
        point2: Second endpoint
        length: Rest length
        k: Stiffness constant
        kind: Whether the spring is active or a shared placeholder
    """

    def __init__(
        self,
        point1: Point,
        point2: Point,
        length: float,
        k: float,
        kind: SpringKind = SpringKind.active
    ):
        self.point1 = point1
        self.point2 = point2
        self.length = length
        self.k = k
        self.kind = kind

    @classmethod
    def shared(cls, existing: Spring, reverse: bool = False) -> Spring:
        """
        Build a zero-force placeholder over the endpoints of an existing spring.

        Args:
            existing: Spring already connecting the node pair
            reverse: Swap endpoints, for an edge running the other way

        Returns:
            Spring with zero length and zero stiffness
        """
        if reverse:
            return cls(existing.point2, existing.point1, 0.0, 0.0, SpringKind.shared)
        return cls(existing.point1, existing.point2, 0.0, 0.0, SpringKind.shared)

    @property
    def is_active(self) -> bool:
        return self.kind == SpringKind.active

    def __repr__(self) -> str:
        return (
            f"Spring(length={self.length!r}, k={self.k!r}, "
            f"kind={self.kind.name})"
        )
