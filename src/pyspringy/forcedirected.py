"""
Force-directed layout engine.

This module implements the ForceDirected class which provides:
- Lazily created Points and Springs for graph nodes and edges
- Coulomb repulsion between every pair of points
- Hooke's law attraction along edges
- Attraction toward the origin
- Damped semi-implicit Euler integration
- Termination when kinetic energy falls below a threshold
- Event system (start/tick/end events)
- Nearest-point and bounding-box queries

Repulsion is computed over all pairs every tick, so the cost of a tick
grows quadratically with the number of nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Hashable, Iterator, NamedTuple, Optional, TypedDict, Union
import logging

import numpy as np

from .config import LayoutConfig
from .graph import Edge, GraphLike, Node
from .physics import Point, Spring
from .vector import Vector

logger = logging.getLogger(__name__)


class RunState(IntEnum):
    """State of a layout run. Finished is terminal."""
    running = 0
    finished = 1


class EventType(IntEnum):
    """
    The layout fires three events:
    - start: first tick is about to run
    - tick: fired once per completed tick, listen to this to animate
    - end: run finished, either converged or stopped by max_ticks
    """
    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event dictionary passed to event listeners."""
    type: EventType
    tick: int
    energy: float
    converged: bool


@dataclass
class LayoutResult:
    """Outcome of a finished run."""
    converged: bool
    ticks: int
    energy: float


class Nearest(NamedTuple):
    """Node closest to a query position."""
    node: Node
    point: Point
    distance: float


class BoundingBox(NamedTuple):
    """Axis-aligned box given by its bottom-left and top-right corners."""
    bottomleft: Vector
    topright: Vector

    @property
    def width(self) -> float:
        return self.topright.x - self.bottomleft.x

    @property
    def height(self) -> float:
        return self.topright.y - self.bottomleft.y

    def contains(self, v: Vector) -> bool:
        """Check whether v lies inside the box (edges included)."""
        return (
            self.bottomleft.x <= v.x <= self.topright.x
            and self.bottomleft.y <= v.y <= self.topright.y
        )


class ForceDirected:
    """
    Spring-electrical layout of a graph.

    Preconditions (not validated): node masses > 0, damping in (0, 1],
    stiffness and repulsion >= 0. With damping >= 1 or constants that keep
    the system energetic the run may never converge; pass max_ticks to
    bound it.
    """

    DEFAULT_BOX = (Vector(-2.0, -2.0), Vector(2.0, 2.0))
    BOX_PADDING = 0.07

    def __init__(
        self,
        graph: GraphLike,
        stiffness: float,
        repulsion: float,
        damping: float,
        *,
        timestep: float = 0.03,
        energy_threshold: float = 0.01,
        max_ticks: Optional[int] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize layout.

        Args:
            graph: Graph to lay out
            stiffness: Spring constant
            repulsion: Repulsion (charge) constant
            damping: Velocity multiplier applied each tick
            timestep: Integration step
            energy_threshold: Kinetic energy below which the run converges
            max_ticks: Optional ceiling on ticks; the run then ends unconverged
            seed: Seed for random initial positions
        """
        self.graph = graph
        self.stiffness = stiffness
        self.repulsion = repulsion
        self.damping = damping
        self.timestep = timestep
        self.energy_threshold = energy_threshold
        self.max_ticks = max_ticks

        self.node_points: dict[Hashable, Point] = {}
        self.edge_springs: dict[Hashable, Spring] = {}

        self._rng = np.random.default_rng(seed)
        self._state = RunState.running
        self._tick_count = 0
        self._energy: Optional[float] = None
        self._result: Optional[LayoutResult] = None

        self.event: Optional[dict] = None

    @classmethod
    def from_config(cls, graph: GraphLike, config: LayoutConfig) -> ForceDirected:
        """Build a layout from a LayoutConfig."""
        return cls(
            graph,
            config.stiffness,
            config.repulsion,
            config.damping,
            timestep=config.timestep,
            energy_threshold=config.energy_threshold,
            max_ticks=config.max_ticks,
            seed=config.seed
        )

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def finished(self) -> bool:
        return self._state == RunState.finished

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def energy(self) -> Optional[float]:
        """Kinetic energy after the last tick, None before the first."""
        return self._energy

    @property
    def result(self) -> Optional[LayoutResult]:
        """Outcome of the run once finished."""
        return self._result

    # Events

    def on(self, e: Union[EventType, str], listener: Callable[[Event], None]) -> ForceDirected:
        """
        Subscribe a listener to an event.

        Args:
            e: Event type (EventType enum or string name)
            listener: Function to call when event fires

        Returns:
            self for method chaining
        """
        if self.event is None:
            self.event = {}

        if isinstance(e, str):
            e = EventType[e]
        self.event[e] = listener

        return self

    def trigger(self, e: Event) -> None:
        """Call the listener registered for the event's type, if any."""
        if self.event and e['type'] in self.event:
            self.event[e['type']](e)

    # Points and springs

    def point(self, node: Node) -> Point:
        """
        Get the point for a node, creating it at a random position on first use.

        Returns the same Point object on every call.
        """
        point = self.node_points.get(node.id)
        if point is None:
            mass = node.data.get('mass', 1.0)
            point = Point(Vector.random(self._rng), mass)
            self.node_points[node.id] = point
        return point

    def set_point(self, node: Node, point: Point) -> Point:
        """Use an explicit point for a node instead of a random one."""
        self.node_points[node.id] = point
        return point

    def position(self, node: Node) -> Vector:
        """Current position of a node."""
        return self.point(node).position

    def find_spring(self, node1: Node, node2: Node) -> Optional[Spring]:
        """
        Find a spring already created for an edge from node1 to node2.

        Returns:
            First cached spring among those edges, or None
        """
        for e in self.graph.get_edges(node1, node2):
            spring = self.edge_springs.get(e.id)
            if spring is not None:
                return spring
        return None

    def spring(self, edge: Edge) -> Spring:
        """
        Get the spring for an edge, creating it on first use.

        Parallel and reverse edges between the same node pair share the
        first edge's spring: they get a shared placeholder with zero
        stiffness, so the pair is pulled by one spring only.
        """
        spring = self.edge_springs.get(edge.id)
        if spring is not None:
            return spring

        existing = self.find_spring(edge.source, edge.target)
        if existing is not None:
            spring = Spring.shared(existing)
        else:
            existing = self.find_spring(edge.target, edge.source)
            if existing is not None:
                spring = Spring.shared(existing, reverse=True)
            else:
                length = edge.data.get('length', 1.0)
                spring = Spring(
                    self.point(edge.source),
                    self.point(edge.target),
                    length,
                    self.stiffness
                )

        self.edge_springs[edge.id] = spring
        return spring

    def each_node(self) -> Iterator[tuple[Node, Point]]:
        """Yield (node, point) for every node in graph order."""
        for n in list(self.graph.nodes):
            yield n, self.point(n)

    def each_edge(self) -> Iterator[tuple[Edge, Spring]]:
        """Yield (edge, spring) for every edge in graph order."""
        for e in list(self.graph.edges):
            yield e, self.spring(e)

    def each_spring(self) -> Iterator[Spring]:
        """Yield the spring of every edge in graph order."""
        for _, spring in self.each_edge():
            yield spring

    # Physics

    def apply_coulombs_law(self) -> None:
        """Push every pair of points apart."""
        points = [point for _, point in self.each_node()]
        for i, point1 in enumerate(points):
            for point2 in points[i + 1:]:
                d = point1.position.subtract(point2.position)
                # offset avoids huge forces at small distances
                distance = d.magnitude() + 0.1
                direction = d.normalise()

                force = direction.multiply(self.repulsion).divide(distance * distance * 2.0)
                point1.apply_force(force)
                point2.apply_force(-force)

    def apply_hookes_law(self) -> None:
        """Pull spring endpoints toward the spring's rest length."""
        for spring in self.each_spring():
            d = spring.point2.position.subtract(spring.point1.position)
            displacement = spring.length - d.magnitude()
            direction = d.normalise()

            spring.point1.apply_force(direction.multiply(spring.k * displacement * -0.5))
            spring.point2.apply_force(direction.multiply(spring.k * displacement * 0.5))

    def attract_to_centre(self) -> None:
        """Pull every point toward the origin."""
        for _, point in self.each_node():
            direction = point.position.multiply(-1.0)
            point.apply_force(direction.multiply(self.repulsion / 50.0))

    def update_velocity(self, timestep: float) -> None:
        """Integrate acceleration into velocity, damp it, and clear acceleration."""
        for _, point in self.each_node():
            point.velocity = point.velocity.add(point.acceleration.multiply(timestep)).multiply(self.damping)
            point.acceleration = Vector(0.0, 0.0)

    def update_position(self, timestep: float) -> None:
        """Integrate velocity into position."""
        for _, point in self.each_node():
            point.position = point.position.add(point.velocity.multiply(timestep))

    def total_energy(self) -> float:
        """Total kinetic energy of the system."""
        energy = 0.0
        for _, point in self.each_node():
            speed = point.velocity.magnitude()
            energy += 0.5 * point.mass * speed * speed
        return energy

    # Running

    def tick(self) -> RunState:
        """
        Run one simulation step.

        Applies the three force laws, integrates, then checks the energy
        threshold (and max_ticks). A finished run is left untouched.

        Returns:
            State after the step
        """
        if self._state == RunState.finished:
            return self._state

        if self._tick_count == 0:
            logger.debug(
                "Starting layout: %d nodes, %d edges",
                len(self.graph.nodes), len(self.graph.edges)
            )
            self.trigger({'type': EventType.start, 'tick': 0})

        self.apply_coulombs_law()
        self.apply_hookes_law()
        self.attract_to_centre()
        self.update_velocity(self.timestep)
        self.update_position(self.timestep)

        self._tick_count += 1
        self._energy = self.total_energy()

        self.trigger({
            'type': EventType.tick,
            'tick': self._tick_count,
            'energy': self._energy
        })

        if self._energy < self.energy_threshold:
            logger.debug(
                "Layout converged after %d ticks (energy %.6g)",
                self._tick_count, self._energy
            )
            self._finish(converged=True)
        elif self.max_ticks is not None and self._tick_count >= self.max_ticks:
            logger.warning(
                "Layout stopped after %d ticks without converging (energy %.6g)",
                self._tick_count, self._energy
            )
            self._finish(converged=False)

        return self._state

    def _finish(self, converged: bool) -> None:
        self._state = RunState.finished
        self._result = LayoutResult(converged, self._tick_count, self._energy)
        self.trigger({
            'type': EventType.end,
            'tick': self._tick_count,
            'energy': self._energy,
            'converged': converged
        })

    def ticks(self) -> Iterator[RunState]:
        """
        Step the layout incrementally, yielding the state after each tick.

        Stop iterating to cancel; the layout keeps its current positions.
        """
        while self._state == RunState.running:
            yield self.tick()

    def start(
        self,
        render: Optional[Callable[[ForceDirected], None]] = None,
        done: Optional[Callable[[ForceDirected], None]] = None
    ) -> LayoutResult:
        """
        Run the layout until it finishes.

        Without max_ticks this blocks until the energy threshold is reached,
        which may be never for poorly chosen constants.

        Args:
            render: Called with the layout after every tick
            done: Called with the layout once the run finishes

        Returns:
            The run's LayoutResult
        """
        if self._state == RunState.finished:
            raise RuntimeError("Layout already finished; create a new ForceDirected to run again")

        for _ in self.ticks():
            if render is not None:
                render(self)

        if done is not None:
            done(self)

        return self._result

    # Queries

    def nearest(self, pos: Vector) -> Optional[Nearest]:
        """
        Find the node whose point is nearest to pos.

        Ties go to the node that comes first in the graph.

        Returns:
            Nearest(node, point, distance), or None for an empty graph
        """
        best: Optional[Nearest] = None
        for n, point in self.each_node():
            distance = point.position.subtract(pos).magnitude()
            if best is None or distance < best.distance:
                best = Nearest(n, point, distance)
        return best

    def positions(self) -> dict[Hashable, Vector]:
        """Current position of every node keyed by node id."""
        return {n.id: point.position for n, point in self.each_node()}

    def positions_array(self) -> np.ndarray:
        """Current positions as an (n, 2) array in graph node order."""
        coords = [point.position.as_tuple() for _, point in self.each_node()]
        return np.array(coords, dtype=float).reshape(-1, 2)

    def bounding_box(self) -> BoundingBox:
        """
        Box covering every point, padded on both sides.

        Starts from the default box [(-2, -2), (2, 2)], grows it to cover
        all points, then pads each side by 7% of the grown width/height.
        """
        bottomleft = np.array(self.DEFAULT_BOX[0].as_tuple())
        topright = np.array(self.DEFAULT_BOX[1].as_tuple())

        coords = self.positions_array()
        if len(coords) > 0:
            bottomleft = np.minimum(bottomleft, coords.min(axis=0))
            topright = np.maximum(topright, coords.max(axis=0))

        padding = (topright - bottomleft) * self.BOX_PADDING
        low = bottomleft - padding
        high = topright + padding
        return BoundingBox(
            Vector(float(low[0]), float(low[1])),
            Vector(float(high[0]), float(high[1]))
        )


def generate_layout(
    graph: GraphLike,
    config: Optional[LayoutConfig] = None,
    render: Optional[Callable[[ForceDirected], None]] = None
) -> ForceDirected:
    """
    Lay out a graph with the given configuration and run it to completion.

    Args:
        graph: Graph to lay out
        config: Constants and run controls; defaults to LayoutConfig()
        render: Optional per-tick callback

    Returns:
        The finished layout, for reading positions
    """
    if config is None:
        config = LayoutConfig()

    layout = ForceDirected.from_config(graph, config)
    layout.start(render)

    logger.debug("layout edges: %r", layout.edge_springs)
    logger.debug("layout nodes: %r", layout.node_points)

    return layout
