"""
PySpringy: force-directed graph layout

Nodes repel like charged particles, edges pull like springs, and every
node is drawn toward the origin until the system comes to rest.
"""

__version__ = "0.1.0"

from .vector import Vector
from .physics import Point, Spring, SpringKind
from .graph import Node, Edge, Graph, GraphLike
from .config import LayoutConfig
from .forcedirected import (
    ForceDirected,
    RunState,
    EventType,
    Event,
    LayoutResult,
    Nearest,
    BoundingBox,
    generate_layout,
)

__all__ = [
    "Vector",
    "Point", "Spring", "SpringKind",
    "Node", "Edge", "Graph", "GraphLike",
    "LayoutConfig",
    "ForceDirected", "RunState", "EventType", "Event",
    "LayoutResult", "Nearest", "BoundingBox",
    "generate_layout",
]
