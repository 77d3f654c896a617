"""Graph engine and the algorithms that run over it."""

from antgraph.infrastructure.graph.engine import GraphStore, Vertex
from antgraph.infrastructure.graph.interference import (
    InterferencePoint,
    InterferenceReport,
    map_interference,
)
from antgraph.infrastructure.graph.intersections import (
    Intersection,
    IntersectionReport,
    find_intersections,
)
from antgraph.infrastructure.graph.paths import (
    PathEnumeration,
    enumerate_paths,
    iter_simple_paths,
)
from antgraph.infrastructure.graph.traversal import (
    breadth_first_search,
    depth_first_search,
)

__all__ = [
    "GraphStore",
    "InterferencePoint",
    "InterferenceReport",
    "Intersection",
    "IntersectionReport",
    "PathEnumeration",
    "Vertex",
    "breadth_first_search",
    "depth_first_search",
    "enumerate_paths",
    "find_intersections",
    "iter_simple_paths",
    "map_interference",
]
