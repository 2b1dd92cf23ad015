"""Graph module for dependency management and topological ordering.

This module provides the DependencyGraph class, the iterative depth-first
traversal it is built on, and a validator reporting cycles and unreachable
nodes.
"""

from depgraph.graph.dependency_graph import DependencyGraph
from depgraph.graph.errors import CycleDetectedError, DependencyGraphError, NodeNotFoundError
from depgraph.graph.traversal import DepthFirstSearch, VisitState
from depgraph.graph.validator import GraphValidator, ValidationReport

__all__ = [
    "CycleDetectedError",
    "DependencyGraph",
    "DependencyGraphError",
    "DepthFirstSearch",
    "GraphValidator",
    "NodeNotFoundError",
    "ValidationReport",
    "VisitState",
]
