"""Dependency graph with deterministic topological ordering and cycle detection."""

from depgraph.config import GraphConfig, load_config
from depgraph.graph import (
    CycleDetectedError,
    DependencyGraph,
    DependencyGraphError,
    GraphValidator,
    NodeNotFoundError,
    ValidationReport,
)

__version__ = "1.0.0"

__all__ = [
    "CycleDetectedError",
    "DependencyGraph",
    "DependencyGraphError",
    "GraphConfig",
    "GraphValidator",
    "NodeNotFoundError",
    "ValidationReport",
    "load_config",
]
