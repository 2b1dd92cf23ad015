"""Demonstration of resolving a build order with the dependency graph.

Builds a small package graph, prints the order packages must be built in,
then shows how cycles are reported in strict mode and tolerated in circular
mode.
"""

from depgraph import CycleDetectedError, DependencyGraph, GraphValidator
from depgraph.log_config import bind_context, clear_context, configure_logging, get_logger

PACKAGES = {
    "app": ["web", "db"],
    "web": ["http", "templates"],
    "db": ["driver"],
    "http": [],
    "templates": [],
    "driver": [],
}


def build_graph(circular: bool = False) -> DependencyGraph:
    """Create a graph from the PACKAGES table."""
    graph = DependencyGraph(circular=circular)
    for name in PACKAGES:
        graph.add_node(name, {"name": name, "built": False})
    for name, deps in PACKAGES.items():
        for dep in deps:
            graph.add_dependency(name, dep)
    return graph


def main() -> None:
    configure_logging(level="INFO", json_logs=False)
    logger = get_logger(__name__)
    bind_context(demo="build-order")

    graph = build_graph()
    logger.info("build_order", order=graph.overall_order())
    logger.info("rebuild_after_driver_change", order=graph.dependants_of("driver"))

    # Introduce a cycle: driver now needs the app
    graph.add_dependency("driver", "app")
    try:
        graph.overall_order()
    except CycleDetectedError as e:
        logger.warning("build_blocked", cycle=e.cycle_path)

    tolerant = build_graph(circular=True)
    tolerant.add_dependency("driver", "app")
    logger.info("approximate_order", order=tolerant.overall_order())
    print(GraphValidator().validate(tolerant).summary())

    clear_context()


if __name__ == "__main__":
    main()
