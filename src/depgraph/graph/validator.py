"""Graph validation with cycle collection and structural reporting.

Unlike the ordering queries on DependencyGraph, which stop at the first cycle,
the validator walks the whole graph and reports every cycle it meets along
with nodes that cannot be reached from any entry node.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from depgraph.graph.traversal import DepthFirstSearch

if TYPE_CHECKING:
    from depgraph.graph.dependency_graph import DependencyGraph

logger = structlog.get_logger(__name__)


@dataclass
class ValidationReport:
    """Report containing validation results for a dependency graph.

    Attributes:
        is_valid: Whether the graph passed all validation checks
        errors: List of error messages (critical issues)
        warnings: List of warning messages (potential issues)
        cycles: List of detected cycles, each a closed list of node IDs
        unreachable_nodes: Node IDs not reachable from any entry node
        isolated_nodes: Node IDs with no edges at all
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)
    unreachable_nodes: list[str] = field(default_factory=list)
    isolated_nodes: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Add an error message and mark validation as failed."""
        self.errors.append(message)
        self.is_valid = False
        logger.error("validation_error", message=message)

    def add_warning(self, message: str) -> None:
        """Add a warning message without failing validation."""
        self.warnings.append(message)
        logger.warning("validation_warning", message=message)

    def summary(self) -> str:
        """Generate a human-readable summary of the validation report."""
        lines = []
        lines.append(f"Validation Status: {'PASS' if self.is_valid else 'FAIL'}")
        lines.append(f"Errors: {len(self.errors)}")
        lines.append(f"Warnings: {len(self.warnings)}")
        lines.append(f"Cycles: {len(self.cycles)}")
        lines.append(f"Unreachable Nodes: {len(self.unreachable_nodes)}")
        lines.append(f"Isolated Nodes: {len(self.isolated_nodes)}")

        if self.errors:
            lines.append("\nErrors:")
            lines.extend(f"  - {error}" for error in self.errors)

        if self.warnings:
            lines.append("\nWarnings:")
            lines.extend(f"  - {warning}" for warning in self.warnings)

        if self.cycles:
            lines.append("\nCycles Detected:")
            for i, cycle in enumerate(self.cycles, 1):
                lines.append(f"  {i}. {' -> '.join(cycle)}")

        if self.unreachable_nodes:
            lines.append(f"\nUnreachable Nodes: {', '.join(self.unreachable_nodes)}")

        if self.isolated_nodes:
            lines.append(f"\nIsolated Nodes: {', '.join(self.isolated_nodes)}")

        return "\n".join(lines)


class GraphValidator:
    """Validator for dependency graphs with detailed error reporting.

    This class provides:
    - Collection of every cycle met during a full traversal
    - Detection of nodes unreachable from any entry node
    - Listing of isolated nodes

    Example:
        >>> graph = DependencyGraph(circular=True)
        >>> graph.add_node("a")
        >>> graph.add_node("b")
        >>> graph.add_dependency("a", "b")
        >>> graph.add_dependency("b", "a")
        >>> report = GraphValidator().validate(graph)
        >>> report.cycles
        [['a', 'b', 'a']]
    """

    def validate(self, graph: "DependencyGraph") -> ValidationReport:
        """Validate a dependency graph and generate a detailed report.

        The graph's own ``circular`` setting does not matter here: validation
        never raises on cycles, it records them.

        Args:
            graph: The DependencyGraph to validate

        Returns:
            ValidationReport containing all validation results
        """
        logger.info("starting_graph_validation", node_count=graph.size())

        report = ValidationReport()
        outgoing = {node: graph.direct_dependencies_of(node) for node in graph.nodes()}

        cycles = self._collect_cycles(outgoing)
        if cycles:
            report.cycles = cycles
            for cycle in cycles:
                report.add_error(f"Cycle detected: {' -> '.join(cycle)}")

        unreachable = self._find_unreachable_nodes(outgoing, graph.entry_nodes())
        if unreachable:
            report.unreachable_nodes = unreachable
            report.add_warning(
                f"Nodes not reachable from any entry node: {', '.join(unreachable)}",
            )

        report.isolated_nodes = [
            node
            for node in graph.nodes()
            if not outgoing[node] and not graph.direct_dependants_of(node)
        ]

        logger.info(
            "graph_validation_complete",
            is_valid=report.is_valid,
            error_count=len(report.errors),
            warning_count=len(report.warnings),
        )

        return report

    def _collect_cycles(self, outgoing: dict[str, list[str]]) -> list[list[str]]:
        """Find cycles with a tolerant traversal rooted at every node.

        Args:
            outgoing: Mapping from node ID to the nodes it depends on

        Returns:
            One closed cycle path per back edge met, in discovery order
        """
        cycles: list[list[str]] = []
        search = DepthFirstSearch(outgoing, circular=True, on_cycle=cycles.append)
        for node in outgoing:
            search.visit(node)

        if cycles:
            logger.debug("cycles_found", count=len(cycles))

        return cycles

    def _find_unreachable_nodes(
        self,
        outgoing: dict[str, list[str]],
        entry_nodes: list[str],
    ) -> list[str]:
        """Find nodes that no traversal from an entry node reaches.

        Such nodes only belong to cyclic subgraphs that nothing outside
        depends on.

        Args:
            outgoing: Mapping from node ID to the nodes it depends on
            entry_nodes: Nodes nothing depends on

        Returns:
            Unreachable node IDs in insertion order
        """
        reachable: set[str] = set()
        stack = list(entry_nodes)

        while stack:
            current = stack.pop()
            if current in reachable:
                continue

            reachable.add(current)
            stack.extend(dep for dep in outgoing[current] if dep not in reachable)

        unreachable = [node for node in outgoing if node not in reachable]

        if unreachable:
            logger.debug("unreachable_nodes_found", count=len(unreachable), nodes=unreachable)

        return unreachable
