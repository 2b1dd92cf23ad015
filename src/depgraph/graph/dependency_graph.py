"""Dependency graph with ordered adjacency and topological queries.

This module provides the DependencyGraph class, which stores named nodes with
arbitrary payloads and the "depends on" edges between them, and answers
ordering queries (transitive dependencies, dependants and the overall order)
using the iterative traversal in ``depgraph.graph.traversal``.
"""

from typing import TYPE_CHECKING, Any

import structlog

from depgraph.graph.errors import NodeNotFoundError
from depgraph.graph.traversal import DepthFirstSearch

if TYPE_CHECKING:
    from depgraph.config import GraphConfig

logger = structlog.get_logger(__name__)

# Marks "no payload given" so falsy payloads (None, 0, "") are kept verbatim
_NO_DATA: Any = object()


class DependencyGraph:
    """Directed graph of dependencies between named nodes.

    An edge added with ``add_dependency("a", "b")`` means "a depends on b".
    Edges are kept in two insertion-ordered relations, outgoing (what a node
    depends on) and incoming (what depends on a node), so direct neighbours
    can be read in either direction without scanning the graph.

    By default any cycle met during an ordering query raises
    ``CycleDetectedError``. A graph created with ``circular=True`` tolerates
    cycles and still returns every node exactly once.

    Thread-safety:
        This class is NOT thread-safe. If the graph is shared between threads,
        protect all method calls with external synchronization
        (e.g., threading.Lock).

    Example:
        >>> graph = DependencyGraph()
        >>> graph.add_node("app")
        >>> graph.add_node("lib")
        >>> graph.add_dependency("app", "lib")
        >>> graph.overall_order()
        ['lib', 'app']
    """

    def __init__(self, circular: bool = False):
        """Initialize an empty dependency graph.

        Args:
            circular: Tolerate cycles in ordering queries instead of raising
        """
        self._circular = circular
        self._nodes: dict[str, Any] = {}
        self._outgoing: dict[str, dict[str, None]] = {}
        self._incoming: dict[str, dict[str, None]] = {}

        logger.debug("dependency_graph_initialized", circular=circular)

    @classmethod
    def from_config(cls, config: "GraphConfig") -> "DependencyGraph":
        """Create an empty graph using the options of a GraphConfig.

        Args:
            config: Loaded graph configuration

        Returns:
            A new, empty DependencyGraph
        """
        return cls(circular=config.circular)

    @property
    def circular(self) -> bool:
        """Whether cycles are tolerated by ordering queries."""
        return self._circular

    def size(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def nodes(self) -> list[str]:
        """Return all node IDs in insertion order."""
        return list(self._nodes)

    def add_node(self, node: str, data: Any = _NO_DATA) -> None:
        """Add a node to the graph.

        Adding a node that already exists does nothing: its payload and edges
        are left as they are.

        Args:
            node: Unique identifier for the node
            data: Payload to associate with the node. Defaults to the node ID
                when omitted; any value passed explicitly, including None, is
                stored as is.

        Example:
            >>> graph = DependencyGraph()
            >>> graph.add_node("a")
            >>> graph.get_node_data("a")
            'a'
        """
        if node in self._nodes:
            return

        self._nodes[node] = node if data is _NO_DATA else data
        self._outgoing[node] = {}
        self._incoming[node] = {}

    def remove_node(self, node: str) -> None:
        """Remove a node and every edge touching it.

        Removing a node that does not exist does nothing.

        Args:
            node: Identifier of the node to remove
        """
        if node not in self._nodes:
            return

        for dependant in self._incoming[node]:
            self._outgoing[dependant].pop(node, None)
        for dependency in self._outgoing[node]:
            self._incoming[dependency].pop(node, None)

        dependency_count = len(self._outgoing.pop(node))
        dependant_count = len(self._incoming.pop(node))
        del self._nodes[node]

        logger.debug(
            "node_removed",
            node=node,
            dependency_count=dependency_count,
            dependant_count=dependant_count,
        )

    def has_node(self, node: str) -> bool:
        """Check whether a node exists, regardless of its payload."""
        return node in self._nodes

    def get_node_data(self, node: str) -> Any:
        """Return the payload associated with a node.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        self._require(node)
        return self._nodes[node]

    def set_node_data(self, node: str, data: Any) -> None:
        """Replace the payload associated with a node.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        self._require(node)
        self._nodes[node] = data

    def add_dependency(self, from_node: str, to_node: str) -> None:
        """Record that ``from_node`` depends on ``to_node``.

        Adding an edge that already exists does nothing and keeps the
        original edge order.

        Args:
            from_node: The dependant node
            to_node: The node being depended on

        Raises:
            NodeNotFoundError: If either node does not exist

        Example:
            >>> graph = DependencyGraph()
            >>> graph.add_node("a")
            >>> graph.add_node("b")
            >>> graph.add_dependency("a", "b")
            >>> graph.direct_dependencies_of("a")
            ['b']
        """
        self._require(from_node)
        self._require(to_node)

        self._outgoing[from_node].setdefault(to_node, None)
        self._incoming[to_node].setdefault(from_node, None)

    def remove_dependency(self, from_node: str, to_node: str) -> None:
        """Remove the edge ``from_node`` -> ``to_node`` if it exists."""
        if from_node in self._outgoing:
            self._outgoing[from_node].pop(to_node, None)
        if to_node in self._incoming:
            self._incoming[to_node].pop(from_node, None)

    def direct_dependencies_of(self, node: str) -> list[str]:
        """Return the nodes ``node`` directly depends on, in insertion order.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        self._require(node)
        return list(self._outgoing[node])

    def direct_dependants_of(self, node: str) -> list[str]:
        """Return the nodes directly depending on ``node``, in insertion order.

        Raises:
            NodeNotFoundError: If the node does not exist
        """
        self._require(node)
        return list(self._incoming[node])

    direct_dependents_of = direct_dependants_of

    def dependencies_of(self, node: str, leaves_only: bool = False) -> list[str]:
        """Return every node ``node`` transitively depends on.

        The result is in dependency-first order: each node appears after all
        of the nodes it depends on. ``node`` itself is never included.

        Args:
            node: Node to start from
            leaves_only: Only include nodes that have no dependencies

        Returns:
            List of node IDs in topological order

        Raises:
            NodeNotFoundError: If the node does not exist
            CycleDetectedError: If a cycle is reachable and the graph is not circular

        Example:
            >>> graph = DependencyGraph()
            >>> for name in ("a", "b", "c"):
            ...     graph.add_node(name)
            >>> graph.add_dependency("a", "b")
            >>> graph.add_dependency("b", "c")
            >>> graph.dependencies_of("a")
            ['c', 'b']
        """
        return self._transitive(self._outgoing, node, leaves_only)

    def dependants_of(self, node: str, leaves_only: bool = False) -> list[str]:
        """Return every node that transitively depends on ``node``.

        Each node appears after all of the nodes that depend on it.

        Args:
            node: Node to start from
            leaves_only: Only include nodes that nothing depends on

        Returns:
            List of node IDs

        Raises:
            NodeNotFoundError: If the node does not exist
            CycleDetectedError: If a cycle is reachable and the graph is not circular
        """
        return self._transitive(self._incoming, node, leaves_only)

    dependents_of = dependants_of

    def entry_nodes(self) -> list[str]:
        """Return the nodes nothing depends on, in insertion order."""
        return [node for node, dependants in self._incoming.items() if not dependants]

    def overall_order(self, leaves_only: bool = False) -> list[str]:
        """Return every node in an order that satisfies all dependencies.

        Traversal is rooted at the entry nodes in insertion order. In circular
        mode, nodes not reached from any entry node (cyclic subgraphs with
        nothing outside depending on them) are then used as roots, again in
        insertion order, so every node is returned exactly once.

        Args:
            leaves_only: Only include nodes that have no dependencies

        Returns:
            List of node IDs in topological order

        Raises:
            CycleDetectedError: If the graph has a cycle and is not circular

        Example:
            >>> graph = DependencyGraph()
            >>> for name in ("a", "b", "c"):
            ...     graph.add_node(name)
            >>> graph.add_dependency("a", "b")
            >>> graph.overall_order()
            ['b', 'a', 'c']
        """
        if not self._nodes:
            return []

        if not self._circular:
            # Every node is a root here so cycles without an entry node are found
            cycle_check = DepthFirstSearch(self._outgoing)
            for node in self._nodes:
                cycle_check.visit(node)

        search = DepthFirstSearch(
            self._outgoing,
            circular=self._circular,
            leaves_only=leaves_only,
        )
        for node in self.entry_nodes():
            search.visit(node)

        if self._circular:
            for node in self._nodes:
                search.visit(node)

        logger.debug(
            "overall_order_resolved",
            node_count=len(self._nodes),
            result_count=len(search.result),
            leaves_only=leaves_only,
        )

        return search.result

    def get_stats(self) -> dict[str, int | bool]:
        """Get statistics about the current graph.

        Returns:
            Dictionary with graph statistics including:
                - total_nodes: Number of nodes
                - total_dependencies: Number of edges
                - entry_nodes: Number of nodes nothing depends on
                - circular: Whether cycles are tolerated
        """
        stats: dict[str, int | bool] = {
            "total_nodes": len(self._nodes),
            "total_dependencies": sum(len(deps) for deps in self._outgoing.values()),
            "entry_nodes": len(self.entry_nodes()),
            "circular": self._circular,
        }

        logger.debug("graph_stats_retrieved", **stats)

        return stats

    def copy(self) -> "DependencyGraph":
        """Create a copy of the graph.

        Nodes and edges are copied in their original order. Payloads are
        shared with the original graph, not copied.

        Returns:
            A new DependencyGraph with the same nodes, edges and circular flag

        Example:
            >>> graph = DependencyGraph()
            >>> graph.add_node("a")
            >>> graph_copy = graph.copy()
            >>> graph_copy.remove_node("a")
            >>> graph.has_node("a")
            True
        """
        new_graph = DependencyGraph(circular=self._circular)
        new_graph._nodes = dict(self._nodes)
        new_graph._outgoing = {node: dict(deps) for node, deps in self._outgoing.items()}
        new_graph._incoming = {node: dict(deps) for node, deps in self._incoming.items()}

        logger.debug("dependency_graph_copied", node_count=len(self._nodes))

        return new_graph

    def _require(self, node: str) -> None:
        if node not in self._nodes:
            raise NodeNotFoundError(node)

    def _transitive(
        self,
        edges: dict[str, dict[str, None]],
        node: str,
        leaves_only: bool,
    ) -> list[str]:
        self._require(node)

        search = DepthFirstSearch(edges, circular=self._circular, leaves_only=leaves_only)
        search.visit(node)

        result = search.result
        if node in result:
            result.remove(node)
        return result
