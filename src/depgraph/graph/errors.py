"""Exceptions raised by dependency graph operations.

Callers can catch ``DependencyGraphError`` for any graph failure, or branch on
``NodeNotFoundError`` versus ``CycleDetectedError``.
"""


class DependencyGraphError(Exception):
    """Base class for all dependency graph errors."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the error
        """
        super().__init__(message)
        self.message = message


class NodeNotFoundError(DependencyGraphError):
    """Exception raised when an operation references a node that does not exist.

    Attributes:
        node: The missing node ID
    """

    def __init__(self, node: str):
        """Initialize the exception for a missing node.

        Args:
            node: The node ID that was not found in the graph
        """
        super().__init__(f"Node does not exist: {node}")
        self.node = node


class CycleDetectedError(DependencyGraphError):
    """Exception raised when a cycle is detected in the dependency graph.

    A cycle means that nodes have circular dependencies, making it impossible
    to determine a valid topological order.

    Attributes:
        cycle_path: Node IDs forming the cycle, the first ID repeated at the end
    """

    def __init__(self, cycle_path: list[str]):
        """Initialize the exception with the cycle that was found.

        Args:
            cycle_path: Ordered node IDs of the cycle walk, e.g. ["a", "b", "a"]

        Example:
            >>> err = CycleDetectedError(["a", "b", "c", "a"])
            >>> err.message
            'Dependency Cycle Found: a -> b -> c -> a'
        """
        super().__init__("Dependency Cycle Found: " + " -> ".join(cycle_path))
        self.cycle_path = list(cycle_path)
