"""Iterative depth-first traversal producing post-order (topological) sequences.

The traversal keeps its own stack of frames instead of recursing, so the depth
of a dependency chain is bounded by available memory rather than by Python's
recursion limit. Each frame holds a node, a snapshot of its neighbours in the
traversed relation, and a cursor pointing at the next neighbour to visit.
"""

from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from enum import Enum

import structlog

from depgraph.graph.errors import CycleDetectedError

logger = structlog.get_logger(__name__)


class VisitState(Enum):
    """Visitation state of a node during a traversal.

    Attributes:
        UNVISITED: Not reached yet
        IN_PROGRESS: On the active path, neighbours still being explored
        DONE: Fully explored and already emitted (or filtered out)
    """

    UNVISITED = "unvisited"
    IN_PROGRESS = "in_progress"
    DONE = "done"


@dataclass(slots=True)
class _Frame:
    node: str
    neighbors: tuple[str, ...]
    cursor: int = 0


class DepthFirstSearch:
    """Post-order depth-first search over a single adjacency relation.

    Visitation state and the result sequence are shared across calls to
    ``visit()``, so one instance can be rooted at several start nodes and will
    never emit a node twice. Instances are meant to live for a single query.

    In strict mode (``circular=False``) revisiting a node that is still on the
    active path raises ``CycleDetectedError``. In circular mode the revisit is
    reported to ``on_cycle`` (if given) and the neighbour is skipped, as if it
    were already satisfied.

    Example:
        >>> edges = {"a": {"b": None}, "b": {"c": None}, "c": {}}
        >>> search = DepthFirstSearch(edges)
        >>> search.visit("a")
        >>> search.result
        ['c', 'b', 'a']
    """

    def __init__(
        self,
        edges: Mapping[str, Collection[str]],
        *,
        circular: bool = False,
        leaves_only: bool = False,
        on_cycle: Callable[[list[str]], None] | None = None,
    ):
        """Initialize the search.

        Args:
            edges: Mapping from node ID to its ordered neighbours in the relation
            circular: Tolerate cycles instead of raising
            leaves_only: Only emit nodes without neighbours in the relation
            on_cycle: Called with each cycle path found in circular mode
        """
        self._edges = edges
        self._circular = circular
        self._leaves_only = leaves_only
        self._on_cycle = on_cycle
        self._state: dict[str, VisitState] = {}
        self.result: list[str] = []

    def state_of(self, node: str) -> VisitState:
        """Return the visitation state of a node."""
        return self._state.get(node, VisitState.UNVISITED)

    def visit(self, start: str) -> None:
        """Traverse everything reachable from ``start`` not yet explored.

        Nodes are appended to ``result`` only after all of their neighbours,
        so ``result`` is a valid topological order for the relation.

        Args:
            start: Node ID to root the traversal at

        Raises:
            CycleDetectedError: If a cycle is found and circular mode is off
        """
        if self.state_of(start) is not VisitState.UNVISITED:
            return

        stack: list[_Frame] = []
        # Index of each in-progress node on the stack
        position: dict[str, int] = {}
        self._push(stack, position, start)

        while stack:
            frame = stack[-1]

            if frame.cursor < len(frame.neighbors):
                neighbor = frame.neighbors[frame.cursor]
                frame.cursor += 1
                state = self.state_of(neighbor)

                if state is VisitState.IN_PROGRESS:
                    cycle_path = [f.node for f in stack[position[neighbor] :]]
                    cycle_path.append(neighbor)
                    self._report_cycle(cycle_path)
                elif state is VisitState.UNVISITED:
                    self._push(stack, position, neighbor)
                continue

            stack.pop()
            del position[frame.node]
            self._state[frame.node] = VisitState.DONE
            if not self._leaves_only or not frame.neighbors:
                self.result.append(frame.node)

    def _push(self, stack: list[_Frame], position: dict[str, int], node: str) -> None:
        self._state[node] = VisitState.IN_PROGRESS
        position[node] = len(stack)
        stack.append(_Frame(node, tuple(self._edges[node])))

    def _report_cycle(self, cycle_path: list[str]) -> None:
        if not self._circular:
            logger.error("dependency_cycle_found", cycle_path=cycle_path)
            raise CycleDetectedError(cycle_path)

        logger.debug("dependency_cycle_tolerated", cycle_path=cycle_path)
        if self._on_cycle is not None:
            self._on_cycle(cycle_path)
